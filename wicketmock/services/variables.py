#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Variables
=========
A render pass carries one ``VariableSet``: an ordered ``str -> str`` mapping
seeded from the query string, extended by ``with="..."`` defaults while the
extend chain is climbed, and overridden per panel by include attributes.

Placeholders use square brackets so they never collide with ``<wicket:...>``
markup or HTML comments:

  [name]          raw value
  [%- name %]     raw value
  [%= name %]     HTML-escaped value
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import html as _html
import re
from typing import Iterable, Literal, Mapping, Optional

from wicketmock.services.errors import MalformedVariableDeclaration, UndefinedVariable

VariableSet = dict[str, str]
UndefinedPolicy = Literal["empty", "keep", "strict"]


# -----------------------------------------------------------------------------
# Parsing
# -----------------------------------------------------------------------------

_INLINE_VAR_RE = re.compile(r'(?<!\S)(\w+)="([^"]*)"')
_WITH_CLAUSE_RE = re.compile(r'with="([^"]*)"')


def extract_inline_variables(attributes: Optional[str]) -> VariableSet:
    """Parse ``a="1" b="two"`` into ``{"a": "1", "b": "two"}``.

    Anything that is not a double-quoted pair is ignored, so malformed or
    empty input yields an empty set.
    """
    if not attributes:
        return {}
    return {m.group(1): m.group(2) for m in _INLINE_VAR_RE.finditer(attributes)}


def extract_extend_variables(clause: Optional[str]) -> list[tuple[str, str]]:
    """Parse ``with="n1: v1, n2: v2"`` (or just ``n1: v1, n2: v2``) into pairs.

    Every comma-separated segment must split on ``:`` into exactly two parts.
    """
    if not clause:
        return []
    m = _WITH_CLAUSE_RE.search(clause)
    body = m.group(1) if m else clause
    if not body.strip():
        return []

    pairs: list[tuple[str, str]] = []
    for segment in body.split(","):
        parts = segment.split(":")
        if len(parts) != 2:
            raise MalformedVariableDeclaration(f"Wrong variable definition in {clause}")
        pairs.append((parts[0].strip(), parts[1].strip()))
    return pairs


# -----------------------------------------------------------------------------
# Merging
# -----------------------------------------------------------------------------

def merge_first_wins(base: VariableSet, additions: Iterable[tuple[str, str]] | Mapping[str, str]) -> VariableSet:
    """Add entries of *additions* to *base* in place, never overwriting."""
    items = additions.items() if isinstance(additions, Mapping) else additions
    for name, value in items:
        if name not in base:
            base[name] = value
    return base


def merge_override_wins(inherited: Mapping[str, str], local: Mapping[str, str]) -> VariableSet:
    """New set where *local* shadows *inherited*; neither input is modified."""
    merged = dict(inherited)
    merged.update(local)
    return merged


# -----------------------------------------------------------------------------
# Substitution
# -----------------------------------------------------------------------------

_PLACEHOLDER_RE = re.compile(
    r"\[(?:%(?P<mode>[=-])\s*(?P<tagged>[A-Za-z_][\w.]*)\s*%|(?P<bare>[A-Za-z_][\w.]*))\]"
)


def render(markup: str, variables: Mapping[str, str], undefined: UndefinedPolicy = "empty") -> str:
    """Replace every placeholder in *markup* with its value from *variables*.

    Unknown names render as ``""`` (``empty``), stay untouched (``keep``) or
    raise ``UndefinedVariable`` (``strict``).
    """
    def _replace(m: re.Match) -> str:
        name = m.group("tagged") or m.group("bare")
        if name not in variables:
            if undefined == "keep":
                return m.group(0)
            if undefined == "strict":
                raise UndefinedVariable(f"Variable '{name}' is not defined")
            return ""
        value = str(variables[name])
        if m.group("mode") == "=":
            return _html.escape(value)
        return value

    return _PLACEHOLDER_RE.sub(_replace, markup)


# -----------------------------------------------------------------------------
