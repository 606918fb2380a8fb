#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Wicket markup scanning
======================
Directive syntax understood by the composer:

  <!-- extend-page="Parent.html" with="a: 1, b: 2" -->
  <wicket:extend> ... </wicket:extend>        (or wicket:panel / wicket:dialog)

  <!-- include-panel="SomePanel.html" title="Hi" -->

  <wicket:head> ... </wicket:head>            collected while climbing
  <!-- wicket-head -->                        where collected heads land
  <wicket:child></wicket:child>               where a child is grafted

Scanners return the leftmost directive as a frozen span so callers can
splice by offset instead of re-running a pattern replace.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from wicketmock.services.errors import MissingChildSlot

CHILD_SLOT = "<wicket:child></wicket:child>"
HEAD_PLACEHOLDER = "<!-- wicket-head -->"
BLOCK_KINDS = ("extend", "panel", "dialog")


# -----------------------------------------------------------------------------
# Directive spans
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ExtendDirective:
    start: int
    end: int
    ancestor: str
    with_clause: Optional[str]
    kind: str
    content: str


@dataclass(frozen=True)
class IncludeDirective:
    start: int
    end: int
    panel: str
    attributes: str

    def splice(self, markup: str, replacement: str) -> str:
        return markup[:self.start] + replacement + markup[self.end:]


_EXTEND_OPEN_RE = re.compile(
    r'<!-- extend-page="(?P<ancestor>[^"]*)"(?P<with> with="[^"]*")? -->\r?\n'
    r'<wicket:(?P<kind>extend|panel|dialog)[^>]*>'
)
_BLOCK_CLOSE_RE = re.compile(r"</wicket:(?:extend|panel|dialog)>")
_INCLUDE_RE = re.compile(r'<!-- include-panel="(?P<panel>[^"]+)"(?P<attrs>[^\n]*?) -->')


def find_extend(markup: str) -> Optional[ExtendDirective]:
    """Leftmost extend directive whose block is closed somewhere after it.

    The block content runs to the *last* closing extend/panel/dialog tag,
    so nested wicket blocks inside the child stay intact.
    """
    for opening in _EXTEND_OPEN_RE.finditer(markup):
        close = None
        for close in _BLOCK_CLOSE_RE.finditer(markup, opening.end()):
            pass
        if close is None:
            continue
        return ExtendDirective(
            start=opening.start(),
            end=close.end(),
            ancestor=opening.group("ancestor"),
            with_clause=(opening.group("with") or "").strip() or None,
            kind=opening.group("kind"),
            content=markup[opening.end():close.start()],
        )
    return None


def find_include(markup: str, pos: int = 0) -> Optional[IncludeDirective]:
    """Leftmost include-panel directive at or after offset *pos*."""
    m = _INCLUDE_RE.search(markup, pos)
    if not m:
        return None
    return IncludeDirective(
        start=m.start(),
        end=m.end(),
        panel=m.group("panel"),
        attributes=m.group("attrs"),
    )


# -----------------------------------------------------------------------------
# Inheritance grafting
# -----------------------------------------------------------------------------

def graft_child(ancestor_markup: str, child_content: str, ancestor: Optional[str] = None) -> str:
    """Put *child_content* in place of the first child slot of the ancestor."""
    idx = ancestor_markup.find(CHILD_SLOT)
    if idx < 0:
        raise MissingChildSlot(f"Parent page has no {CHILD_SLOT}", fragment=ancestor)
    return ancestor_markup[:idx] + child_content + ancestor_markup[idx + len(CHILD_SLOT):]


# -----------------------------------------------------------------------------
# Head contributions
# -----------------------------------------------------------------------------

_HEAD_RE = re.compile(r"<wicket:head>(.*?)</wicket:head>", re.DOTALL)


def collect_head(markup: str, accumulator: list[str]) -> None:
    """Append the inner text of the first ``<wicket:head>`` region, if any."""
    m = _HEAD_RE.search(markup)
    if m:
        accumulator.append(m.group(1))


def splice_head(markup: str, accumulator: list[str]) -> str:
    """Replace the head placeholder with the collected heads.

    Without a placeholder the markup comes back unchanged and the collected
    heads are dropped.
    """
    idx = markup.find(HEAD_PLACEHOLDER)
    if idx < 0:
        return markup
    return markup[:idx] + "\n".join(accumulator) + markup[idx + len(HEAD_PLACEHOLDER):]


# -----------------------------------------------------------------------------
# Cleanup
# -----------------------------------------------------------------------------

_WICKET_TAG_RE = re.compile(r"</?_?wicket:[^>]*>", re.IGNORECASE)
_WICKET_ATTR_RE = re.compile(
    r"""\s?(?<![\w:-])_?wicket:[\w-]+(?:="[^"]*"|='[^']*')?""",
    re.IGNORECASE,
)


def strip_wicket(markup: str) -> str:
    """Remove every wicket tag and wicket attribute from *markup*.

    Runs to a fixed point so that stripping is idempotent even when removing
    one tag joins the text around it into another.
    """
    while True:
        stripped = _WICKET_ATTR_RE.sub("", _WICKET_TAG_RE.sub("", markup))
        if stripped == markup:
            return stripped
        markup = stripped


# -----------------------------------------------------------------------------
