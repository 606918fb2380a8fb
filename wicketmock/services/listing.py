#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Fragment listings for the /pages, /panels and /dialogs index routes.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path


# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FragmentKind:
    name: str
    pattern: re.Pattern
    route: str
    title: str


KINDS: dict[str, FragmentKind] = {
    "page":   FragmentKind("page",   re.compile(r"Page\.html"),   "pages",   "Pages"),
    "panel":  FragmentKind("panel",  re.compile(r"Panel\.html"),  "panels",  "Panels"),
    "dialog": FragmentKind("dialog", re.compile(r"Dialog\.html"), "dialogs", "Dialogs"),
}

ROUTE_KINDS: dict[str, FragmentKind] = {k.route: k for k in KINDS.values()}


# -----------------------------------------------------------------------------

def list_fragments(scope: Path, kind: FragmentKind) -> list[str]:
    """Paths (relative to *scope*, POSIX style) of every file of *kind*."""
    if not scope.is_dir():
        return []
    found = []
    for path in scope.rglob("*"):
        if not path.is_file():
            continue
        rel = path.relative_to(scope).as_posix()
        if kind.pattern.search(rel):
            found.append(rel)
    return sorted(found)


def fragment_url(kind: FragmentKind, rel_path: str) -> str:
    return f"/{kind.route}/{rel_path}"


# -----------------------------------------------------------------------------
