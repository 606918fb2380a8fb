#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Composer
========
Turns a fragment name plus query variables into finished HTML:

  1. resolve the fragment
  2. climb the extend chain, grafting each child into its ancestor's
     ``<wicket:child></wicket:child>`` and collecting ``<wicket:head>`` blocks
  3. splice every ``include-panel`` directive with the panel's own rendering
  4. strip wicket tags and attributes
  5. put the collected heads at ``<!-- wicket-head -->``

A ``Composer`` holds no per-request state; one instance can serve
concurrent render passes as long as they share a thread-safe resolver.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping, Optional, Union

from wicketmock.core.logs import timed
from wicketmock.services import markup as wm
from wicketmock.services.errors import (
    AncestorNotFound,
    CompositionError,
    CyclicTemplateReference,
    PanelNotFound,
)
from wicketmock.services.fragments import FragmentResolver
from wicketmock.services.variables import (
    UndefinedPolicy,
    VariableSet,
    extract_extend_variables,
    extract_inline_variables,
    merge_first_wins,
    merge_override_wins,
    render as substitute,
)

log = logging.getLogger(__name__)

# One link of an extend chain or panel nesting: (fragment name, resolved path)
_Link = tuple[str, Union[Path, str]]


# -----------------------------------------------------------------------------

class Composer:

    def __init__(
        self,
        resolver: FragmentResolver,
        undefined: UndefinedPolicy = "empty",
        max_depth: int = 64,
        verbose: bool = False,
    ) -> None:
        self.resolver = resolver
        self.undefined = undefined
        self.max_depth = max_depth
        self.verbose = verbose

    # ── public entry points ───────────────────────────────────────────────

    def render(self, name: str, query_variables: Optional[Mapping[str, str]] = None) -> Optional[str]:
        """Compose fragment *name*; ``None`` when no such fragment exists."""
        with timed(f"render {name}", self.verbose, log):
            with timed("resolve", self.verbose, log):
                content = self.resolver.resolve(name)
            if content is None:
                log.info("fragment %r not found", name)
                return None
            return self._compose(content, dict(query_variables or {}), (self._link(name),))

    def render_markup(self, content: str, variables: Optional[Mapping[str, str]] = None) -> str:
        """Compose raw *content* as though it were a fragment of the tree."""
        return self._compose(content, dict(variables or {}), ())

    # ── pipeline ──────────────────────────────────────────────────────────

    def _compose(self, content: str, variables: VariableSet, chain: tuple[_Link, ...]) -> str:
        heads: list[str] = []
        try:
            with timed("expand", self.verbose, log):
                html = self.expand(content, variables, heads, chain)
            with timed("include", self.verbose, log):
                html = self.include_panels(html, variables, chain)
        except CompositionError as exc:
            log.warning("composition failed in %s: %s", exc.fragment or "<markup>", exc.message)
            raise
        with timed("strip", self.verbose, log):
            html = wm.strip_wicket(html)
        with timed("head", self.verbose, log):
            html = wm.splice_head(html, heads)
        return html

    def expand(
        self,
        markup: str,
        variables: VariableSet,
        heads: Optional[list[str]] = None,
        chain: tuple[_Link, ...] = (),
    ) -> str:
        """Climb the extend chain of *markup* and substitute the result.

        ``with="..."`` defaults are merged into *variables* in place, so
        values bound lower in the chain (or by the query) win.
        """
        if heads is None:
            heads = []
        while True:
            directive = wm.find_extend(markup)
            if directive is None:
                return substitute(markup, variables, self.undefined)

            current = chain[-1][0] if chain else None
            link = self._link(directive.ancestor)
            self._guard(link, chain)

            ancestor = self.resolver.resolve(directive.ancestor)
            if ancestor is None:
                raise AncestorNotFound(
                    f'No parent page "{directive.ancestor}" found at… {markup[:50]}', fragment=current
                )

            try:
                merge_first_wins(variables, extract_extend_variables(directive.with_clause))
            except CompositionError as exc:
                exc.fragment = exc.fragment or current
                raise

            grafted = wm.graft_child(ancestor, directive.content, directive.ancestor)
            wm.collect_head(markup, heads)

            markup = grafted
            chain = chain + (link,)

    def include_panels(self, markup: str, variables: VariableSet, chain: tuple[_Link, ...] = ()) -> str:
        """Splice every include-panel directive, then render what is left."""
        markup = self._splice_panels(markup, variables, chain)
        return self.expand(markup, variables, [], chain)

    # ── internals ─────────────────────────────────────────────────────────

    def _splice_panels(self, markup: str, variables: VariableSet, chain: tuple[_Link, ...]) -> str:
        pos = 0
        while True:
            directive = wm.find_include(markup, pos)
            if directive is None:
                return markup

            link = self._link(directive.panel)
            self._guard(link, chain)

            content = self.resolver.resolve(directive.panel)
            if content is None:
                raise PanelNotFound(
                    f'Panel file "{directive.panel}" does not exist',
                    fragment=chain[-1][0] if chain else None,
                )

            scoped = merge_override_wins(variables, extract_inline_variables(directive.attributes))
            nested = chain + (link,)
            rendered = self.expand(content, scoped, [], nested)
            rendered = substitute(rendered, scoped, self.undefined)
            # Panels included by this panel see the including page's variables.
            rendered = self._splice_panels(rendered, variables, nested)

            markup = directive.splice(markup, rendered)
            pos = directive.start + len(rendered)

    def _link(self, name: str) -> _Link:
        path = self.resolver.locate(name)
        return (name, path if path is not None else name)

    def _guard(self, link: _Link, chain: tuple[_Link, ...]) -> None:
        names = [n for n, _ in chain] + [link[0]]
        if any(key == link[1] for _, key in chain):
            raise CyclicTemplateReference(
                f"Cyclic template reference: {' -> '.join(names)}",
                chain=names,
                fragment=link[0],
            )
        if len(chain) >= self.max_depth:
            raise CyclicTemplateReference(
                f"Template nesting deeper than {self.max_depth}: {' -> '.join(names)}",
                chain=names,
                fragment=link[0],
            )


# -----------------------------------------------------------------------------
