#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Fragment resolver
=================
Maps a fragment filename (``HomePage.html``, ``admin/UserPanel.html``) to the
file that holds it somewhere below the expansion root(s).

The first lookup of a name runs a recursive search; the chosen path, or the
``NOT_FOUND`` marker, is cached for the life of the resolver.  Later lookups
read straight from the cached path.  Multiple matches are ordered by
(root order, path depth, POSIX path) and the first one wins.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import glob
import logging
import threading
from pathlib import Path
from typing import Iterable, Optional, Union

from wicketmock.services.errors import FragmentUnreadable

log = logging.getLogger(__name__)


class _NotFound:
    """Cached marker for a name that was looked up and matched nothing."""

    _instance: Optional["_NotFound"] = None

    def __new__(cls) -> "_NotFound":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NOT_FOUND"

    def __bool__(self) -> bool:
        return False


NOT_FOUND = _NotFound()


# -----------------------------------------------------------------------------

class FragmentResolver:
    """Process-wide fragment location cache.

    Construct once per application and share it between render passes.
    ``searches`` counts filesystem searches, one per distinct name.
    """

    def __init__(self, roots: Union[Path, str, Iterable[Union[Path, str]]], encoding: str = "utf-8") -> None:
        if isinstance(roots, (str, Path)):
            roots = [roots]
        self.roots: list[Path] = [Path(r) for r in roots]
        self.encoding = encoding
        self.searches = 0
        self._paths: dict[str, Union[Path, _NotFound]] = {}
        self._lock = threading.Lock()

    # ── lookup ────────────────────────────────────────────────────────────

    def locate(self, name: str) -> Optional[Path]:
        """Return the cached path for *name*, searching on first use."""
        key = name.lstrip("/")
        if not key:
            return None

        cached = self._paths.get(key)
        if cached is None:
            with self._lock:
                cached = self._paths.get(key)
                if cached is None:
                    cached = self._search(key)
                    self._paths[key] = cached
        return None if cached is NOT_FOUND else cached

    def resolve(self, name: str) -> Optional[str]:
        """Return the content of fragment *name*, or ``None`` if it does not exist.

        Undecodable bytes come back as U+FFFD; any other read failure raises
        ``FragmentUnreadable``.
        """
        path = self.locate(name)
        if path is None or not path.is_file():
            return None
        try:
            return path.read_text(encoding=self.encoding, errors="replace")
        except OSError as exc:
            log.warning("cannot read fragment %r at %s: %s", name, path, exc)
            raise FragmentUnreadable(
                f"Cannot read fragment \"{name}\" at {path}: {exc.strerror or exc}",
                fragment=name,
            ) from exc

    def __contains__(self, name: str) -> bool:
        return name.lstrip("/") in self._paths

    def snapshot(self) -> dict[str, Optional[str]]:
        with self._lock:
            items = list(self._paths.items())
        return {k: (None if v is NOT_FOUND else str(v)) for k, v in sorted(items)}

    def clear(self) -> int:
        """Forget every cached location; returns how many entries were dropped."""
        with self._lock:
            dropped = len(self._paths)
            self._paths.clear()
        log.info("fragment cache cleared (%d entries)", dropped)
        return dropped

    # ── search ────────────────────────────────────────────────────────────

    def candidates(self, name: str) -> list[Path]:
        pattern = f"**/{glob.escape(name)}"
        found: list[Path] = []
        for root in self.roots:
            if not root.is_dir():
                continue
            matches = [p for p in root.glob(pattern) if p.is_file()]
            matches.sort(key=lambda p: (len(p.relative_to(root).parts), p.as_posix()))
            found.extend(matches)
        return found

    def _search(self, name: str) -> Union[Path, _NotFound]:
        self.searches += 1
        matches = self.candidates(name)
        if not matches:
            log.debug("fragment %r not found under %s", name, ", ".join(map(str, self.roots)))
            return NOT_FOUND
        if len(matches) > 1:
            log.debug("fragment %r has %d candidates, using %s", name, len(matches), matches[0])
        else:
            log.debug("fragment %r resolved to %s", name, matches[0])
        return matches[0].resolve()


# -----------------------------------------------------------------------------
