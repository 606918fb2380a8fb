"""Installed distribution version; ``0.0.0.dev0`` when running from a bare checkout."""
from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

DIST_NAME = "wicket-mockup"

try:
    __version__: str = version(DIST_NAME)
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"
