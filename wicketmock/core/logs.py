#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Logging helpers
===============
- ``configure_logging`` installs one stream handler on the package logger
- ``timed`` logs the wall-clock duration of a composition stage when the
  server runs with ``--verbose``
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Iterator

log = logging.getLogger("wicketmock")

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


# -----------------------------------------------------------------------------

def configure_logging(level: str = "INFO", verbose: bool = False) -> None:
    if verbose:
        level = "DEBUG"
    if not any(getattr(h, "_wicketmock", False) for h in log.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._wicketmock = True  # type: ignore[attr-defined]
        log.addHandler(handler)
    log.setLevel(level.upper())
    log.propagate = False


# -----------------------------------------------------------------------------

@contextmanager
def timed(stage: str, enabled: bool, logger: logging.Logger = log) -> Iterator[None]:
    """Log ``stage: 1.23ms`` at DEBUG once the block exits, if *enabled*."""
    if not enabled:
        yield
        return
    started = time.perf_counter()
    try:
        yield
    finally:
        logger.debug("%s: %.2fms", stage, (time.perf_counter() - started) * 1000)


# -----------------------------------------------------------------------------
