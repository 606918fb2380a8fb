#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
FastAPI dependencies shared by the API and UI routers.

The fragment resolver lives on ``app.state`` for the life of the process;
a ``Composer`` is cheap and built per request around it.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import asyncio
from typing import Any, Callable, Mapping, Optional

import anyio.to_thread
from fastapi import Depends, HTTPException, Request, status

from wicketmock.core.config import Settings
from wicketmock.services.composer import Composer
from wicketmock.services.fragments import FragmentResolver


# -----------------------------------------------------------------------------

def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_resolver(request: Request) -> FragmentResolver:
    return request.app.state.resolver


def get_composer(
    settings: Settings = Depends(get_app_settings),
    resolver: FragmentResolver = Depends(get_resolver),
) -> Composer:
    return Composer(
        resolver,
        undefined=settings.undefined_variables,
        max_depth=settings.max_depth,
        verbose=settings.verbose,
    )


# -----------------------------------------------------------------------------

async def _bounded(fn: Callable[..., Any], *args: Any, timeout: float, what: str) -> Any:
    """Run *fn* in a worker thread; give up on it after *timeout* seconds.

    A render pass holds no resources between file reads, so an abandoned
    thread is left to finish on its own.
    """
    try:
        return await asyncio.wait_for(
            anyio.to_thread.run_sync(fn, *args, abandon_on_cancel=True),
            timeout=timeout,
        )
    except asyncio.TimeoutError:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Rendering {what} took longer than {timeout:g}s",
        )


async def compose_fragment(
    composer: Composer,
    name: str,
    variables: Mapping[str, str],
    timeout: float,
) -> Optional[str]:
    return await _bounded(composer.render, name, dict(variables), timeout=timeout, what=name)


async def compose_markup(
    composer: Composer,
    content: str,
    variables: Mapping[str, str],
    timeout: float,
) -> str:
    return await _bounded(composer.render_markup, content, dict(variables), timeout=timeout, what="markup")


# -----------------------------------------------------------------------------
