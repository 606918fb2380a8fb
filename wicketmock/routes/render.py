#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Render endpoints — composed HTML as JSON, for editor previews and tooling.

GET  /api/v1/render/{name}?var=value   compose a fragment of the tree
POST /api/v1/render                    compose raw markup {"content", "variables"}
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status

from wicketmock.core.config import Settings
from wicketmock.core.deps import compose_fragment, compose_markup, get_app_settings, get_composer
from wicketmock.schemas import ErrorResponse, RenderRequest, RenderResponse
from wicketmock.services.composer import Composer


# -----------------------------------------------------------------------------

router = APIRouter(
    prefix="/render",
    tags=["render"],
    responses={500: {"model": ErrorResponse, "description": "Composition error"}},
)


# -----------------------------------------------------------------------------

@router.get("/{name:path}", response_model=RenderResponse)
async def render_fragment(
    name: str,
    request: Request,
    composer: Composer = Depends(get_composer),
    settings: Settings = Depends(get_app_settings),
):
    html = await compose_fragment(composer, name, request.query_params, settings.request_timeout)
    if html is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Fragment '{name}' not found")
    return RenderResponse(name=name, html=html)


@router.post("", response_model=RenderResponse)
async def render_preview(
    body: RenderRequest,
    composer: Composer = Depends(get_composer),
    settings: Settings = Depends(get_app_settings),
):
    """Compose markup that may extend or include fragments of the tree."""
    html = await compose_markup(composer, body.content, body.variables, settings.request_timeout)
    return RenderResponse(html=html)


# -----------------------------------------------------------------------------
