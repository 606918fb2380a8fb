#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Fragment listing endpoint.

GET /api/v1/fragments?kind=page|panel|dialog
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Depends, Query

from wicketmock.core.config import Settings
from wicketmock.core.deps import get_app_settings
from wicketmock.schemas import FragmentList, FragmentSummary
from wicketmock.services.listing import KINDS, fragment_url, list_fragments


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/fragments", tags=["fragments"])


# -----------------------------------------------------------------------------

@router.get("", response_model=FragmentList)
async def list_fragments_api(
    kind: Literal["page", "panel", "dialog"] = Query(default="page"),
    settings: Settings = Depends(get_app_settings),
):
    fragment_kind = KINDS[kind]
    names = list_fragments(settings.template_scope, fragment_kind)
    items = [
        FragmentSummary(name=n, kind=kind, url=fragment_url(fragment_kind, n))
        for n in names
    ]
    return FragmentList(kind=kind, total=len(items), items=items)


# -----------------------------------------------------------------------------
