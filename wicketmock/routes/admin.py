#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Admin endpoints — inspect and reset the fragment location cache.

GET    /api/v1/admin/cache    cached name → path (null for names never found)
DELETE /api/v1/admin/cache    forget every cached location
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from wicketmock.core.deps import get_resolver
from wicketmock.schemas import CacheClearResponse
from wicketmock.services.fragments import FragmentResolver


# -----------------------------------------------------------------------------

router = APIRouter(prefix="/admin", tags=["admin"])


# -----------------------------------------------------------------------------

@router.get("/cache")
async def cache_entries(resolver: FragmentResolver = Depends(get_resolver)) -> dict[str, Optional[str]]:
    return resolver.snapshot()


@router.delete("/cache", response_model=CacheClearResponse)
async def clear_cache(resolver: FragmentResolver = Depends(get_resolver)):
    cleared = resolver.clear()
    return CacheClearResponse(cleared=cleared, message=f"{cleared} cached locations dropped")


# -----------------------------------------------------------------------------
