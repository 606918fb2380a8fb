#!/usr/bin/env python
#
#
# ----------------------------------------------------------------------------
"""
Security utilities
==================
Optional HTTP basic auth guarding every route, static files included.
Credentials come from ``Settings.auth_username`` / ``Settings.auth_password``.
"""
# ----------------------------------------------------------------------------

from __future__ import annotations

import secrets
from typing import Optional

from fastapi import HTTPException, Request, status
from fastapi.responses import PlainTextResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from .config import Settings


# ----------------------------------------------------------------------------

REALM = "Authorization Required"

_basic_optional = HTTPBasic(realm=REALM, auto_error=False)


# ----------------------------------------------------------------------------

def credentials_valid(credentials: Optional[HTTPBasicCredentials], settings: Settings) -> bool:
    if credentials is None:
        return False
    user_ok = secrets.compare_digest(
        credentials.username.encode("utf-8"), settings.auth_username.encode("utf-8")
    )
    pass_ok = secrets.compare_digest(
        credentials.password.encode("utf-8"), settings.auth_password.encode("utf-8")
    )
    return user_ok and pass_ok


# ----------------------------------------------------------------------------

def unauthorized() -> PlainTextResponse:
    return PlainTextResponse(
        "Unauthorized",
        status_code=status.HTTP_401_UNAUTHORIZED,
        headers={"WWW-Authenticate": f"Basic realm={REALM}"},
    )


async def is_authorized(request: Request, settings: Settings) -> bool:
    """True when auth is off or the request carries the configured credentials."""
    if not settings.auth_enabled:
        return True
    try:
        credentials = await _basic_optional(request)
    except HTTPException:
        return False
    return credentials_valid(credentials, settings)


# ----------------------------------------------------------------------------
