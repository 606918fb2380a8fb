#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Wicket mockup server — FastAPI application factory
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from wicketmock.core.config import Settings, get_settings
from wicketmock.core.security import is_authorized, unauthorized
from wicketmock.routes import admin, fragments, render
from wicketmock.schemas import ErrorResponse, HealthResponse
from wicketmock.services.errors import CompositionError, CyclicTemplateReference
from wicketmock.services.fragments import FragmentResolver
from wicketmock.ui import views

log = logging.getLogger(__name__)


# -----------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    settings: Settings = app.state.settings
    if not settings.template_expansion.is_dir():
        log.warning("template expansion root %s does not exist", settings.template_expansion)
    if not settings.scope_inside_expansion:
        log.warning(
            "template scope %s is not inside expansion root %s; listed fragments may not resolve",
            settings.template_scope, settings.template_expansion,
        )
    log.info("serving fragments from %s", settings.template_expansion)
    yield


# -----------------------------------------------------------------------------

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Preview Wicket-style pages, panels and dialogs without an application server.",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.resolver = FragmentResolver(settings.template_expansion)

    # ── Middleware ────────────────────────────────────────────────────────

    app.add_middleware(GZipMiddleware, minimum_size=500)

    @app.middleware("http")
    async def basic_auth(request: Request, call_next):
        if not await is_authorized(request, settings):
            return unauthorized()
        return await call_next(request)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        log.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    # ── API routers ───────────────────────────────────────────────────────

    prefix = "/api/v1"

    app.include_router(fragments.router, prefix=prefix)
    app.include_router(render.router,    prefix=prefix)
    app.include_router(admin.router,     prefix=prefix)

    # ── UI router ─────────────────────────────────────────────────────────

    app.include_router(views.router)

    # ── Global exception handlers ─────────────────────────────────────────

    @app.exception_handler(CompositionError)
    async def composition_error(request: Request, exc: CompositionError):
        if request.url.path.startswith("/api/"):
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=ErrorResponse(detail=exc.message, kind=exc.kind, fragment=exc.fragment).model_dump(),
            )
        return views.templates.TemplateResponse(
            request,
            "error.html",
            {
                "app_name": settings.app_name,
                "app_version": settings.app_version,
                "title": "Composition error",
                "heading": "Composition error",
                "kind": exc.kind,
                "message": exc.message,
                "fragment": exc.fragment,
                "chain": exc.chain if isinstance(exc, CyclicTemplateReference) else None,
            },
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    @app.exception_handler(404)
    async def not_found(request: Request, exc):
        if request.url.path.startswith("/api/"):
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"detail": getattr(exc, "detail", None) or "Not found"},
            )
        return views.templates.TemplateResponse(
            request,
            "error.html",
            {
                "app_name": settings.app_name,
                "app_version": settings.app_version,
                "title": "Not found",
                "heading": "Not found",
                "message": "The page you requested could not be found.",
            },
            status_code=status.HTTP_404_NOT_FOUND,
        )

    # ── Health check ──────────────────────────────────────────────────────

    @app.get("/api/health", tags=["system"], response_model=HealthResponse)
    async def health():
        return HealthResponse(version=settings.app_version, app=settings.app_name)

    # ── Static files (mounted last so routes win) ─────────────────────────

    if settings.doc_root.is_dir():
        app.mount("/doc", StaticFiles(directory=str(settings.doc_root), html=True), name="doc")
    if settings.express_root.is_dir():
        app.mount("/", StaticFiles(directory=str(settings.express_root)), name="static")

    return app


# -----------------------------------------------------------------------------
