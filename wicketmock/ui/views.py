#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
HTML views
==========
GET  /                      — entry page (Markdown, RST or HTML)
GET  /pages                 — listing of *Page.html fragments
GET  /pages/{name}          — composed page
GET  /panels                — listing of *Panel.html fragments
GET  /panels/{name}         — composed panel
GET  /dialogs               — listing of *Dialog.html fragments
GET  /dialogs/{name}        — composed dialog
ANY  /test/post             — echo of params and posted form body
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import json
from pathlib import Path

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates

from wicketmock.core.config import Settings
from wicketmock.core.deps import compose_fragment, get_app_settings, get_composer
from wicketmock.services.composer import Composer
from wicketmock.services.decorate import decorate
from wicketmock.services.homepage import pygments_css, render_entry_page
from wicketmock.services.listing import ROUTE_KINDS, fragment_url, list_fragments


# -----------------------------------------------------------------------------

router = APIRouter(tags=["ui"])
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------

def _ctx(settings: Settings, **extra) -> dict:
    return {
        "app_name": settings.app_name,
        "app_version": settings.app_version,
        **extra,
    }


def _html(html: str, settings: Settings, status_code: int = 200) -> HTMLResponse:
    return HTMLResponse(
        decorate(html, settings),
        status_code=status_code,
        media_type="text/html; charset=utf-8",
    )


def _listing(request: Request, route: str, settings: Settings):
    kind = ROUTE_KINDS[route]
    names = list_fragments(settings.template_scope, kind)
    if not names:
        return PlainTextResponse(f"No {kind.route} found.", status_code=status.HTTP_404_NOT_FOUND)
    links = [(fragment_url(kind, n), n) for n in names]
    body = templates.get_template("listing.html").render(
        _ctx(settings, request=request, title=kind.title, links=links)
    )
    return _html(body, settings)


async def _fragment(request: Request, name: str, composer: Composer, settings: Settings):
    html = await compose_fragment(composer, name, request.query_params, settings.request_timeout)
    if html is None:
        return PlainTextResponse("Page not found.", status_code=status.HTTP_404_NOT_FOUND)
    return _html(html, settings)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Entry page
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.get("/", response_class=HTMLResponse)
async def home(request: Request, settings: Settings = Depends(get_app_settings)):
    page = render_entry_page(settings.entry_page)
    if page is None:
        return PlainTextResponse("Entry page not found.", status_code=status.HTTP_404_NOT_FOUND)
    if page.standalone:
        return _html(page.body, settings)
    body = templates.get_template("home.html").render(
        _ctx(settings, request=request, title=page.title, content=page.body,
             pygments_css=pygments_css())
    )
    return _html(body, settings)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Pages
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.get("/pages", response_class=HTMLResponse)
async def list_pages(request: Request, settings: Settings = Depends(get_app_settings)):
    return _listing(request, "pages", settings)


@router.get("/pages/{name:path}", response_class=HTMLResponse)
async def view_page(
    name: str,
    request: Request,
    composer: Composer = Depends(get_composer),
    settings: Settings = Depends(get_app_settings),
):
    return await _fragment(request, name, composer, settings)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Panels
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.get("/panels", response_class=HTMLResponse)
async def list_panels(request: Request, settings: Settings = Depends(get_app_settings)):
    return _listing(request, "panels", settings)


@router.get("/panels/{name:path}", response_class=HTMLResponse)
async def view_panel(
    name: str,
    request: Request,
    composer: Composer = Depends(get_composer),
    settings: Settings = Depends(get_app_settings),
):
    return await _fragment(request, name, composer, settings)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Dialogs
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.get("/dialogs", response_class=HTMLResponse)
async def list_dialogs(request: Request, settings: Settings = Depends(get_app_settings)):
    return _listing(request, "dialogs", settings)


@router.get("/dialogs/{name:path}", response_class=HTMLResponse)
async def view_dialog(
    name: str,
    request: Request,
    composer: Composer = Depends(get_composer),
    settings: Settings = Depends(get_app_settings),
):
    return await _fragment(request, name, composer, settings)


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Form target for mockups
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@router.api_route("/test/post", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], response_class=HTMLResponse)
async def echo_post(request: Request, settings: Settings = Depends(get_app_settings)):
    """Show what a mockup form submitted."""
    form = await request.form() if request.method != "GET" else {}
    body = templates.get_template("echo.html").render(
        _ctx(
            settings,
            request=request,
            params=json.dumps(dict(request.query_params), indent=2),
            body=json.dumps({k: v for k, v in form.items() if isinstance(v, str)}, indent=2),
        )
    )
    return HTMLResponse(body)


# -----------------------------------------------------------------------------
