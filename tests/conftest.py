#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Pytest fixtures for wicket-mockup tests.
Every test gets its own fragment tree under tmp_path, its own resolver and
its own app, so no state leaks between tests.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from wicketmock.core.config import Settings
from wicketmock.main import create_app
from wicketmock.services.composer import Composer
from wicketmock.services.fragments import FragmentResolver


# -----------------------------------------------------------------------------

FRAGMENTS: dict[str, str] = {
    "layouts/BasePage.html": (
        "<html>\n"
        "<head>\n"
        "<title>[title]</title>\n"
        "<!-- wicket-head -->\n"
        "</head>\n"
        "<body>\n"
        '<div id="base"><wicket:child></wicket:child></div>\n'
        "</body>\n"
        "</html>\n"
    ),
    "layouts/ContentPage.html": (
        '<wicket:head><link rel="stylesheet" href="content.css"></wicket:head>\n'
        '<!-- extend-page="BasePage.html" with="title: Default Title, who: Everyone" -->\n'
        "<wicket:extend>\n"
        '<section id="content"><wicket:child></wicket:child></section>\n'
        "</wicket:extend>\n"
    ),
    "pages/HomePage.html": (
        '<wicket:head><script src="home.js"></script></wicket:head>\n'
        '<!-- extend-page="ContentPage.html" with="title: Home" -->\n'
        "<wicket:extend>\n"
        "<h1>Hello [who]</h1>\n"
        '<!-- include-panel="GreetingPanel.html" who="World" -->\n'
        "</wicket:extend>\n"
    ),
    "pages/PlainPage.html": (
        "<html><body>\n"
        '<p class="intro">Plain [name]</p>\n'
        '<div wicket:id="box" class="box">static</div>\n'
        "</body></html>\n"
    ),
    "pages/nested/ProfilePage.html": (
        '<!-- extend-page="BasePage.html" with="title: Profile" -->\n'
        "<wicket:extend>\n"
        '<!-- include-panel="CardPanel.html" label="Name" -->\n'
        '<!-- include-panel="CardPanel.html" label="Email" -->\n'
        "</wicket:extend>\n"
    ),
    "panels/GreetingPanel.html": (
        "<wicket:panel>\n"
        '<p class="greeting">Greetings, [who]!</p>\n'
        "</wicket:panel>\n"
    ),
    "panels/CardPanel.html": (
        '<wicket:panel><div class="card">[label]</div></wicket:panel>\n'
    ),
    "panels/FramePanel.html": (
        '<wicket:panel><div class="frame"><!-- include-panel="CardPanel.html" label="Inner" --></div></wicket:panel>\n'
    ),
    "dialogs/ConfirmDialog.html": (
        '<!-- extend-page="DialogFrame.html" with="heading: Confirm" -->\n'
        "<wicket:dialog>\n"
        "<p>Are you sure?</p>\n"
        "</wicket:dialog>\n"
    ),
    "layouts/DialogFrame.html": (
        '<div class="dialog"><h2>[heading]</h2><wicket:child></wicket:child></div>\n'
    ),
}


def write_tree(root: Path, files: dict[str, str]) -> Path:
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


# -----------------------------------------------------------------------------

@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    return write_tree(tmp_path / "templates", FRAGMENTS)


@pytest.fixture
def resolver(template_root: Path) -> FragmentResolver:
    return FragmentResolver(template_root)


@pytest.fixture
def composer(resolver: FragmentResolver) -> Composer:
    return Composer(resolver)


@pytest.fixture
def settings(tmp_path: Path, template_root: Path) -> Settings:
    static = tmp_path / "static"
    static.mkdir()
    (static / "app.css").write_text("body { color: red; }", encoding="utf-8")
    readme = tmp_path / "README.md"
    readme.write_text("# Mockups\n\nSee the **pages**.\n\n```python\nx = 1\n```\n", encoding="utf-8")
    return Settings(
        template_expansion=template_root,
        template_scope=template_root,
        express_root=static,
        doc_root=tmp_path / "doc",
        entry_page=readme,
    )


@pytest_asyncio.fixture(scope="function")
async def client(settings: Settings):
    """HTTP test client wired to the per-test fragment tree."""
    app = create_app(settings)
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# -----------------------------------------------------------------------------
