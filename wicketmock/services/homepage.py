#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Entry page renderer
===================
Renders the file configured as the entry page (usually ``README.md``) to an
HTML body fragment.

Supported formats, chosen by file suffix:
  - .md / .markdown : mistune (tables, strikethrough, urls) with Pygments
                      highlighting for fenced code
  - .rst            : docutils
  - anything else   : served as-is (assumed to be HTML already)
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import html as _html
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

MARKDOWN_SUFFIXES = {".md", ".markdown"}
RST_SUFFIXES = {".rst", ".rest"}


# -----------------------------------------------------------------------------
# Markdown renderer via mistune
# -----------------------------------------------------------------------------

def _highlight_code(code: str, lang: str) -> str:
    """Highlight *code* using Pygments.  Unknown languages fall back to plain text."""
    from pygments import highlight
    from pygments.formatters import HtmlFormatter
    from pygments.lexers import TextLexer, get_lexer_by_name
    from pygments.util import ClassNotFound

    try:
        lexer = get_lexer_by_name(lang.strip(), stripall=True) if lang.strip() else TextLexer()
    except ClassNotFound:
        lexer = TextLexer()
    formatter = HtmlFormatter(nowrap=False, cssclass="highlight")
    return highlight(code, lexer, formatter)


def _make_md_renderer():
    import mistune
    from mistune.plugins.formatting import strikethrough
    from mistune.plugins.table import table
    from mistune.plugins.url import url

    class _HighlightRenderer(mistune.HTMLRenderer):
        def codespan(self, code: str) -> str:
            return f'<code>{_html.escape(code)}</code>'

        def block_code(self, code: str, **kwargs) -> str:
            info = kwargs.get('info') or ''
            lang = info.split()[0] if info else ''
            if lang:
                return _highlight_code(code, lang)
            return f'<pre><code>{_html.escape(code)}</code></pre>'

    return mistune.create_markdown(
        renderer=_HighlightRenderer(escape=False),
        plugins=[table, strikethrough, url],
    )


_md_renderer = None


def _get_md_renderer():
    global _md_renderer
    if _md_renderer is None:
        _md_renderer = _make_md_renderer()
    return _md_renderer


def render_markdown(content: str) -> str:
    return _get_md_renderer()(content)


# -----------------------------------------------------------------------------
# RST renderer via docutils
# -----------------------------------------------------------------------------

def render_rst(content: str) -> str:
    from docutils.core import publish_parts
    parts = publish_parts(
        source=content,
        writer="html5",
        settings_overrides={
            "halt_level": 5,
            "report_level": 5,
            "input_encoding": "unicode",
            "output_encoding": "unicode",
            "syntax_highlight": "short",
            "doctitle_xform": False,
        },
    )
    return parts["body"]


# -----------------------------------------------------------------------------

def pygments_css(style: str = "friendly") -> str:
    from pygments.formatters import HtmlFormatter
    return HtmlFormatter(style=style).get_style_defs(".highlight")


@dataclass
class EntryPage:
    title: str
    body: str
    standalone: bool   # True when body is already a full HTML document


def render_entry_page(path: Path) -> Optional[EntryPage]:
    """Render the entry page at *path*; ``None`` if it is missing or not a file."""
    if not path.is_file():
        return None
    content = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    if suffix in MARKDOWN_SUFFIXES:
        return EntryPage(path.name, render_markdown(content), standalone=False)
    if suffix in RST_SUFFIXES:
        return EntryPage(path.name, render_rst(content), standalone=False)
    return EntryPage(path.name, content, standalone=True)


# -----------------------------------------------------------------------------
