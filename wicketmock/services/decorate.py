#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Browser helpers injected before ``</body>`` of every served HTML document:
the live-reload client and the highlight.js bundle.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

import re

_LIVE_RELOAD_RE = re.compile(r"localhost:[0-9]{1,5}/livereload\.js")

HIGHLIGHT_SNIPPET = (
    '<script src="https://cdnjs.cloudflare.com/ajax/libs/highlight.js/11.9.0/highlight.min.js"></script>\n'
    '<link rel="stylesheet" href="https://cdnjs.cloudflare.com/ajax/libs/highlight.js/11.9.0/styles/atom-one-light.css">\n'
    "<script>hljs.highlightAll();</script>\n"
)


# -----------------------------------------------------------------------------

def add_live_reload(html: str, port: int) -> str:
    if _LIVE_RELOAD_RE.search(html):
        return html
    return html.replace(
        "</body>",
        f'<script src="//localhost:{port}/livereload.js"></script></body>',
        1,
    )


def add_syntax_highlighting(html: str) -> str:
    return html.replace("</body>", f"{HIGHLIGHT_SNIPPET}</body>", 1)


def decorate(html: str, settings) -> str:
    """Apply whichever helpers are switched on in *settings*."""
    if settings.live_reload:
        html = add_live_reload(html, settings.reload_port)
    if settings.code_highlight:
        html = add_syntax_highlighting(html)
    return html


# -----------------------------------------------------------------------------
