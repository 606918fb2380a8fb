#!/usr/bin/env python
"""
Start the Wicket mockup server.

Usage:
    wicket-mockup [options]

Example:
    wicket-mockup --template-expansion src/main/java --template-scope src/main/java/com/acme/web
    wicket-mockup --reload --code --port 8080
    wicket-mockup --auth --verbose

Every option can also be set through the matching WICKET_* environment
variable (e.g. WICKET_TEMPLATE_EXPANSION) or a .env file.
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import Optional, Sequence

from wicketmock.core.config import get_settings
from wicketmock.core.logs import configure_logging

log = logging.getLogger(__name__)

# argparse dest → Settings field
_OPTION_FIELDS = {
    "template_expansion": "template_expansion",
    "template_scope": "template_scope",
    "express_root": "express_root",
    "entry_page": "entry_page",
    "host": "host",
    "port": "port",
    "reload_port": "reload_port",
    "auth": "auth_enabled",
    "reload": "live_reload",
    "code": "code_highlight",
    "verbose": "verbose",
}


# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wicket-mockup",
        description="Serve Wicket-style pages, panels and dialogs as plain HTML.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("-a", "--auth", action="store_true", default=None,
                        help="Protect every route with HTTP basic auth")
    parser.add_argument("--entry-page", metavar="FILE",
                        help="Markdown, RST or HTML file shown at / (default: README.md)")
    parser.add_argument("--express-root", metavar="DIR",
                        help="Root of the static file server (default: .)")
    parser.add_argument("-r", "--reload", action="store_true", default=None,
                        help="Inject the live-reload client into served pages")
    parser.add_argument("--reload-port", type=int, metavar="N",
                        help="Port of the live-reload server (default: 35729)")
    parser.add_argument("-c", "--code", action="store_true", default=None,
                        help="Inject highlight.js into served pages")
    parser.add_argument("-e", "--template-expansion", metavar="DIR",
                        help="Folder searched for fragments; must contain --template-scope")
    parser.add_argument("-t", "--template-scope", metavar="DIR",
                        help="Folder whose fragments are listed")
    parser.add_argument("-v", "--verbose", action="store_true", default=None,
                        help="Log composition stage timings")
    parser.add_argument("--host", metavar="HOST", help="Interface to bind (default: 127.0.0.1)")
    parser.add_argument("-p", "--port", type=int, metavar="N", help="Port to listen on (default: 3000)")
    return parser


def apply_options(args: argparse.Namespace) -> None:
    """Export given options as WICKET_* variables so Settings picks them up."""
    for dest, field in _OPTION_FIELDS.items():
        value = getattr(args, dest, None)
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        os.environ[f"WICKET_{field.upper()}"] = str(value)
    get_settings.cache_clear()


# -----------------------------------------------------------------------------

def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    apply_options(args)
    settings = get_settings()
    configure_logging(settings.log_level, settings.verbose)

    import uvicorn

    log.info("Static server listening on http://%s:%s", settings.host, settings.port)
    uvicorn.run(
        "wicketmock.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.verbose else "warning",
    )


if __name__ == "__main__":
    main()
