#!/usr/bin/env python
#
#
# -----------------------------------------------------------------------------
"""
Application configuration.

All values can be overridden via WICKET_* environment variables or a .env file.
"""
# -----------------------------------------------------------------------------

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wicketmock._version import __version__ as _pkg_version


# -----------------------------------------------------------------------------

class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_prefix="WICKET_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ────────────────────────────────────────────────────────

    app_name: str = "Wicket Mockup Server"
    app_version: str = _pkg_version
    host: str = "127.0.0.1"
    port: int = 3000
    verbose: bool = False
    log_level: str = "INFO"
    request_timeout: float = 10.0

    # ── Template tree ──────────────────────────────────────────────────────

    template_expansion: Path = Path("./test/templates")
    template_scope: Path = Path("./test/templates")
    max_depth: int = 64
    undefined_variables: Literal["empty", "keep", "strict"] = "empty"

    # ── Static content ─────────────────────────────────────────────────────

    express_root: Path = Path(".")
    doc_root: Path = Path("./doc")
    entry_page: Path = Path("./README.md")

    # ── Basic auth ─────────────────────────────────────────────────────────

    auth_enabled: bool = False
    auth_username: str = "user"
    auth_password: str = "password"

    # ── Browser helpers ────────────────────────────────────────────────────

    live_reload: bool = False
    reload_port: int = 35729
    code_highlight: bool = False

    @field_validator("template_expansion", "template_scope", "express_root", "doc_root", "entry_page")
    @classmethod
    def _absolute(cls, v: Path) -> Path:
        return v.expanduser().resolve()

    @field_validator("max_depth")
    @classmethod
    def _positive_depth(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_depth must be at least 1")
        return v

    @property
    def scope_inside_expansion(self) -> bool:
        return self.template_scope == self.template_expansion or \
            self.template_expansion in self.template_scope.parents


# -----------------------------------------------------------------------------

@lru_cache
def get_settings() -> Settings:
    return Settings()


# -----------------------------------------------------------------------------
