"""Centralised configuration using pydantic-settings.

All environment variables, defaults, and validation live here.
Usage:
    from payload_repair.config import settings
    print(settings.max_body_bytes)
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RepairConfig(BaseSettings):
    """Single source of truth for every tuneable parameter."""

    model_config = SettingsConfigDict(
        env_prefix="PAYLOAD_REPAIR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # silently ignore unknown env vars
        case_sensitive=False,
    )

    # ── Request bodies ──────────────────────────────────────────────────
    max_body_bytes: int = Field(
        default=10 * 1024 * 1024,  # 10 MB
        ge=1,
        description="Bodies larger than this are rejected before any repair is attempted",
    )
    json_content_types: list[str] = Field(
        default_factory=lambda: ["application/json"],
        description="Content types whose bodies are routed through the repair engine",
    )

    # ── Logging ─────────────────────────────────────────────────────────
    log_file: str = Field(default="payload_repair.log")
    log_max_bytes: int = Field(default=5 * 1024 * 1024)  # 5 MB
    log_backup_count: int = Field(default=3)
    log_level: str = Field(default="INFO")

    # ── Validators ──────────────────────────────────────────────────────
    @field_validator("json_content_types")
    @classmethod
    def _validate_content_types(cls, v: list[str]) -> list[str]:
        cleaned = [ct.strip().lower() for ct in v if ct.strip()]
        if not cleaned:
            raise ValueError("json_content_types must name at least one content type")
        return cleaned

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if v not in logging.getLevelNamesMapping():
            raise ValueError(f"log_level must be a standard logging level, got '{v}'")
        return v


@lru_cache(maxsize=1)
def get_settings() -> RepairConfig:
    """Return the cached singleton settings instance."""
    return RepairConfig()


# Module-level shortcut for convenience
settings = get_settings()
