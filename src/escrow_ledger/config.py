"""Ledger host configuration via pydantic-settings.

Reads from .env file or environment variables. Only the host layer reads
settings; the domain layer takes its bounds as plain arguments.

Usage:
    from escrow_ledger.config import get_settings
    settings = get_settings()
    print(settings.ledger_max_amount)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from escrow_ledger.domain.types import MAX_AMOUNT


class Settings(BaseSettings):
    """Central configuration for the escrow ledger host."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_env: Literal["development", "staging", "production"] = "development"
    app_log_level: str = "INFO"
    app_json_logs: bool = False

    # --- Ledger ---
    # Upper bound of the Amount type (unsigned 128-bit by default).
    ledger_max_amount: int = Field(default=MAX_AMOUNT, ge=0, le=MAX_AMOUNT)

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton of the ledger settings."""
    return Settings()
