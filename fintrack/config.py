# fintrack/config.py
"""
Engine configuration using Pydantic Settings.

Loads configuration from environment variables with validation:
- LOG_LEVEL / LOG_FORMAT: Logging output (see fintrack.utils.logging)
- DEFAULT_BASE_CURRENCY: Currency used when a caller does not pass one
- MAX_LEDGER_LOG_ENTRIES / LEDGER_LOG_LEVEL: Ledger balance tracing

Configuration is validated on import. Invalid configuration will raise a
pydantic ValidationError with a descriptive message.

Usage:
    from fintrack.config import settings

    base = settings.default_base_currency
"""
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Optional .env in the project root (parent of the fintrack package)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """
    Engine settings loaded from environment variables.

    Environment variables:
        - LOG_LEVEL: Logging level (default: "INFO")
        - LOG_FORMAT: "text" or "json" (default: "text")
        - DEFAULT_BASE_CURRENCY: ISO 4217 code (default: "USD")
        - MAX_LEDGER_LOG_ENTRIES: Per-entry DEBUG lines emitted by a ledger fill
        - LEDGER_LOG_LEVEL: Ledger logger level, e.g. DEBUG for balance traces
    """

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_format: Literal["text", "json"] = Field(
        default="text",
        description="Log output format"
    )

    default_base_currency: str = Field(
        default="USD",
        min_length=3,
        max_length=3,
        description="Base currency used when valuation callers pass none"
    )

    max_ledger_log_entries: int = Field(
        default=50,
        ge=0,
        description="Maximum per-entry DEBUG log lines written by Ledger.fill_balances"
    )

    ledger_log_level: str | None = Field(
        default=None,
        description="Level for the fintrack.services.ledger loggers; unset follows LOG_LEVEL"
    )

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("default_base_currency")
    @classmethod
    def normalize_base_currency(cls, v: str) -> str:
        """Normalize currency: trim whitespace and uppercase."""
        normalized = v.strip().upper()
        if not normalized.isalpha():
            raise ValueError(f"Invalid currency code: '{v}'")
        return normalized


# Create single instance
settings = Settings()
