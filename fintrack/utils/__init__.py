# fintrack/utils/__init__.py
"""
Utility modules for the FinTrack engine.

This package contains cross-cutting helpers:
- logging: Logging configuration with correlation ID support
- context: Correlation ID storage (contextvars)
- price_keys: Price snapshot key format shared with the market-data subsystem
- fx_conversion: FX rate conventions (multiply, invert)

Usage:
    from fintrack.utils import setup_logging
    from fintrack.utils import price_key, forex_key
"""

from fintrack.utils.context import (
    get_correlation_id,
    set_correlation_id,
    clear_correlation_id,
)
from fintrack.utils.fx_conversion import convert_using_fx_rate, invert_rate
from fintrack.utils.logging import setup_logging
from fintrack.utils.price_keys import (
    price_key,
    forex_key,
    parse_price_key,
    split_pair,
)

__all__ = [
    # Logging
    "setup_logging",
    # Context
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
    # FX
    "convert_using_fx_rate",
    "invert_rate",
    # Price keys
    "price_key",
    "forex_key",
    "parse_price_key",
    "split_pair",
]
