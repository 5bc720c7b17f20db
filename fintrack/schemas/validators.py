# fintrack/schemas/validators.py
"""
Reusable validation functions for Pydantic schemas.

This module provides:
- Symbol validation and normalization
- Currency code and currency pair validation
- Asset type normalization

These validators ensure consistent input handling across all record schemas.
"""

import re

from fintrack.utils.price_keys import PAIR_SEPARATOR

# =============================================================================
# CONSTANTS
# =============================================================================

# Symbol: 1-20 chars, alphanumeric + dots, dashes, carets (BRK.B, BRK-B, ^SPX)
SYMBOL_PATTERN = re.compile(r'^[\^]?[A-Z0-9][A-Z0-9.\-]{0,19}$')
SYMBOL_MAX_LENGTH = 20

# Currency: ISO 4217 format (3 uppercase letters)
CURRENCY_PATTERN = re.compile(r'^[A-Z]{3}$')


# =============================================================================
# SYMBOL VALIDATION
# =============================================================================

def validate_symbol(value: str) -> str:
    """
    Validate and normalize an instrument symbol.

    Args:
        value: Raw symbol input

    Returns:
        Normalized symbol (uppercase, trimmed)

    Raises:
        ValueError: If symbol format is invalid
    """
    if not value:
        raise ValueError("Symbol cannot be empty")

    normalized = value.strip().upper()

    if len(normalized) > SYMBOL_MAX_LENGTH:
        raise ValueError(f"Symbol cannot exceed {SYMBOL_MAX_LENGTH} characters")

    if not SYMBOL_PATTERN.match(normalized):
        raise ValueError(
            f"Invalid symbol format: '{normalized}'. "
            "Symbol must be alphanumeric, may include dots (.) or dashes (-) "
            "or start with caret (^)"
        )

    return normalized


# =============================================================================
# CURRENCY VALIDATION
# =============================================================================

def validate_currency(value: str) -> str:
    """
    Validate and normalize a currency code.

    Args:
        value: Raw currency input (e.g., "usd", "EUR")

    Returns:
        Normalized currency (uppercase, trimmed)

    Raises:
        ValueError: If currency format is invalid
    """
    if not value:
        raise ValueError("Currency cannot be empty")

    normalized = value.strip().upper()

    if not CURRENCY_PATTERN.match(normalized):
        raise ValueError(
            f"Invalid currency format: '{normalized}'. "
            "Currency must be a 3-letter ISO code (e.g., USD, EUR)"
        )

    return normalized


def validate_currency_pair(value: str) -> str:
    """
    Validate and normalize a "BASE/QUOTE" currency pair.

    Whitespace around either currency is dropped: " usd / eur " → "USD/EUR".

    Raises:
        ValueError: If the value is not two ISO codes joined by "/"
    """
    if not value:
        raise ValueError("Currency pair cannot be empty")

    parts = value.split(PAIR_SEPARATOR)
    if len(parts) != 2:
        raise ValueError(
            f"Invalid currency pair: '{value.strip()}'. "
            "Expected BASE/QUOTE (e.g., USD/EUR)"
        )

    base, quote = (validate_currency(part) for part in parts)
    return f"{base}{PAIR_SEPARATOR}{quote}"


# =============================================================================
# ASSET TYPE NORMALIZATION
# =============================================================================

def normalize_asset_type(value):
    """Uppercase and trim a raw asset type so "stock " parses as STOCK."""
    if isinstance(value, str):
        return value.strip().upper()
    return value
