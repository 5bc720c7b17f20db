# fintrack/services/constants.py
"""
Centralized constants for the FinTrack services.

Usage:
    from fintrack.services.constants import (
        NON_FOREX_QUOTE_CURRENCY,
        PALETTE,
    )
"""

from decimal import Decimal


# =============================================================================
# PRICING
# =============================================================================

# Non-forex instruments (stocks, crypto, commodities) are quoted in USD by the
# market-data subsystem. Conversion to any other base currency goes through
# the "USD/{base}-FOREX" rate only.
NON_FOREX_QUOTE_CURRENCY: str = "USD"

# Price of a currency expressed in itself
IDENTITY_RATE: Decimal = Decimal("1")

# Price used when nothing could be resolved
ZERO_PRICE: Decimal = Decimal("0")


# =============================================================================
# ALLOCATION
# =============================================================================

# Category name meaning "no category grouping" (case-insensitive)
NO_CATEGORY: str = "None"

# Subcategory assigned to assets without one
NO_SUBCATEGORY: str = "None"

# Color of subcategories that have none configured
DEFAULT_SUBCATEGORY_COLOR: str = "#0000FF"

# Percentages are reported with 2 decimal places
PERCENTAGE_PRECISION: Decimal = Decimal("0.01")

# Colors cycled through when assigning per-asset or per-subcategory colors
PALETTE: tuple[str, ...] = (
    "#FF0000",  # red
    "#00FF00",  # green
    "#0000FF",  # blue
    "#FFA500",  # orange
    "#800080",  # purple
    "#00FFFF",  # cyan
    "#008B8B",  # dark cyan
    "#008080",  # teal
    "#556B2F",  # dark olive green
    "#4682B4",  # steel blue
    "#7B68EE",  # medium slate blue
    "#CD5C5C",  # indian red
    "#DAA520",  # goldenrod
    "#A0522D",  # sienna
    "#BDB76B",  # dark khaki
    "#5F9EA0",  # cadet blue
)
