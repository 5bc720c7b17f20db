# fintrack/utils/fx_conversion.py
"""
FX Rate Conversion Utilities

All rates in a price snapshot use the standard FX notation:

    "BASE/QUOTE" = X   means   1 BASE = X QUOTE

Example:
    "USD/EUR-FOREX" = 0.90   →   1 USD = 0.90 EUR
    To convert USD → EUR, MULTIPLY by the rate.

When only the opposite quote exists ("EUR/USD"), the rate must be inverted.
Inverted rates are rounded to INVERSE_RATE_PLACES decimal places using
ROUND_HALF_UP; directly quoted rates are used at full precision.
"""

from decimal import Decimal, ROUND_HALF_UP

INVERSE_RATE_PLACES = 4


def convert_using_fx_rate(
    amount_base: Decimal,
    fx_rate: Decimal,
) -> Decimal:
    """
    Convert base currency to quote currency using a BASE/QUOTE rate.

    Example:
        - Base amount: 150.00 USD
        - FX rate USD/EUR: 0.90
        - Quote amount: 150.00 × 0.90 = 135.00 EUR

    Args:
        amount_base: Amount in base currency
        fx_rate: FX rate (1 base = X quote)

    Returns:
        Amount converted to quote currency
    """
    return amount_base * fx_rate


def invert_rate(
    rate: Decimal,
    places: int = INVERSE_RATE_PLACES,
) -> Decimal:
    """
    Invert a BASE/QUOTE rate into QUOTE/BASE.

    Example:
        - EUR/USD = 1.0800
        - USD/EUR = 1 / 1.0800 = 0.9259 (4 places, half-up)

    Args:
        rate: Rate to invert
        places: Decimal places to keep

    Returns:
        Inverted rate rounded half-up to `places`

    Raises:
        ValueError: If rate is zero
    """
    if rate == 0:
        raise ValueError("FX rate cannot be zero")
    exponent = Decimal(1).scaleb(-places)
    return (Decimal("1") / rate).quantize(exponent, rounding=ROUND_HALF_UP)
