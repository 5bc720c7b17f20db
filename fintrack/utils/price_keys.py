# fintrack/utils/price_keys.py
"""
Price snapshot key construction.

The market-data subsystem hands the engine a flat string-keyed map. The key
format is shared with that subsystem and must match it character for
character:

    Non-forex:   "{symbol}-{assetType}"        e.g. "AAPL-STOCK", "BTC-CRYPTO"
    Forex pair:  "{base}/{quote}-FOREX"        e.g. "USD/EUR-FOREX"

A forex key is just a price key whose symbol is a "BASE/QUOTE" pair, so a
MarketPrice for a currency pair produces the same key as forex_key().
"""

from enum import Enum

KEY_SEPARATOR = "-"
PAIR_SEPARATOR = "/"
FOREX_TOKEN = "FOREX"


def _type_token(asset_type: Enum | str) -> str:
    # str-mixin enums format as "AssetType.STOCK" on newer interpreters
    return asset_type.value if isinstance(asset_type, Enum) else str(asset_type)


def price_key(symbol: str, asset_type: Enum | str) -> str:
    """
    Build the snapshot key for a symbol and asset type.

    Args:
        symbol: Instrument symbol, or "BASE/QUOTE" for a currency pair
        asset_type: AssetType member or its literal token

    Returns:
        Key in "{symbol}-{assetType}" form
    """
    return f"{symbol}{KEY_SEPARATOR}{_type_token(asset_type)}"


def forex_key(base_currency: str, quote_currency: str) -> str:
    """
    Build the snapshot key for a currency pair.

    The quoted price means: 1 base_currency = price quote_currency.
    """
    return price_key(f"{base_currency}{PAIR_SEPARATOR}{quote_currency}", FOREX_TOKEN)


def parse_price_key(key: str) -> tuple[str, str]:
    """
    Split a snapshot key into (symbol, asset type token).

    The asset type is taken after the LAST separator so symbols that contain
    a dash (e.g. "BRK-B-STOCK") survive the round trip.

    Raises:
        ValueError: If the key has no separator or an empty part
    """
    symbol, sep, token = key.rpartition(KEY_SEPARATOR)
    if not sep or not symbol or not token:
        raise ValueError(f"Malformed price key: '{key}'")
    return symbol, token


def split_pair(symbol: str) -> tuple[str, str]:
    """
    Split a "BASE/QUOTE" forex symbol into its two currencies.

    Raises:
        ValueError: If the symbol is not a currency pair
    """
    base, sep, quote = symbol.partition(PAIR_SEPARATOR)
    if not sep or not base or not quote or PAIR_SEPARATOR in quote:
        raise ValueError(f"Not a currency pair: '{symbol}'")
    return base, quote
