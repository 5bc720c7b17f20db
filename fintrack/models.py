# fintrack/models.py
"""
Domain records shared by the valuation and ledger engines.

These are plain frozen dataclasses: the engines never persist or mutate the
caller's records. Validation of raw input lives in fintrack.schemas.

Key types:
    AssetType      - Asset class token, also the literal used in price keys
    AssetIdentity  - (asset_name, symbol, asset_type)
    Holding        - Current balance of one asset in one account
    MarketPrice    - Point-in-time price of a symbol or currency pair
    Transaction    - A single dated credit/debit movement
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from fintrack.utils.price_keys import price_key

logger = logging.getLogger(__name__)


class AssetType(str, enum.Enum):
    STOCK = "STOCK"
    CRYPTO = "CRYPTO"
    COMMODITY = "COMMODITY"
    FOREX = "FOREX"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class AssetIdentity:
    """
    Identity of an asset inside one account.

    asset_name groups holdings and transactions; (symbol, asset_type) is the
    key used to look up market prices.
    """

    asset_name: str
    symbol: str
    asset_type: AssetType

    @property
    def price_key(self) -> str:
        return price_key(self.symbol, self.asset_type)


@dataclass(frozen=True)
class Holding:
    """One row per asset per account, read-only to the engines."""

    account_id: str
    asset_name: str
    symbol: str
    asset_type: AssetType
    unit: str
    total_balance: Decimal

    @property
    def identity(self) -> AssetIdentity:
        return AssetIdentity(self.asset_name, self.symbol, self.asset_type)


@dataclass(frozen=True)
class MarketPrice:
    """
    Market price snapshot entry.

    For currency pairs, symbol is "BASE/QUOTE" and asset_type is FOREX:
    1 BASE = price QUOTE.
    """

    symbol: str
    asset_type: AssetType
    price: Decimal

    @property
    def key(self) -> str:
        return price_key(self.symbol, self.asset_type)


@dataclass(frozen=True)
class Transaction:
    """
    Immutable ledger movement.

    Well-formed input has at most one of credit/debit non-zero, but the ledger
    always applies both: after = before + credit - debit.
    """

    transaction_id: int | str | None
    account_id: str
    date: date
    asset_name: str
    symbol: str
    unit: str
    asset_type: AssetType
    credit: Decimal = Decimal("0")
    debit: Decimal = Decimal("0")

    @property
    def net_change(self) -> Decimal:
        return self.credit - self.debit


def default_unit(asset_type: AssetType, symbol: str) -> str:
    """
    Unit label recorded on a transaction for its asset type.

    Stocks count shares, crypto and currencies count units of themselves,
    commodities count generic units.
    """
    if asset_type == AssetType.STOCK:
        return "SHARE"
    if asset_type in (AssetType.CRYPTO, AssetType.FOREX):
        return symbol
    if asset_type == AssetType.COMMODITY:
        return "UNIT"

    logger.warning(f"Unknown asset type for symbol {symbol}: {asset_type}")
    return "UNKNOWN"
