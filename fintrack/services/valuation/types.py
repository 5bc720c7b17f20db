# fintrack/services/valuation/types.py
"""
Data types for the Valuation Engine.

Design Principles:
- Use Decimal for ALL financial values (never float)
- A missing price degrades one asset, it never aborts the batch
- Degradation is explicit: PriceIssue + warning text on the affected asset

Type Hierarchy:
    PriceIssue          - Why an asset's price is degraded
    PriceSource         - Where an asset's price came from
    PriceResolution     - Calculator output for one holding
    AssetValuation      - Valuation row for one holding
    PortfolioValuation  - All rows plus totals and warnings
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from decimal import Decimal

from fintrack.models import AssetType
from fintrack.services.exceptions import PriceResolutionError


class PriceIssue(str, enum.Enum):
    """Data-quality gap that degraded a valuation."""
    MISSING_PRICE = "MISSING_PRICE"      # instrument price absent → value 0
    MISSING_FX_RATE = "MISSING_FX_RATE"  # FX rate absent → value 0 (forex) or left in USD


class PriceSource(str, enum.Enum):
    IDENTITY = "identity"          # forex holding in the base currency itself
    DIRECT = "direct"              # "{symbol}/{base}-FOREX"
    INVERSE = "inverse"            # 1 / "{base}/{symbol}-FOREX", 4dp half-up
    MARKET = "market"              # USD instrument price, base is USD
    CONVERTED = "converted"        # USD instrument price × "USD/{base}-FOREX"
    UNCONVERTED = "unconverted"    # USD instrument price, FX rate missing
    UNAVAILABLE = "unavailable"    # nothing found, price 0


@dataclass(frozen=True)
class PriceResolution:
    """
    Result of resolving one holding's unit price in the base currency.

    Attributes:
        price: Unit price in base currency (0 when unavailable)
        source: How the price was obtained
        fx_rate_used: Rate applied (None when no FX step was involved)
        missing_key: Snapshot key whose absence degraded the price
        issue: Data-quality gap, None when the price is complete
    """

    price: Decimal
    source: PriceSource
    fx_rate_used: Decimal | None = None
    missing_key: str | None = None
    issue: PriceIssue | None = None


@dataclass
class AssetValuation:
    """
    Valuation of a single holding in the base currency.

    Attributes:
        asset_name: Account-level asset name
        symbol: Market symbol
        asset_type: Asset class token
        quantity: Holding's total balance
        price_in_base_currency: Unit price in base currency
        total_value_in_base_currency: price × quantity
        price_source: How the unit price was obtained
        fx_rate_used: Rate applied for conversion, if any
        missing_key: Snapshot key whose absence degraded the value
        issue: Data-quality gap, None when complete
        warnings: Human-readable explanation of any degradation
    """

    asset_name: str
    symbol: str
    asset_type: AssetType
    quantity: Decimal
    price_in_base_currency: Decimal
    total_value_in_base_currency: Decimal
    price_source: PriceSource = PriceSource.MARKET
    fx_rate_used: Decimal | None = None
    missing_key: str | None = None
    issue: PriceIssue | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def has_complete_data(self) -> bool:
        return self.issue is None


@dataclass
class PortfolioValuation:
    """
    Valuation of every holding of one account.

    Attributes:
        base_currency: Currency all values are expressed in
        assets: One AssetValuation per input holding, in input order
        warnings: Warnings of all degraded assets, in asset order

    Note:
        total_value includes degraded assets at their degraded value
        (0, or the un-converted USD figure).
    """

    base_currency: str
    assets: list[AssetValuation]
    warnings: list[str] = field(default_factory=list)

    @property
    def total_value(self) -> Decimal:
        return sum(
            (a.total_value_in_base_currency for a in self.assets),
            Decimal("0"),
        )

    @property
    def has_complete_data(self) -> bool:
        return all(a.has_complete_data for a in self.assets)

    @property
    def degraded_assets(self) -> dict[str, PriceIssue]:
        """Asset name → issue, for every asset whose value is degraded."""
        return {a.asset_name: a.issue for a in self.assets if a.issue is not None}

    def raise_for_issues(self) -> None:
        """
        Raise for the first degraded asset, for callers that cannot accept
        partial valuations.

        Raises:
            PriceResolutionError: If any asset has a PriceIssue
        """
        for asset in self.assets:
            if asset.issue is not None:
                raise PriceResolutionError(asset.asset_name, asset.missing_key or asset.symbol)

    def __iter__(self):
        return iter(self.assets)

    def __len__(self) -> int:
        return len(self.assets)
