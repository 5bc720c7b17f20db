# fintrack/services/valuation/calculators.py
"""
Point-in-time valuation calculators.

- PriceCalculator: Resolves one holding's unit price in the base currency
- ValueCalculator: Turns a holding + resolved price into an AssetValuation

Design Principles:
- Stateless (no instance state, pure functions over the snapshot)
- Uses Decimal for ALL financial calculations
- Missing data degrades one asset and is reported, never raised

Price resolution policy:

    FOREX holding (the asset IS a currency):
        symbol == base            → 1
        "{symbol}/{base}-FOREX"   → rate as quoted (full precision)
        "{base}/{symbol}-FOREX"   → 1 / rate, 4dp ROUND_HALF_UP
        otherwise                 → 0, MISSING_FX_RATE

    Any other holding (quoted in USD):
        "{symbol}-{assetType}" missing   → 0, MISSING_PRICE
        base == USD                      → price as quoted
        "USD/{base}-FOREX" present       → price × rate
        "USD/{base}-FOREX" missing       → price left in USD, MISSING_FX_RATE

Non-forex prices never go through any currency other than USD and never use
an inverted rate.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from decimal import Decimal

from fintrack.models import AssetType, Holding, MarketPrice
from fintrack.services.constants import (
    IDENTITY_RATE,
    NON_FOREX_QUOTE_CURRENCY,
    ZERO_PRICE,
)
from fintrack.services.valuation.types import (
    AssetValuation,
    PriceIssue,
    PriceResolution,
    PriceSource,
)
from fintrack.utils.fx_conversion import convert_using_fx_rate, invert_rate
from fintrack.utils.price_keys import forex_key, price_key

logger = logging.getLogger(__name__)


# =============================================================================
# PRICE CALCULATOR
# =============================================================================

class PriceCalculator:
    """
    Resolves unit prices in the base currency from a price snapshot.

    The snapshot maps keys built by fintrack.utils.price_keys to MarketPrice.
    """

    def resolve(
            self,
            holding: Holding,
            prices: Mapping[str, MarketPrice],
            base_currency: str,
    ) -> PriceResolution:
        """
        Resolve the unit price of a holding.

        Args:
            holding: The holding to price
            prices: Snapshot keyed by price key
            base_currency: Target currency

        Returns:
            PriceResolution (never None, degraded when data is missing)
        """
        if holding.asset_type == AssetType.FOREX:
            return self.resolve_currency(holding.symbol, prices, base_currency)
        return self.resolve_instrument(holding.symbol, holding.asset_type, prices, base_currency)

    def resolve_currency(
            self,
            currency: str,
            prices: Mapping[str, MarketPrice],
            base_currency: str,
    ) -> PriceResolution:
        """Price of one unit of `currency` in `base_currency`."""
        if currency == base_currency:
            return PriceResolution(
                price=IDENTITY_RATE,
                source=PriceSource.IDENTITY,
                fx_rate_used=IDENTITY_RATE,
            )

        direct_key = forex_key(currency, base_currency)
        direct = prices.get(direct_key)
        if direct is not None:
            logger.debug(f"FOREX direct pair found: {direct_key}={direct.price}")
            return PriceResolution(
                price=direct.price,
                source=PriceSource.DIRECT,
                fx_rate_used=direct.price,
            )

        reverse_key = forex_key(base_currency, currency)
        reverse = prices.get(reverse_key)
        if reverse is not None and reverse.price != 0:
            inverse = invert_rate(reverse.price)
            logger.debug(f"FOREX reverse pair found: {reverse_key}={reverse.price}, inverse={inverse}")
            return PriceResolution(
                price=inverse,
                source=PriceSource.INVERSE,
                fx_rate_used=inverse,
            )

        if reverse is not None:
            logger.warning(f"FOREX reverse pair {reverse_key} has zero price, cannot invert")

        return PriceResolution(
            price=ZERO_PRICE,
            source=PriceSource.UNAVAILABLE,
            missing_key=direct_key,
            issue=PriceIssue.MISSING_FX_RATE,
        )

    def resolve_instrument(
            self,
            symbol: str,
            asset_type: AssetType,
            prices: Mapping[str, MarketPrice],
            base_currency: str,
    ) -> PriceResolution:
        """Price of one unit of a non-forex instrument in `base_currency`."""
        key = price_key(symbol, asset_type)
        market = prices.get(key)
        if market is None:
            return PriceResolution(
                price=ZERO_PRICE,
                source=PriceSource.UNAVAILABLE,
                missing_key=key,
                issue=PriceIssue.MISSING_PRICE,
            )

        if base_currency == NON_FOREX_QUOTE_CURRENCY:
            return PriceResolution(price=market.price, source=PriceSource.MARKET)

        fx_key = forex_key(NON_FOREX_QUOTE_CURRENCY, base_currency)
        fx = prices.get(fx_key)
        if fx is None:
            # Keep the USD figure rather than zeroing it
            return PriceResolution(
                price=market.price,
                source=PriceSource.UNCONVERTED,
                missing_key=fx_key,
                issue=PriceIssue.MISSING_FX_RATE,
            )

        return PriceResolution(
            price=convert_using_fx_rate(market.price, fx.price),
            source=PriceSource.CONVERTED,
            fx_rate_used=fx.price,
        )


# =============================================================================
# VALUE CALCULATOR
# =============================================================================

class ValueCalculator:
    """
    Calculates the base-currency value of a holding.

    total_value_in_base_currency = price_in_base_currency × total_balance,
    kept at full Decimal precision.
    """

    def __init__(self, price_calc: PriceCalculator | None = None) -> None:
        self._price_calc = price_calc or PriceCalculator()

    def calculate(
            self,
            holding: Holding,
            prices: Mapping[str, MarketPrice],
            base_currency: str,
    ) -> AssetValuation:
        resolution = self._price_calc.resolve(holding, prices, base_currency)
        quantity = holding.total_balance

        warnings: list[str] = []
        if resolution.issue is not None:
            message = self._describe_issue(holding, resolution, base_currency)
            warnings.append(message)
            logger.warning(
                message,
                extra={
                    "asset_name": holding.asset_name,
                    "missing_key": resolution.missing_key,
                    "issue": resolution.issue.value,
                },
            )

        return AssetValuation(
            asset_name=holding.asset_name,
            symbol=holding.symbol,
            asset_type=holding.asset_type,
            quantity=quantity,
            price_in_base_currency=resolution.price,
            total_value_in_base_currency=resolution.price * quantity,
            price_source=resolution.source,
            fx_rate_used=resolution.fx_rate_used,
            missing_key=resolution.missing_key,
            issue=resolution.issue,
            warnings=warnings,
        )

    @staticmethod
    def _describe_issue(
            holding: Holding,
            resolution: PriceResolution,
            base_currency: str,
    ) -> str:
        if resolution.issue == PriceIssue.MISSING_PRICE:
            return (
                f"No market price for {holding.asset_name} "
                f"({resolution.missing_key}), valued at 0"
            )
        if resolution.source == PriceSource.UNCONVERTED:
            return (
                f"No FX rate {resolution.missing_key} for {holding.asset_name}, "
                f"price left in {NON_FOREX_QUOTE_CURRENCY}"
            )
        return (
            f"No FX rate for {holding.symbol}/{base_currency} in either direction "
            f"for {holding.asset_name}, valued at 0"
        )
