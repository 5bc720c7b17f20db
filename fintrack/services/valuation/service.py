# fintrack/services/valuation/service.py
"""
Valuation Service - entry point for portfolio valuation.

- valuate(): Value every holding in one base currency
- build_price_snapshot(): Key a list of MarketPrice the way valuate() expects

valuate() returns a PortfolioValuation rather than a bare list: the
per-holding list[AssetValuation] is its `assets` attribute. Iterating the
result yields the same rows, but comparing it to a list does not.

Design Principles:
- Single Entry Point: callers never drive the calculators directly
- No I/O: holdings and prices arrive already fetched
- Complete output: one row per holding, in input order, even when prices
  are missing

Usage:
    from fintrack.services.valuation import ValuationService, build_price_snapshot

    snapshot = build_price_snapshot(market_prices)
    result = ValuationService().valuate(holdings, snapshot, "EUR")

    for row in result.assets:
        print(row.asset_name, row.total_value_in_base_currency)
    print(result.degraded_assets)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from fintrack.config import settings
from fintrack.models import Holding, MarketPrice
from fintrack.services.exceptions import ValidationError
from fintrack.services.valuation.calculators import PriceCalculator, ValueCalculator
from fintrack.services.valuation.types import AssetValuation, PortfolioValuation

logger = logging.getLogger(__name__)


def build_price_snapshot(prices: Iterable[MarketPrice]) -> dict[str, MarketPrice]:
    """
    Key market prices by their snapshot key.

    Later entries win when two prices share a key.
    """
    snapshot: dict[str, MarketPrice] = {}
    for price in prices:
        snapshot[price.key] = price
    return snapshot


class ValuationService:
    """
    Values holdings in a base currency from a price snapshot.

    Attributes:
        _value_calc: Calculator producing one AssetValuation per holding
    """

    def __init__(self, value_calc: ValueCalculator | None = None) -> None:
        self._value_calc = value_calc or ValueCalculator(PriceCalculator())

    def valuate(
            self,
            holdings: Sequence[Holding],
            prices: Mapping[str, MarketPrice],
            base_currency: str | None = None,
    ) -> PortfolioValuation:
        """
        Value every holding in the base currency.

        Args:
            holdings: Holdings to value (order is preserved)
            prices: Snapshot keyed by price key (see build_price_snapshot)
            base_currency: Target currency, defaults to
                           settings.default_base_currency

        Returns:
            PortfolioValuation with one AssetValuation per holding

        Raises:
            ValidationError: If base_currency is blank
        """
        base = self._resolve_currency(base_currency)

        assets: list[AssetValuation] = []
        warnings: list[str] = []

        for holding in holdings:
            valuation = self._value_calc.calculate(holding, prices, base)
            assets.append(valuation)
            warnings.extend(valuation.warnings)
            logger.debug(
                f"Valued {holding.asset_name}: symbol={holding.symbol}, "
                f"type={holding.asset_type.value}, quantity={valuation.quantity}, "
                f"price={valuation.price_in_base_currency} {base}, "
                f"source={valuation.price_source.value}"
            )

        result = PortfolioValuation(
            base_currency=base,
            assets=assets,
            warnings=warnings,
        )

        logger.info(
            f"Valuation complete: {len(assets)} assets in {base}, "
            f"total={result.total_value}, degraded={len(result.degraded_assets)}"
        )
        return result

    @staticmethod
    def _resolve_currency(base_currency: str | None) -> str:
        # Matched literally against symbols and keys; case is the schemas' job.
        if base_currency is None:
            return settings.default_base_currency
        if not base_currency.strip():
            raise ValidationError("Base currency cannot be empty", field="base_currency")
        return base_currency


def valuate(
        holdings: Sequence[Holding],
        prices: Mapping[str, MarketPrice],
        base_currency: str | None = None,
) -> PortfolioValuation:
    """Convenience wrapper around ValuationService().valuate()."""
    return ValuationService().valuate(holdings, prices, base_currency)
