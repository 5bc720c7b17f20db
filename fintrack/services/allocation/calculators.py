# fintrack/services/allocation/calculators.py
"""
Allocation calculators.

- AllocationCalculator: Breaks one PortfolioValuation into slices
- AllocationHistoryCalculator: Values dated holdings snapshots and keeps
  slice colors stable across dates

Two modes:

    No category ("None", any case, or omitted):
        every asset is a slice in subcategory "None", priority 0,
        colors cycled from PALETTE in holdings order,
        sorted by value DESC

    Category:
        only assets assigned to the category,
        color and priority from the asset's subcategory
        (#0000FF and 0 when unset or unassigned),
        sorted by priority DESC, then value DESC

Percentages are quantized to 0.01 ROUND_HALF_UP. A zero total gives 0%.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import replace
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from itertools import cycle

from fintrack.config import settings
from fintrack.models import Holding, MarketPrice
from fintrack.services.constants import (
    DEFAULT_SUBCATEGORY_COLOR,
    NO_CATEGORY,
    NO_SUBCATEGORY,
    PALETTE,
    PERCENTAGE_PRECISION,
)
from fintrack.services.exceptions import CategoryNotFoundError
from fintrack.services.allocation.types import (
    AllocationChart,
    AllocationHistory,
    AllocationPoint,
    AllocationSlice,
    HoldingCategory,
    Subcategory,
)
from fintrack.services.valuation.service import ValuationService
from fintrack.services.valuation.types import PortfolioValuation

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


def is_no_category(category: str | None) -> bool:
    return category is None or category.strip().lower() == NO_CATEGORY.lower()


def percentage_of(value: Decimal, total: Decimal) -> Decimal:
    if total == 0:
        return Decimal("0").quantize(PERCENTAGE_PRECISION)
    return (value / total * HUNDRED).quantize(PERCENTAGE_PRECISION, rounding=ROUND_HALF_UP)


class PaletteCycler:
    """Hands out palette colors in order, wrapping around."""

    def __init__(self, palette: Sequence[str] = PALETTE) -> None:
        self._colors = cycle(palette)

    def next(self) -> str:
        return next(self._colors)


# =============================================================================
# ALLOCATION CALCULATOR
# =============================================================================

class AllocationCalculator:
    """Computes the allocation of a single valuation."""

    def calculate(
            self,
            valuation: PortfolioValuation,
            category: str | None = None,
            holding_categories: Sequence[HoldingCategory] = (),
            subcategories: Sequence[Subcategory] = (),
    ) -> AllocationChart:
        """
        Build the allocation chart for a valuation.

        Args:
            valuation: Output of the valuation engine
            category: Category to group by, None or "None" for per-asset
            holding_categories: Asset → subcategory assignments
            subcategories: Subcategories of `category`

        Returns:
            AllocationChart with slices in display order

        Raises:
            CategoryNotFoundError: If a category is given with no subcategories
        """
        if is_no_category(category):
            return self._by_asset(valuation)
        if not subcategories:
            raise CategoryNotFoundError(category)
        return self._by_category(valuation, category, holding_categories, subcategories)

    def _by_asset(self, valuation: PortfolioValuation) -> AllocationChart:
        palette = PaletteCycler()
        total = valuation.total_value

        slices = [
            AllocationSlice(
                asset_name=asset.asset_name,
                symbol=asset.symbol,
                asset_type=asset.asset_type,
                subcategory=NO_SUBCATEGORY,
                value=asset.total_value_in_base_currency,
                color=palette.next(),
                priority=0,
                percentage=percentage_of(asset.total_value_in_base_currency, total),
                subcategory_value=total,
                percentage_of_subcategory=HUNDRED,
            )
            for asset in valuation.assets
        ]
        slices.sort(key=lambda s: s.value, reverse=True)

        logger.debug(f"Allocation by asset: {len(slices)} slices, total={total} {valuation.base_currency}")
        return AllocationChart(
            base_currency=valuation.base_currency,
            category=None,
            total_value=total,
            slices=slices,
            subcategory_values={NO_SUBCATEGORY: total},
        )

    def _by_category(
            self,
            valuation: PortfolioValuation,
            category: str,
            holding_categories: Sequence[HoldingCategory],
            subcategories: Sequence[Subcategory],
    ) -> AllocationChart:
        # First assignment of an asset wins
        assignments: dict[str, str] = {}
        for hc in holding_categories:
            if hc.category == category and hc.asset_name not in assignments:
                assignments[hc.asset_name] = hc.subcategory or NO_SUBCATEGORY

        colors = {s.name: s.color or DEFAULT_SUBCATEGORY_COLOR for s in subcategories}
        colors[NO_SUBCATEGORY] = DEFAULT_SUBCATEGORY_COLOR
        priorities = {s.name: s.priority for s in subcategories}
        priorities[NO_SUBCATEGORY] = 0

        members = [a for a in valuation.assets if a.asset_name in assignments]
        total = sum((a.total_value_in_base_currency for a in members), Decimal("0"))

        subcategory_values: dict[str, Decimal] = {}
        for asset in members:
            name = assignments[asset.asset_name]
            subcategory_values[name] = (
                subcategory_values.get(name, Decimal("0")) + asset.total_value_in_base_currency
            )

        slices = []
        for asset in members:
            name = assignments[asset.asset_name]
            slices.append(
                AllocationSlice(
                    asset_name=asset.asset_name,
                    symbol=asset.symbol,
                    asset_type=asset.asset_type,
                    subcategory=name,
                    value=asset.total_value_in_base_currency,
                    color=colors.get(name, DEFAULT_SUBCATEGORY_COLOR),
                    priority=priorities.get(name, 0),
                    percentage=percentage_of(asset.total_value_in_base_currency, total),
                    subcategory_value=subcategory_values[name],
                    percentage_of_subcategory=percentage_of(subcategory_values[name], total),
                )
            )
        slices.sort(key=lambda s: (s.priority, s.value), reverse=True)

        skipped = len(valuation.assets) - len(members)
        logger.debug(
            f"Allocation by category '{category}': {len(slices)} slices, "
            f"{len(subcategory_values)} subcategories, {skipped} assets outside category"
        )
        return AllocationChart(
            base_currency=valuation.base_currency,
            category=category,
            total_value=total,
            slices=slices,
            subcategory_values=subcategory_values,
        )


# =============================================================================
# ALLOCATION HISTORY CALCULATOR
# =============================================================================

class AllocationHistoryCalculator:
    """
    Allocation over time.

    Attributes:
        _valuation_service: Values each dated holdings snapshot
        _allocation_calc: Builds the chart of each valuation
    """

    def __init__(
            self,
            valuation_service: ValuationService | None = None,
            allocation_calc: AllocationCalculator | None = None,
    ) -> None:
        self._valuation_service = valuation_service or ValuationService()
        self._allocation_calc = allocation_calc or AllocationCalculator()

    def calculate(
            self,
            snapshots: Mapping[date, Sequence[Holding]],
            price_snapshots: Mapping[date, Mapping[str, MarketPrice]],
            base_currency: str | None = None,
            category: str | None = None,
            holding_categories: Sequence[HoldingCategory] = (),
            subcategories: Sequence[Subcategory] = (),
    ) -> AllocationHistory:
        """
        Build one allocation chart per date.

        Args:
            snapshots: Date → holdings on that date
            price_snapshots: Date → price snapshot for that date; a date
                             without prices is valued against an empty
                             snapshot (every asset degrades)
            base_currency: Target currency (settings default when None)
            category, holding_categories, subcategories: As for
                AllocationCalculator.calculate()

        Returns:
            AllocationHistory with points in ascending date order
        """
        by_asset = is_no_category(category)
        palette = PaletteCycler()
        color_map: dict[str, str] = {}
        points: list[AllocationPoint] = []
        resolved_currency = base_currency if base_currency is not None else settings.default_base_currency

        for day in sorted(snapshots):
            prices = price_snapshots.get(day)
            if prices is None:
                logger.warning(f"No price snapshot for {day}, valuing against empty snapshot")
                prices = {}

            valuation = self._valuation_service.valuate(snapshots[day], prices, base_currency)
            resolved_currency = valuation.base_currency
            chart = self._allocation_calc.calculate(
                valuation, category, holding_categories, subcategories
            )

            recolored = []
            for s in chart.slices:
                key = s.asset_name if by_asset else s.subcategory
                if key not in color_map:
                    color_map[key] = palette.next()
                recolored.append(replace(s, color=color_map[key]))
            chart.slices = recolored

            points.append(AllocationPoint(date=day, chart=chart))

        logger.info(
            f"Allocation history built: {len(points)} dates, "
            f"{len(color_map)} colored {'assets' if by_asset else 'subcategories'}"
        )
        return AllocationHistory(
            base_currency=resolved_currency,
            category=None if by_asset else category,
            points=points,
            color_map=color_map,
        )
