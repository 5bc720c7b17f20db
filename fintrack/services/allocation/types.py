# fintrack/services/allocation/types.py
"""
Data types for the Allocation Engine.

Inputs:
    HoldingCategory - Assigns an asset to a subcategory of a user category
    Subcategory     - A subcategory's display priority and color

Outputs:
    AllocationSlice   - One asset's share of the portfolio
    AllocationChart   - All slices for one valuation
    AllocationPoint   - An AllocationChart tagged with its date
    AllocationHistory - Dated charts with colors stable across dates
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from fintrack.models import AssetType


@dataclass(frozen=True)
class HoldingCategory:
    """
    Membership of an asset in a user-defined category.

    Attributes:
        asset_name: Asset being classified
        category: Category name (e.g. "Region")
        subcategory: Subcategory inside the category (e.g. "Europe"),
                     None when the asset is in the category but unassigned
    """

    asset_name: str
    category: str
    subcategory: str | None = None


@dataclass(frozen=True)
class Subcategory:
    """A subcategory's display settings. Higher priority sorts first."""

    name: str
    priority: int = 0
    color: str | None = None


@dataclass(frozen=True)
class AllocationSlice:
    """
    One asset's share of an allocation.

    Attributes:
        value: Asset value in the base currency
        percentage: value / total × 100 (2dp)
        subcategory_value: Sum of values in the slice's subcategory
        percentage_of_subcategory: subcategory_value / total × 100 (2dp),
                                   100 when no category is applied
    """

    asset_name: str
    symbol: str
    asset_type: AssetType
    subcategory: str
    value: Decimal
    color: str
    priority: int
    percentage: Decimal
    subcategory_value: Decimal
    percentage_of_subcategory: Decimal


@dataclass
class AllocationChart:
    """Allocation of one valuation, slices in display order."""

    base_currency: str
    category: str | None
    total_value: Decimal
    slices: list[AllocationSlice] = field(default_factory=list)
    subcategory_values: dict[str, Decimal] = field(default_factory=dict)

    @property
    def colors(self) -> dict[str, str]:
        """Asset name → slice color."""
        return {s.asset_name: s.color for s in self.slices}

    def __len__(self) -> int:
        return len(self.slices)


@dataclass
class AllocationPoint:
    date: date
    chart: AllocationChart


@dataclass
class AllocationHistory:
    """
    Allocation charts ordered by ascending date.

    Colors are keyed by asset name without a category, by subcategory with
    one, and are identical across all points.
    """

    base_currency: str
    category: str | None
    points: list[AllocationPoint] = field(default_factory=list)
    color_map: dict[str, str] = field(default_factory=dict)

    @property
    def dates(self) -> list[date]:
        return [p.date for p in self.points]

    def __len__(self) -> int:
        return len(self.points)
