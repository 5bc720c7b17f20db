# fintrack/services/allocation/__init__.py
"""
Allocation Service Package.

Turns valuation output into allocation breakdowns, per asset or per
user-defined category, and into dated allocation histories.

Usage:
    from fintrack.services.allocation import AllocationCalculator

    chart = AllocationCalculator().calculate(valuation)
    for s in chart.slices:
        print(s.asset_name, s.percentage, s.color)

Architecture:
    allocation/
    ├── __init__.py        # This file - package exports
    ├── types.py           # HoldingCategory, Subcategory, AllocationChart, ...
    └── calculators.py     # AllocationCalculator, AllocationHistoryCalculator
"""

from fintrack.services.allocation.calculators import (
    AllocationCalculator,
    AllocationHistoryCalculator,
    PaletteCycler,
    percentage_of,
)
from fintrack.services.allocation.types import (
    AllocationChart,
    AllocationHistory,
    AllocationPoint,
    AllocationSlice,
    HoldingCategory,
    Subcategory,
)

__all__ = [
    # Calculators
    "AllocationCalculator",
    "AllocationHistoryCalculator",
    "PaletteCycler",
    "percentage_of",

    # Data types
    "AllocationChart",
    "AllocationHistory",
    "AllocationPoint",
    "AllocationSlice",
    "HoldingCategory",
    "Subcategory",
]
