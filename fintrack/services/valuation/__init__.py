# fintrack/services/valuation/__init__.py
"""
Valuation Service Package.

Values an account's holdings in one base currency from a price snapshot,
resolving forex pairs (direct, then inverted) and converting USD-quoted
instruments through the USD/base rate.

Usage:
    from fintrack.services.valuation import valuate, build_price_snapshot

    snapshot = build_price_snapshot(prices)
    result = valuate(holdings, snapshot, "EUR")

Architecture:
    valuation/
    ├── __init__.py        # This file - package exports
    ├── types.py           # AssetValuation, PortfolioValuation, PriceIssue
    ├── calculators.py     # PriceCalculator, ValueCalculator
    └── service.py         # ValuationService (orchestrator)

Data Flow:
    Holding + snapshot → PriceCalculator → PriceResolution
    Holding + PriceResolution → ValueCalculator → AssetValuation
    All AssetValuation → PortfolioValuation
"""

from fintrack.services.valuation.calculators import PriceCalculator, ValueCalculator
from fintrack.services.valuation.service import (
    ValuationService,
    build_price_snapshot,
    valuate,
)
from fintrack.services.valuation.types import (
    AssetValuation,
    PortfolioValuation,
    PriceIssue,
    PriceResolution,
    PriceSource,
)

__all__ = [
    # Main service
    "ValuationService",
    "valuate",
    "build_price_snapshot",

    # Data types
    "AssetValuation",
    "PortfolioValuation",
    "PriceIssue",
    "PriceResolution",
    "PriceSource",

    # Calculators (for testing)
    "PriceCalculator",
    "ValueCalculator",
]
