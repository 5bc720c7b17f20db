# fintrack/services/__init__.py
"""
Service layer for the computation engines.

Services:
- Have NO I/O (holdings, transactions and prices arrive already fetched)
- Raise domain-specific exceptions
- Report data-quality gaps as warnings instead of raising

Usage:
    from fintrack.services import ValuationService, valuate
    from fintrack.services import Ledger, LedgerService, build_ledger
    from fintrack.services import AllocationCalculator
    from fintrack.services import LedgerStateError

Architecture:
    services/
    ├── __init__.py                  # This file - main exports
    ├── exceptions.py                # Domain exceptions
    ├── constants.py                 # Business constants (quote currency, palette)
    ├── valuation/                   # Valuation engine
    │   ├── service.py               # Main valuation orchestrator
    │   ├── types.py                 # Valuation data types
    │   └── calculators.py           # Price resolution and asset value
    ├── ledger/                      # Ledger engine
    │   ├── ledger.py                # Ordered entries and running balances
    │   ├── types.py                 # LedgerEntry
    │   └── service.py               # Overview anchored on current holdings
    └── allocation/                  # Allocation engine
        ├── types.py                 # Allocation data types
        └── calculators.py           # Allocation and allocation history
"""

# Exceptions
from fintrack.services.exceptions import (
    ServiceError,
    ValidationError,
    CategoryNotFoundError,
    LedgerError,
    LedgerStateError,
    PriceResolutionError,
)
# Valuation
from fintrack.services.valuation import (
    ValuationService,
    PortfolioValuation,
    AssetValuation,
    PriceIssue,
    build_price_snapshot,
    valuate,
)
# Ledger
from fintrack.services.ledger import (
    Ledger,
    LedgerEntry,
    LedgerService,
    build_ledger,
)
# Allocation
from fintrack.services.allocation import (
    AllocationCalculator,
    AllocationHistoryCalculator,
    HoldingCategory,
    Subcategory,
)

__all__ = [
    # ==========================================================================
    # Services
    # ==========================================================================
    # Valuation
    "ValuationService",
    "PortfolioValuation",
    "AssetValuation",
    "PriceIssue",
    "build_price_snapshot",
    "valuate",
    # Ledger
    "Ledger",
    "LedgerEntry",
    "LedgerService",
    "build_ledger",
    # Allocation
    "AllocationCalculator",
    "AllocationHistoryCalculator",
    "HoldingCategory",
    "Subcategory",

    # ==========================================================================
    # Exceptions
    # ==========================================================================
    "ServiceError",
    "ValidationError",
    "CategoryNotFoundError",
    "LedgerError",
    "LedgerStateError",
    "PriceResolutionError",
]
