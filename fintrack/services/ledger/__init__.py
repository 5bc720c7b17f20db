# fintrack/services/ledger/__init__.py
"""
Ledger Service Package.

Orders an account's transactions for display and annotates every entry with
the running balance of its asset before and after it.

Usage:
    from fintrack.services.ledger import build_ledger

    ledger = build_ledger(transactions, opening_balances).fill_balances()
    ledger.entries()            # display order, balances filled
    ledger.closing_balances()   # asset name -> balance after last entry

Architecture:
    ledger/
    ├── __init__.py        # This file - package exports
    ├── types.py           # LedgerEntry
    ├── ledger.py          # Ledger, build_ledger, sort keys
    └── service.py         # LedgerService (overview anchored on holdings)
"""

from fintrack.services.ledger.ledger import (
    Ledger,
    build_ledger,
    chronological_sort_key,
    display_sort_key,
)
from fintrack.services.ledger.service import LedgerService
from fintrack.services.ledger.types import LedgerEntry

__all__ = [
    "Ledger",
    "LedgerEntry",
    "LedgerService",
    "build_ledger",
    "display_sort_key",
    "chronological_sort_key",
]
