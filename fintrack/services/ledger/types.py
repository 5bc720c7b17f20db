# fintrack/services/ledger/types.py
"""
Data types for the Ledger Engine.

LedgerEntry is a Transaction carrying the running balance of its asset
immediately before and after it. Entries are frozen: the ledger replaces an
entry when it recomputes balances, and consumers can never alter the copy
they were handed.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from decimal import Decimal

from fintrack.models import Transaction

_TRANSACTION_FIELDS = tuple(f.name for f in fields(Transaction))


@dataclass(frozen=True)
class LedgerEntry(Transaction):
    """
    Transaction with running balances.

    Attributes:
        total_balance_before: Asset balance before this movement
                              (None until the ledger's balances are filled)
        total_balance_after: total_balance_before + credit - debit
    """

    total_balance_before: Decimal | None = None
    total_balance_after: Decimal | None = None

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> LedgerEntry:
        """Wrap a transaction with empty balances (drops any previous balances)."""
        return cls(**{name: getattr(transaction, name) for name in _TRANSACTION_FIELDS})

    def with_balances(self, before: Decimal, after: Decimal) -> LedgerEntry:
        return replace(self, total_balance_before=before, total_balance_after=after)

    def to_transaction(self) -> Transaction:
        return Transaction(**{name: getattr(self, name) for name in _TRANSACTION_FIELDS})

    @property
    def has_balances(self) -> bool:
        return self.total_balance_before is not None
