# fintrack/services/ledger/ledger.py
"""
Running-balance transaction ledger.

One Ledger holds one account's transactions in a single owned list and keeps
it in two orders:

    Display order        date DESC, asset_name ASC, credit ASC, debit ASC
    Chronological order  date ASC,  asset_name ASC, credit ASC, debit ASC

Display order is what entries() returns, always. Chronological order exists
only inside fill_balances(): the list is sorted ascending, balances are
accumulated entry by entry, and the list is sorted back. Balances stay on the
entry they describe through both sorts, so they cannot drift away from it.

Balance recurrence (per asset, chronological):
    before = running[asset]          (opening balance, 0 if none)
    after  = before + credit - debit
    running[asset] = after

After the pass, `running` is the closing-balance map. It is only readable
while the balances are filled; any mutation clears that flag.

Usage:
    ledger = Ledger(transactions, opening_balances={"Cash": Decimal("100")})
    ledger.fill_balances()
    for entry in ledger.entries():
        print(entry.date, entry.total_balance_before, entry.total_balance_after)
    ledger.closing_balances()["Cash"]
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal

from fintrack.config import settings
from fintrack.models import Transaction
from fintrack.services.exceptions import LedgerStateError
from fintrack.services.ledger.types import LedgerEntry

logger = logging.getLogger(__name__)


def display_sort_key(entry: Transaction) -> tuple:
    return (-entry.date.toordinal(), entry.asset_name, entry.credit, entry.debit)


def chronological_sort_key(entry: Transaction) -> tuple:
    return (entry.date.toordinal(), entry.asset_name, entry.credit, entry.debit)


class Ledger:
    """
    Transaction list with per-asset running balances.

    Attributes:
        _entries: Owned entry list, in display order between operations
        _asset_names: Sorted distinct asset names (case-sensitive)
        _opening_balances: Balance carried in from before the visible window
        _closing_balances: Per-asset balance after the last transaction
        _is_filled: True while balances match the current entry set
    """

    def __init__(
            self,
            transactions: Iterable[Transaction] = (),
            opening_balances: Mapping[str, Decimal] | None = None,
    ) -> None:
        self._entries: list[LedgerEntry] = [
            LedgerEntry.from_transaction(t) for t in transactions
        ]
        self._asset_names: list[str] = []
        self._opening_balances: dict[str, Decimal] = dict(opening_balances or {})
        self._closing_balances: dict[str, Decimal] = {}
        self._is_filled = False

        self._refresh_asset_names()
        self._sort_for_display()

    # =========================================================================
    # READ ACCESS
    # =========================================================================

    def entries(self) -> list[LedgerEntry]:
        """Entries in display order (a new list of frozen entries)."""
        return list(self._entries)

    @property
    def asset_names(self) -> list[str]:
        return list(self._asset_names)

    @property
    def opening_balances(self) -> dict[str, Decimal]:
        return dict(self._opening_balances)

    @property
    def is_filled(self) -> bool:
        return self._is_filled

    def earliest_date(self) -> date | None:
        """Date of the oldest entry, None when the ledger is empty."""
        if not self._entries:
            return None
        return min(entry.date for entry in self._entries)

    def closing_balances(self) -> dict[str, Decimal]:
        """
        Per-asset balance after the last transaction.

        Includes assets that only have an opening balance.

        Raises:
            LedgerStateError: If fill_balances() has not run since the last
                              mutation
        """
        if not self._is_filled:
            raise LedgerStateError("closing_balances")
        return dict(self._closing_balances)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self.entries())

    # =========================================================================
    # MUTATION
    # =========================================================================

    def append(self, transactions: Iterable[Transaction]) -> None:
        """
        Add transactions and restore display order.

        Existing balances become stale: call fill_balances() again before
        trusting balances or reading closing_balances().
        """
        new_entries = [LedgerEntry.from_transaction(t) for t in transactions]
        self._entries.extend(new_entries)
        self._is_filled = False
        self._refresh_asset_names()
        self._sort_for_display()
        logger.debug(f"Appended {len(new_entries)} transactions, ledger size={len(self._entries)}")

    def replace(self, transactions: Iterable[Transaction]) -> None:
        """Swap the whole transaction set, keeping the opening balances."""
        self._entries = [LedgerEntry.from_transaction(t) for t in transactions]
        self._closing_balances = {}
        self._is_filled = False
        self._refresh_asset_names()
        self._sort_for_display()

    def set_opening_balances(self, opening_balances: Mapping[str, Decimal]) -> None:
        """Replace the opening balances; filled balances become stale."""
        self._opening_balances = dict(opening_balances)
        self._is_filled = False

    def clear(self) -> None:
        """Drop every entry, asset name and balance map."""
        self._entries.clear()
        self._asset_names.clear()
        self._opening_balances.clear()
        self._closing_balances.clear()
        self._is_filled = False

    # =========================================================================
    # BALANCES
    # =========================================================================

    def fill_balances(self) -> Ledger:
        """
        Recompute every entry's before/after balance from scratch.

        Deterministic and idempotent: the running map always restarts from
        the opening balances, and ties on a date are broken by asset name,
        credit and debit.

        Returns:
            self, for chaining
        """
        running: dict[str, Decimal] = dict(self._opening_balances)
        log_limit = settings.max_ledger_log_entries

        logger.debug(
            f"Filling balances for {len(self._entries)} entries, "
            f"opening balances={running}"
        )

        self._entries.sort(key=chronological_sort_key)

        for index, entry in enumerate(self._entries):
            before = running.get(entry.asset_name, Decimal("0"))
            after = before + entry.credit - entry.debit
            self._entries[index] = entry.with_balances(before, after)
            running[entry.asset_name] = after

            if index < log_limit:
                logger.debug(
                    f"{entry.date} {entry.asset_name}: credit={entry.credit}, "
                    f"debit={entry.debit}, before={before}, after={after}"
                )

        self._closing_balances = running
        self._is_filled = True
        self._sort_for_display()

        logger.debug(f"Closing balances: {self._closing_balances}")
        return self

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _sort_for_display(self) -> None:
        self._entries.sort(key=display_sort_key)

    def _refresh_asset_names(self) -> None:
        self._asset_names = sorted({entry.asset_name for entry in self._entries})


def build_ledger(
        transactions: Iterable[Transaction],
        opening_balances: Mapping[str, Decimal] | None = None,
) -> Ledger:
    """Create a Ledger in display order; balances are not yet filled."""
    return Ledger(transactions, opening_balances)
