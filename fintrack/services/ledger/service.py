# fintrack/services/ledger/service.py
"""
Ledger Service - account transaction overview.

Builds a filled Ledger for a date window when only the account's CURRENT
balances are known. The opening balances of the window are derived by
walking backwards from the current balances:

    opening[a] = current[a] - Σ(credit - debit)
                 over a's transactions dated on or after the window start

Transactions after the window end are subtracted as well, so the ledger's
closing balances are the balances at the window end, and without an end
date they equal the current balances.

Usage:
    from fintrack.services.ledger import LedgerService

    ledger = LedgerService().build_overview(
        transactions,
        current_balances={"Cash": Decimal("120")},
        start_date=date(2024, 1, 1),
    )
    rows = ledger.entries()
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import date
from decimal import Decimal

from fintrack.models import Transaction
from fintrack.services.exceptions import ValidationError
from fintrack.services.ledger.ledger import Ledger

logger = logging.getLogger(__name__)


class LedgerService:
    """Builds ledgers whose balances are anchored on current holdings."""

    @staticmethod
    def derive_opening_balances(
            current_balances: Mapping[str, Decimal],
            transactions: Iterable[Transaction],
    ) -> dict[str, Decimal]:
        """
        Balances before the given transactions happened.

        Every asset present in either input gets an entry: its current
        balance (0 if absent) minus the net change of its transactions.
        """
        opening: dict[str, Decimal] = dict(current_balances)
        for transaction in transactions:
            current = opening.get(transaction.asset_name, Decimal("0"))
            opening[transaction.asset_name] = current - transaction.net_change
        return opening

    def build_overview(
            self,
            transactions: Sequence[Transaction],
            current_balances: Mapping[str, Decimal],
            start_date: date | None = None,
            end_date: date | None = None,
    ) -> Ledger:
        """
        Filled ledger of the transactions inside [start_date, end_date].

        Args:
            transactions: Every transaction of the account
            current_balances: Asset name -> balance today
            start_date: First visible date (inclusive), None for no lower bound
            end_date: Last visible date (inclusive), None for no upper bound

        Returns:
            Ledger with balances filled (empty when nothing is visible)

        Raises:
            ValidationError: If start_date is after end_date
        """
        if start_date is not None and end_date is not None and start_date > end_date:
            raise ValidationError(
                f"Start date {start_date} is after end date {end_date}",
                field="start_date",
            )

        visible = [t for t in transactions if self._in_window(t.date, start_date, end_date)]
        unwound = [t for t in transactions if start_date is None or t.date >= start_date]

        opening = self.derive_opening_balances(current_balances, unwound)
        ledger = Ledger(visible, opening_balances=opening).fill_balances()

        logger.info(
            f"Ledger overview built: {len(visible)} of {len(transactions)} transactions, "
            f"{len(ledger.asset_names)} assets, window={start_date}..{end_date}"
        )
        return ledger

    @staticmethod
    def _in_window(day: date, start_date: date | None, end_date: date | None) -> bool:
        if start_date is not None and day < start_date:
            return False
        if end_date is not None and day > end_date:
            return False
        return True
