# tests/services/ledger/test_ledger.py
"""
Unit tests for the Ledger.

Test Coverage:
- Display ordering (date desc, asset asc, credit asc, debit asc)
- Running balance recurrence from opening balances
- Idempotent fill, stale balances after mutation
- Closing balances only after a fill
"""

import logging
import random
from datetime import date
from decimal import Decimal

import pytest

from conftest import make_transaction
from fintrack.models import AssetType
from fintrack.services.exceptions import LedgerStateError
from fintrack.services.ledger import (
    Ledger,
    LedgerEntry,
    build_ledger,
    chronological_sort_key,
)

D1 = date(2024, 1, 1)
D2 = date(2024, 1, 2)
D3 = date(2024, 1, 3)


def snapshot(ledger: Ledger) -> list[tuple]:
    """Comparable view of entries: (date, asset, credit, debit, before, after)."""
    return [
        (e.date, e.asset_name, e.credit, e.debit, e.total_balance_before, e.total_balance_after)
        for e in ledger.entries()
    ]


@pytest.fixture
def cash_ledger() -> Ledger:
    """Opening Cash 100, +50 on D1, -30 on D2."""
    return build_ledger(
        [
            make_transaction(D1, "Cash", credit="50"),
            make_transaction(D2, "Cash", debit="30"),
        ],
        opening_balances={"Cash": Decimal("100")},
    )


@pytest.fixture
def mixed_transactions():
    """Two assets over three days, with same-day ties."""
    return [
        make_transaction(D1, "Cash", credit="1000"),
        make_transaction(D2, "Apple", credit="10", symbol="AAPL", asset_type=AssetType.STOCK),
        make_transaction(D2, "Cash", debit="1500"),
        make_transaction(D2, "Cash", credit="20"),
        make_transaction(D3, "Apple", debit="4", symbol="AAPL", asset_type=AssetType.STOCK),
        make_transaction(D3, "Cash", credit="600"),
    ]


# =============================================================================
# ORDERING
# =============================================================================

class TestOrdering:
    """Tests for display order."""

    def test_newest_first(self, cash_ledger):
        """D2 is listed before D1."""
        assert [e.date for e in cash_ledger.entries()] == [D2, D1]

    def test_same_day_ties(self, mixed_transactions):
        """Same date: asset name asc, then credit asc, then debit asc."""
        ledger = Ledger(mixed_transactions)

        day2 = [(e.asset_name, e.credit, e.debit) for e in ledger.entries() if e.date == D2]
        assert day2 == [
            ("Apple", Decimal("10"), Decimal("0")),
            ("Cash", Decimal("0"), Decimal("1500")),
            ("Cash", Decimal("20"), Decimal("0")),
        ]

    def test_debit_breaks_remaining_tie(self):
        """Same date, asset and credit: the smaller debit comes first in both orders."""
        ledger = Ledger(
            [
                make_transaction(D1, "Cash", debit="30"),
                make_transaction(D1, "Cash", debit="10"),
            ],
            opening_balances={"Cash": Decimal("100")},
        ).fill_balances()

        assert [e.debit for e in ledger.entries()] == [Decimal("10"), Decimal("30")]

        chronological = sorted(ledger.entries(), key=chronological_sort_key)
        assert [(e.debit, e.total_balance_before, e.total_balance_after) for e in chronological] == [
            (Decimal("10"), Decimal("100"), Decimal("90")),
            (Decimal("30"), Decimal("90"), Decimal("60")),
        ]
        assert ledger.closing_balances() == {"Cash": Decimal("60")}

    def test_order_independent_of_input(self, mixed_transactions):
        shuffled = list(mixed_transactions)
        random.Random(7).shuffle(shuffled)

        first = Ledger(mixed_transactions).fill_balances()
        second = Ledger(shuffled).fill_balances()

        assert snapshot(first) == snapshot(second)

    def test_order_kept_after_fill(self, mixed_transactions):
        ledger = Ledger(mixed_transactions)
        before_fill = [(e.date, e.asset_name, e.credit, e.debit) for e in ledger.entries()]

        ledger.fill_balances()

        after_fill = [(e.date, e.asset_name, e.credit, e.debit) for e in ledger.entries()]
        assert before_fill == after_fill

    def test_asset_names_sorted_case_sensitive(self):
        ledger = Ledger([
            make_transaction(D1, "cash"),
            make_transaction(D1, "Cash"),
            make_transaction(D2, "Apple"),
            make_transaction(D3, "Cash"),
        ])

        assert ledger.asset_names == ["Apple", "Cash", "cash"]


# =============================================================================
# BALANCES
# =============================================================================

class TestFillBalances:
    """Tests for the running balance recurrence."""

    def test_cash_example(self, cash_ledger):
        """100 → 150 on D1, 150 → 120 on D2, closing 120."""
        cash_ledger.fill_balances()

        d2, d1 = cash_ledger.entries()
        assert (d1.total_balance_before, d1.total_balance_after) == (Decimal("100"), Decimal("150"))
        assert (d2.total_balance_before, d2.total_balance_after) == (Decimal("150"), Decimal("120"))
        assert cash_ledger.closing_balances() == {"Cash": Decimal("120")}

    def test_balances_empty_before_fill(self, cash_ledger):
        assert all(not e.has_balances for e in cash_ledger.entries())
        assert not cash_ledger.is_filled

    def test_chronological_recurrence_per_asset(self, mixed_transactions):
        """
        Cash:  0 → 1000 (D1) → -500 (D2 debit 1500) → -480 (D2 credit 20) → 120 (D3)
        Apple: 0 → 10 (D2) → 6 (D3)
        """
        ledger = Ledger(mixed_transactions).fill_balances()

        chronological = sorted(ledger.entries(), key=chronological_sort_key)
        cash = [(e.total_balance_before, e.total_balance_after)
                for e in chronological if e.asset_name == "Cash"]
        assert cash == [
            (Decimal("0"), Decimal("1000")),
            (Decimal("1000"), Decimal("-500")),
            (Decimal("-500"), Decimal("-480")),
            (Decimal("-480"), Decimal("120")),
        ]
        assert ledger.closing_balances() == {"Cash": Decimal("120"), "Apple": Decimal("6")}

    def test_closing_equals_opening_plus_net_change(self, mixed_transactions):
        opening = {"Cash": Decimal("250.50"), "Apple": Decimal("3")}
        ledger = Ledger(mixed_transactions, opening_balances=opening).fill_balances()

        closing = ledger.closing_balances()
        for asset in ledger.asset_names:
            net = sum(
                (t.credit - t.debit for t in mixed_transactions if t.asset_name == asset),
                Decimal("0"),
            )
            assert closing[asset] == opening[asset] + net

    def test_each_entry_chains(self, mixed_transactions):
        """after = before + credit - debit on every entry."""
        ledger = Ledger(mixed_transactions).fill_balances()

        for e in ledger.entries():
            assert e.total_balance_after == e.total_balance_before + e.credit - e.debit

    def test_idempotent(self, mixed_transactions):
        ledger = Ledger(mixed_transactions, {"Cash": Decimal("5")})

        first = snapshot(ledger.fill_balances())
        first_closing = ledger.closing_balances()
        second = snapshot(ledger.fill_balances())

        assert first == second
        assert ledger.closing_balances() == first_closing

    def test_opening_only_asset_in_closing(self, cash_ledger):
        """Assets with an opening balance but no transactions keep it."""
        ledger = Ledger(cash_ledger.entries(), {"Cash": Decimal("100"), "Gold": Decimal("2")})

        assert ledger.fill_balances().closing_balances()["Gold"] == Decimal("2")

    def test_credit_and_debit_both_applied(self):
        ledger = Ledger([make_transaction(D1, "Cash", credit="10", debit="4")]).fill_balances()

        assert ledger.closing_balances() == {"Cash": Decimal("6")}

    def test_fill_returns_self(self, cash_ledger):
        assert cash_ledger.fill_balances() is cash_ledger

    def test_debug_trace_is_capped(self, mixed_transactions, caplog, monkeypatch):
        from fintrack.config import settings

        monkeypatch.setattr(settings, "max_ledger_log_entries", 2)
        with caplog.at_level(logging.DEBUG, logger="fintrack.services.ledger.ledger"):
            Ledger(mixed_transactions).fill_balances()

        traces = [r for r in caplog.records if "credit=" in r.getMessage()]
        assert len(traces) == 2


# =============================================================================
# STATE
# =============================================================================

class TestLedgerState:
    """Tests for mutation and the filled flag."""

    def test_closing_before_fill_raises(self, cash_ledger):
        with pytest.raises(LedgerStateError) as exc_info:
            cash_ledger.closing_balances()

        assert exc_info.value.operation == "closing_balances"

    def test_append_marks_stale(self, cash_ledger):
        cash_ledger.fill_balances()

        cash_ledger.append([make_transaction(D3, "Cash", credit="5")])

        assert not cash_ledger.is_filled
        with pytest.raises(LedgerStateError):
            cash_ledger.closing_balances()

    def test_append_then_fill(self, cash_ledger):
        cash_ledger.fill_balances()
        cash_ledger.append([make_transaction(D3, "Cash", credit="5")])
        cash_ledger.fill_balances()

        assert [e.date for e in cash_ledger.entries()] == [D3, D2, D1]
        assert cash_ledger.closing_balances() == {"Cash": Decimal("125")}

    def test_append_updates_asset_names(self, cash_ledger):
        cash_ledger.append([make_transaction(D3, "Apple", credit="1")])

        assert cash_ledger.asset_names == ["Apple", "Cash"]

    def test_rewrapped_entries_drop_balances(self, cash_ledger):
        """Entries from a filled ledger are re-wrapped without stale balances."""
        cash_ledger.fill_balances()
        copy = Ledger(cash_ledger.entries())

        assert all(not e.has_balances for e in copy.entries())

    def test_replace(self, cash_ledger):
        cash_ledger.fill_balances()

        cash_ledger.replace([make_transaction(D3, "Cash", debit="100")])

        assert len(cash_ledger) == 1
        assert cash_ledger.opening_balances == {"Cash": Decimal("100")}
        assert cash_ledger.fill_balances().closing_balances() == {"Cash": Decimal("0")}

    def test_set_opening_balances(self, cash_ledger):
        """New opening balances mark the ledger stale until the next fill."""
        cash_ledger.fill_balances()

        cash_ledger.set_opening_balances({"Cash": Decimal("10"), "Gold": Decimal("1")})

        assert not cash_ledger.is_filled
        with pytest.raises(LedgerStateError):
            cash_ledger.closing_balances()

        cash_ledger.fill_balances()
        d2, d1 = cash_ledger.entries()
        assert (d1.total_balance_before, d1.total_balance_after) == (Decimal("10"), Decimal("60"))
        assert cash_ledger.closing_balances() == {"Cash": Decimal("30"), "Gold": Decimal("1")}

    def test_clear(self, cash_ledger):
        cash_ledger.fill_balances()

        cash_ledger.clear()

        assert cash_ledger.entries() == []
        assert cash_ledger.asset_names == []
        assert cash_ledger.opening_balances == {}
        assert not cash_ledger.is_filled
        with pytest.raises(LedgerStateError):
            cash_ledger.closing_balances()

    def test_empty_ledger_fills(self):
        ledger = Ledger().fill_balances()

        assert ledger.entries() == []
        assert ledger.closing_balances() == {}
        assert ledger.earliest_date() is None

    def test_entries_are_copies(self, cash_ledger):
        entries = cash_ledger.entries()
        entries.clear()

        assert len(cash_ledger) == 2

    def test_entries_are_frozen(self, cash_ledger):
        entry = cash_ledger.entries()[0]

        assert isinstance(entry, LedgerEntry)
        with pytest.raises(AttributeError):
            entry.credit = Decimal("1")

    def test_closing_is_a_copy(self, cash_ledger):
        cash_ledger.fill_balances()
        cash_ledger.closing_balances()["Cash"] = Decimal("0")

        assert cash_ledger.closing_balances() == {"Cash": Decimal("120")}

    def test_earliest_date(self, mixed_transactions):
        assert Ledger(mixed_transactions).earliest_date() == D1


class TestLedgerEntry:
    """Tests for LedgerEntry conversion."""

    def test_round_trip_to_transaction(self):
        transaction = make_transaction(D1, "Cash", credit="5", transaction_id=42)

        entry = LedgerEntry.from_transaction(transaction)

        assert entry.to_transaction() == transaction
        assert entry.total_balance_before is None
