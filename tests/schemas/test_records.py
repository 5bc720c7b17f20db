# tests/schemas/test_records.py
"""
Tests for record schemas.

This module tests:
- Normalizers (symbol and currency uppercase, whitespace trimming)
- Unit defaulting per asset type
- Rejection of negative movements and malformed pairs
- Conversion to domain records
"""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest
from pydantic import ValidationError

from fintrack.models import AssetType, Holding, MarketPrice, Transaction
from fintrack.schemas import HoldingRecord, MarketPriceRecord, TransactionRecord
from fintrack.schemas.validators import (
    validate_currency,
    validate_currency_pair,
    validate_symbol,
)


# =============================================================================
# VALIDATORS
# =============================================================================

class TestValidators:
    """Tests for reusable validators."""

    def test_symbol_normalized(self):
        assert validate_symbol("  brk-b ") == "BRK-B"

    def test_symbol_rejects_spaces_inside(self):
        with pytest.raises(ValueError):
            validate_symbol("BR K")

    def test_symbol_rejects_empty(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            validate_symbol("")

    def test_currency_normalized(self):
        assert validate_currency(" eur ") == "EUR"

    def test_currency_rejects_wrong_length(self):
        with pytest.raises(ValueError, match="3-letter"):
            validate_currency("EURO")

    def test_pair_normalized(self):
        assert validate_currency_pair(" usd / eur ") == "USD/EUR"

    def test_pair_rejects_three_parts(self):
        with pytest.raises(ValueError, match="BASE/QUOTE"):
            validate_currency_pair("USD/EUR/GBP")


# =============================================================================
# HOLDING RECORD
# =============================================================================

class TestHoldingRecord:
    """Tests for HoldingRecord."""

    def test_valid_holding(self):
        record = HoldingRecord(
            account_id="acc-1",
            asset_name=" Apple ",
            symbol="aapl",
            asset_type="stock",
            total_balance="10.5",
        )

        assert record.asset_name == "Apple"
        assert record.symbol == "AAPL"
        assert record.asset_type == AssetType.STOCK
        assert record.total_balance == Decimal("10.5")
        assert record.unit == "SHARE"

    def test_to_domain(self):
        record = HoldingRecord(
            account_id="acc-1",
            asset_name="Cash EUR",
            symbol="eur",
            asset_type="FOREX",
            total_balance="100",
        )

        assert record.to_domain() == Holding(
            account_id="acc-1",
            asset_name="Cash EUR",
            symbol="EUR",
            asset_type=AssetType.FOREX,
            unit="EUR",
            total_balance=Decimal("100"),
        )

    def test_explicit_unit_kept(self):
        record = HoldingRecord(
            account_id="acc-1",
            asset_name="Gold",
            symbol="GOLD",
            asset_type=AssetType.COMMODITY,
            unit="OZ",
            total_balance="2",
        )

        assert record.unit == "OZ"

    def test_from_attributes(self):
        row = SimpleNamespace(
            account_id="acc-1",
            asset_name="Bitcoin",
            symbol="btc",
            asset_type="CRYPTO",
            unit=None,
            total_balance=Decimal("0.5"),
        )

        record = HoldingRecord.model_validate(row)

        assert record.unit == "BTC"

    def test_pair_symbol_rejected(self):
        with pytest.raises(ValidationError):
            HoldingRecord(
                account_id="acc-1",
                asset_name="Pair",
                symbol="USD/EUR",
                asset_type="FOREX",
                total_balance="1",
            )

    def test_unknown_asset_type_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            HoldingRecord(
                account_id="acc-1",
                asset_name="Bond",
                symbol="XYZ",
                asset_type="BOND",
                total_balance="1",
            )

        assert exc_info.value.errors()[0]["loc"] == ("asset_type",)

    def test_blank_asset_name_rejected(self):
        with pytest.raises(ValidationError):
            HoldingRecord(
                account_id="acc-1",
                asset_name="   ",
                symbol="AAPL",
                asset_type="STOCK",
                total_balance="1",
            )


# =============================================================================
# TRANSACTION RECORD
# =============================================================================

class TestTransactionRecord:
    """Tests for TransactionRecord."""

    def test_valid_transaction(self):
        record = TransactionRecord(
            transaction_id=7,
            account_id="acc-1",
            date="2024-01-15",
            asset_name="Cash",
            symbol="usd",
            asset_type="forex",
            credit="50",
        )

        assert record.date == date(2024, 1, 15)
        assert record.debit == Decimal("0")
        assert record.unit == "USD"

    def test_to_domain(self):
        record = TransactionRecord(
            account_id="acc-1",
            date=date(2024, 1, 15),
            asset_name="Apple",
            symbol="AAPL",
            asset_type="STOCK",
            debit="3",
        )

        assert record.to_domain() == Transaction(
            transaction_id=None,
            account_id="acc-1",
            date=date(2024, 1, 15),
            asset_name="Apple",
            symbol="AAPL",
            unit="SHARE",
            asset_type=AssetType.STOCK,
            credit=Decimal("0"),
            debit=Decimal("3"),
        )

    @pytest.mark.parametrize("field", ["credit", "debit"])
    def test_negative_movement_rejected(self, field):
        with pytest.raises(ValidationError) as exc_info:
            TransactionRecord(
                account_id="acc-1",
                date=date(2024, 1, 15),
                asset_name="Cash",
                symbol="USD",
                asset_type="FOREX",
                **{field: "-1"},
            )

        assert exc_info.value.errors()[0]["loc"] == (field,)

    def test_required_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            TransactionRecord()

        error_fields = {e["loc"][0] for e in exc_info.value.errors()}
        assert {"account_id", "date", "asset_name", "symbol", "asset_type"}.issubset(error_fields)

    def test_unknown_type_unit(self):
        record = TransactionRecord(
            account_id="acc-1",
            date=date(2024, 1, 15),
            asset_name="Mystery",
            symbol="XYZ",
            asset_type="UNKNOWN",
            credit="1",
        )

        assert record.unit == "UNKNOWN"


# =============================================================================
# MARKET PRICE RECORD
# =============================================================================

class TestMarketPriceRecord:
    """Tests for MarketPriceRecord."""

    def test_forex_pair(self):
        record = MarketPriceRecord(symbol=" usd/eur ", asset_type="FOREX", price="0.90")

        assert record.symbol == "USD/EUR"
        assert record.key == "USD/EUR-FOREX"
        assert record.to_domain() == MarketPrice("USD/EUR", AssetType.FOREX, Decimal("0.90"))

    def test_instrument(self):
        record = MarketPriceRecord(symbol="aapl", asset_type="stock", price="150")

        assert record.key == "AAPL-STOCK"

    def test_forex_requires_pair(self):
        with pytest.raises(ValidationError, match="BASE/QUOTE"):
            MarketPriceRecord(symbol="EUR", asset_type="FOREX", price="1")

    def test_pair_requires_forex(self):
        with pytest.raises(ValidationError, match="Only FOREX"):
            MarketPriceRecord(symbol="USD/EUR", asset_type="STOCK", price="1")

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError):
            MarketPriceRecord(symbol="AAPL", asset_type="STOCK", price="-1")
