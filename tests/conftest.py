# tests/conftest.py
"""
Pytest configuration and fixtures.

This module provides shared fixtures for all tests:
- Record factories (holdings, transactions, market prices)
- A sample price snapshot with stock, crypto and forex quotes
"""

from datetime import date
from decimal import Decimal

import pytest

from fintrack.models import AssetType, Holding, MarketPrice, Transaction
from fintrack.services.valuation import build_price_snapshot


# =============================================================================
# FACTORIES
# =============================================================================

def make_holding(
        asset_name: str,
        symbol: str,
        asset_type: AssetType,
        total_balance: str | Decimal,
        account_id: str = "acc-1",
        unit: str = "UNIT",
) -> Holding:
    """Create a Holding with sensible defaults."""
    return Holding(
        account_id=account_id,
        asset_name=asset_name,
        symbol=symbol,
        asset_type=asset_type,
        unit=unit,
        total_balance=Decimal(total_balance),
    )


def make_transaction(
        day: date,
        asset_name: str = "Cash",
        credit: str | Decimal = "0",
        debit: str | Decimal = "0",
        symbol: str = "USD",
        asset_type: AssetType = AssetType.FOREX,
        transaction_id: int | None = None,
        account_id: str = "acc-1",
) -> Transaction:
    """Create a Transaction; defaults describe a USD cash movement."""
    return Transaction(
        transaction_id=transaction_id,
        account_id=account_id,
        date=day,
        asset_name=asset_name,
        symbol=symbol,
        unit=symbol,
        asset_type=asset_type,
        credit=Decimal(credit),
        debit=Decimal(debit),
    )


def make_price(symbol: str, asset_type: AssetType, price: str | Decimal) -> MarketPrice:
    """Create a MarketPrice."""
    return MarketPrice(symbol=symbol, asset_type=asset_type, price=Decimal(price))


def make_fx(base: str, quote: str, rate: str | Decimal) -> MarketPrice:
    """Create a forex MarketPrice: 1 base = rate quote."""
    return make_price(f"{base}/{quote}", AssetType.FOREX, rate)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def price_snapshot() -> dict[str, MarketPrice]:
    """Snapshot with USD quotes for AAPL/BTC/GOLD and a USD/EUR rate."""
    return build_price_snapshot([
        make_price("AAPL", AssetType.STOCK, "150.00"),
        make_price("BTC", AssetType.CRYPTO, "40000"),
        make_price("GOLD", AssetType.COMMODITY, "2000"),
        make_fx("USD", "EUR", "0.90"),
    ])


@pytest.fixture
def aapl_holding() -> Holding:
    """10 shares of Apple."""
    return make_holding("Apple", "AAPL", AssetType.STOCK, "10", unit="SHARE")
