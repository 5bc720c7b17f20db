# fintrack/schemas/transactions.py
"""
Pydantic schemas for transaction records.

Validation layers:
- Field constraints: type, non-negative credit/debit
- Field validators: normalization (uppercase, trim)
- Model validator: unit defaulting, symbol shape

IMPORTANT: All financial values use Decimal for precision.
Never use float for money!
"""

import datetime
from decimal import Decimal

from pydantic import Field, model_validator

from fintrack.models import Transaction, default_unit
from fintrack.schemas.holdings import AssetRecordBase
from fintrack.utils.price_keys import PAIR_SEPARATOR


class TransactionRecord(AssetRecordBase):
    """
    A single dated credit or debit movement of one asset.

    Well-formed records carry a movement on one side only, but both sides
    are accepted: the ledger always applies credit - debit.
    """

    transaction_id: int | str | None = Field(
        default=None,
        description="Identifier in the source store, if any"
    )

    account_id: str = Field(
        ...,
        min_length=1,
        description="Owning account identifier"
    )

    date: datetime.date = Field(
        ...,
        description="Date of the movement",
        examples=["2024-01-15"]
    )

    unit: str | None = Field(
        default=None,
        description="Unit label; derived from the asset type when omitted"
    )

    credit: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Quantity added (0 or positive)",
        examples=["0", "50", "0.25"]
    )

    debit: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Quantity removed (0 or positive)",
        examples=["0", "30"]
    )

    @model_validator(mode='after')
    def fill_unit(self) -> "TransactionRecord":
        if PAIR_SEPARATOR in self.symbol:
            raise ValueError(f"A transaction symbol cannot be a currency pair: '{self.symbol}'")
        if self.unit is None:
            self.unit = default_unit(self.asset_type, self.symbol)
        return self

    def to_domain(self) -> Transaction:
        return Transaction(
            transaction_id=self.transaction_id,
            account_id=self.account_id,
            date=self.date,
            asset_name=self.asset_name,
            symbol=self.symbol,
            unit=self.unit,
            asset_type=self.asset_type,
            credit=self.credit,
            debit=self.debit,
        )
