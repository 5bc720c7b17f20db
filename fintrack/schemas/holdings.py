# fintrack/schemas/holdings.py
"""
Pydantic schemas for holding records.

Holdings arrive from the account store as loose dicts or ORM rows; these
schemas validate and normalize them before they become immutable
fintrack.models.Holding values.

IMPORTANT: All financial values use Decimal for precision.
Never use float for money!
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from fintrack.models import AssetType, Holding, default_unit
from fintrack.schemas.validators import (
    normalize_asset_type,
    validate_currency_pair,
    validate_symbol,
)
from fintrack.utils.price_keys import PAIR_SEPARATOR


# =============================================================================
# BASE SCHEMA
# =============================================================================

class AssetRecordBase(BaseModel):
    """
    Fields identifying an asset, common to holdings and transactions.

    asset_name is the user's label and is kept case-sensitive; symbol and
    asset_type are normalized because they build price keys.
    """

    model_config = ConfigDict(from_attributes=True)

    asset_name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Name grouping the asset's holdings and transactions",
        examples=["Apple", "Cash EUR", "Bitcoin"]
    )

    symbol: str = Field(
        ...,
        description="Instrument symbol, or currency code for FOREX assets",
        examples=["AAPL", "BTC", "EUR"]
    )

    asset_type: AssetType = Field(
        ...,
        description="Asset class, also the price key suffix",
        examples=[AssetType.STOCK, AssetType.FOREX]
    )

    # =========================================================================
    # FIELD VALIDATORS (Normalization)
    # =========================================================================

    @field_validator('asset_name')
    @classmethod
    def strip_asset_name(cls, v: str) -> str:
        """Trim whitespace, keep case."""
        v = v.strip()
        if not v:
            raise ValueError("Asset name cannot be blank")
        return v

    @field_validator('symbol')
    @classmethod
    def validate_and_normalize_symbol(cls, v: str) -> str:
        """Validate and normalize a symbol or currency pair."""
        if PAIR_SEPARATOR in v:
            return validate_currency_pair(v)
        return validate_symbol(v)

    @field_validator('asset_type', mode='before')
    @classmethod
    def normalize_type(cls, v):
        return normalize_asset_type(v)


# =============================================================================
# HOLDING SCHEMA
# =============================================================================

class HoldingRecord(AssetRecordBase):
    """Current balance of one asset in one account."""

    account_id: str = Field(
        ...,
        min_length=1,
        description="Owning account identifier"
    )

    unit: str | None = Field(
        default=None,
        description="Unit label; derived from the asset type when omitted",
        examples=["SHARE", "BTC", "UNIT"]
    )

    total_balance: Decimal = Field(
        ...,
        description="Quantity held (may be negative for short or overdrawn positions)",
        examples=["10", "0.5", "-25.00"]
    )

    @model_validator(mode='after')
    def fill_unit(self) -> "HoldingRecord":
        if PAIR_SEPARATOR in self.symbol:
            raise ValueError(f"A holding symbol cannot be a currency pair: '{self.symbol}'")
        if self.unit is None:
            self.unit = default_unit(self.asset_type, self.symbol)
        return self

    def to_domain(self) -> Holding:
        return Holding(
            account_id=self.account_id,
            asset_name=self.asset_name,
            symbol=self.symbol,
            asset_type=self.asset_type,
            unit=self.unit,
            total_balance=self.total_balance,
        )
