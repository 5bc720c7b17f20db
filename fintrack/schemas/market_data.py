# fintrack/schemas/market_data.py
"""
Pydantic schemas for market price records.

Prices come from the market-data subsystem. Non-forex prices are quoted in
USD; forex prices carry a "BASE/QUOTE" symbol meaning 1 BASE = price QUOTE.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from fintrack.models import AssetType, MarketPrice
from fintrack.schemas.validators import (
    normalize_asset_type,
    validate_currency_pair,
    validate_symbol,
)
from fintrack.utils.price_keys import PAIR_SEPARATOR


class MarketPriceRecord(BaseModel):
    """One entry of a price snapshot."""

    model_config = ConfigDict(from_attributes=True)

    symbol: str = Field(
        ...,
        description="Instrument symbol, or BASE/QUOTE for FOREX",
        examples=["AAPL", "BTC", "USD/EUR"]
    )

    asset_type: AssetType = Field(
        ...,
        description="Asset class of the quoted instrument",
        examples=[AssetType.STOCK, AssetType.FOREX]
    )

    price: Decimal = Field(
        ...,
        ge=0,
        description="Last price (USD for non-forex, quote currency for pairs)",
        examples=["150.00", "0.90"]
    )

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator('symbol')
    @classmethod
    def validate_and_normalize_symbol(cls, v: str) -> str:
        if PAIR_SEPARATOR in v:
            return validate_currency_pair(v)
        return validate_symbol(v)

    @field_validator('asset_type', mode='before')
    @classmethod
    def normalize_type(cls, v):
        return normalize_asset_type(v)

    @model_validator(mode='after')
    def check_pair_shape(self) -> "MarketPriceRecord":
        """FOREX prices must be quoted as a pair, everything else must not."""
        is_pair = PAIR_SEPARATOR in self.symbol
        if self.asset_type == AssetType.FOREX and not is_pair:
            raise ValueError(f"FOREX price symbol must be BASE/QUOTE, got '{self.symbol}'")
        if self.asset_type != AssetType.FOREX and is_pair:
            raise ValueError(
                f"Only FOREX prices can use a currency pair symbol, "
                f"got '{self.symbol}' as {self.asset_type.value}"
            )
        return self

    @property
    def key(self) -> str:
        return self.to_domain().key

    def to_domain(self) -> MarketPrice:
        return MarketPrice(
            symbol=self.symbol,
            asset_type=self.asset_type,
            price=self.price,
        )
