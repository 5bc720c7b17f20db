# fintrack/schemas/__init__.py
"""
Pydantic schemas for raw record validation.

Each record normalizes its input and converts to an immutable domain type
with to_domain().
"""

from fintrack.schemas.holdings import AssetRecordBase, HoldingRecord
from fintrack.schemas.market_data import MarketPriceRecord
from fintrack.schemas.transactions import TransactionRecord

__all__ = [
    "AssetRecordBase",
    "HoldingRecord",
    "MarketPriceRecord",
    "TransactionRecord",
]
