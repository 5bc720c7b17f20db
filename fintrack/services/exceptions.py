# fintrack/services/exceptions.py
"""
Service layer exceptions.

These exceptions represent domain-specific errors and contain NO transport
knowledge. The caller's service layer maps them to responses.

Data-quality gaps (a missing price or FX rate) are NOT exceptions: they
degrade a single valuation and are reported through PriceIssue/warnings.

Exception Hierarchy:
    ServiceError (base)
    ├── ValidationError
    │   └── CategoryNotFoundError
    ├── LedgerError
    │   └── LedgerStateError
    └── PriceResolutionError
"""


class ServiceError(Exception):
    """
    Base exception for all service layer errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(ServiceError):
    """
    Raised when a programmatic argument is invalid (empty base currency,
    unusable category setup). Raw record validation is handled by Pydantic
    in fintrack.schemas.

    Attributes:
        field: The field that failed validation (optional)
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class CategoryNotFoundError(ValidationError):
    """
    Raised when an allocation is requested for a category that has no
    subcategories defined.
    """

    def __init__(self, category: str) -> None:
        self.category = category
        super().__init__(
            f"No subcategories found for category '{category}'",
            field="category",
        )


# =============================================================================
# LEDGER ERRORS
# =============================================================================


class LedgerError(ServiceError):
    """Base exception for ledger errors."""
    pass


class LedgerStateError(LedgerError):
    """
    Raised when ledger data is read in a state that cannot produce it.

    Closing balances only exist after fill_balances() has run since the last
    mutation (construct, append, replace, clear). This is a caller programming
    error, never a data problem.

    Attributes:
        operation: The operation that was attempted
    """

    def __init__(self, operation: str, reason: str = "balances are not filled") -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Illegal ledger state for {operation}: {reason}")


# =============================================================================
# PRICE ERRORS
# =============================================================================


class PriceResolutionError(ServiceError):
    """
    Raised by strict lookups when a required price key is absent.

    The valuation engine itself never raises this: it degrades the affected
    asset instead. Callers that need all-or-nothing valuations use
    PortfolioValuation.raise_for_issues().

    Attributes:
        asset_name: Asset whose price could not be resolved
        key: Snapshot key that was missing
    """

    def __init__(self, asset_name: str, key: str) -> None:
        self.asset_name = asset_name
        self.key = key
        super().__init__(f"No price for '{asset_name}' (missing key '{key}')")


__all__ = [
    "ServiceError",
    "ValidationError",
    "CategoryNotFoundError",
    "LedgerError",
    "LedgerStateError",
    "PriceResolutionError",
]
