"""Transaction validation package."""

from fincalc.validation.validator import (
    InvalidAmountError,
    TransactionValidator,
    ValidationError,
    parse_amount,
)

__all__ = [
    "InvalidAmountError",
    "TransactionValidator",
    "ValidationError",
    "parse_amount",
]
