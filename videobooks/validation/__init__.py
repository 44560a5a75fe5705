"""Form validation package."""

from videobooks.validation.validator import (
    RecordValidationError,
    RecordValidator,
    parse_amount,
    parse_count,
)

__all__ = [
    "RecordValidationError",
    "RecordValidator",
    "parse_amount",
    "parse_count",
]
