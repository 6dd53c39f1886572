"""Core utilities and shared functionality."""

from tradejournal.core.timezone import (
    now_utc,
    to_utc,
    parse_datetime_utc,
    to_iso_utc,
    UTC,
)
from tradejournal.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    StructuralParseError,
    MarketDataError,
)

__all__ = [
    "now_utc",
    "to_utc",
    "parse_datetime_utc",
    "to_iso_utc",
    "UTC",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "StructuralParseError",
    "MarketDataError",
]
