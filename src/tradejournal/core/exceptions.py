"""Application-level exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} not found: {identifier}", code="NOT_FOUND")


class StructuralParseError(ValidationError):
    """
    Raised when an import file cannot be parsed as a whole.

    Covers an empty file, missing header columns, and a file in which no
    data row survived validation. Row-level problems never raise this.
    """

    def __init__(
        self,
        message: str,
        missing_columns: Optional[list[str]] = None,
        warnings: Optional[list[str]] = None,
    ):
        super().__init__(message)
        self.code = "STRUCTURAL_PARSE_ERROR"
        self.missing_columns = missing_columns or []
        self.warnings = warnings or []


class MarketDataError(AppError):
    """Raised by market data providers on network or API failures."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message, code="MARKET_DATA_ERROR")
        self.status = status
