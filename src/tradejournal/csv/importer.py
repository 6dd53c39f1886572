"""CSV import functionality."""

import logging
import re
from decimal import Decimal, InvalidOperation
from typing import Union

from tradejournal.core.exceptions import StructuralParseError
from tradejournal.core.timezone import parse_datetime_utc
from tradejournal.domain.models import TradeCreate, TradeStatus
from tradejournal.domain.views import ImportResult, RowSkipWarning

logger = logging.getLogger(__name__)


# Shared column order for import validation and export
CSV_COLUMNS = [
    "date",
    "coinSlugOrAddress",
    "entryPrice",
    "quantity",
    "targetPrice",
    "stopLoss",
    "status",
    "notes",
]

_LINE_SPLIT = re.compile(r"\r?\n")
_WHITESPACE = re.compile(r"\s+")

_VALID_STATUSES = {s.value for s in TradeStatus}


def normalize_header(name: str) -> str:
    """Case-fold a header name and drop all whitespace."""
    return _WHITESPACE.sub("", name).lower()


def _unquote(value: str) -> str:
    value = value.strip()
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        value = value[1:-1].replace('""', '"')
    return value


def split_csv_line(line: str) -> list[str]:
    """
    Split one line into fields.

    Commas inside double-quoted spans are kept; a doubled quote inside a
    quoted span is one literal quote. Fields are trimmed outside quotes.
    Quoted fields spanning several lines are not supported.
    """
    fields: list[str] = []
    start = 0
    in_quotes = False
    for i, char in enumerate(line):
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append(_unquote(line[start:i]))
            start = i + 1
    fields.append(_unquote(line[start:]))
    return fields


class CsvImportParser:
    """
    Parser for bulk trade import.

    Expected format: date, coinSlugOrAddress, entryPrice, quantity,
    targetPrice, stopLoss, status, notes (any order, header names matched
    case- and whitespace-insensitively).

    Structural problems raise StructuralParseError and nothing is imported.
    Invalid data rows are skipped and reported as warnings.
    """

    def parse(self, raw: Union[bytes, str]) -> ImportResult:
        """
        Parse raw CSV content into trade records without ids.

        Each record keeps the status given in the file.
        """
        text = self._decode(raw)

        lines = [line for line in _LINE_SPLIT.split(text) if line.strip()]
        if len(lines) < 2:
            raise StructuralParseError(
                "CSV must have a header row and at least one data row."
            )

        headers = [normalize_header(h) for h in split_csv_line(lines[0])]
        header_index: dict[str, int] = {}
        for index, header in enumerate(headers):
            header_index.setdefault(header, index)

        missing = [c for c in CSV_COLUMNS if normalize_header(c) not in header_index]
        if missing:
            raise StructuralParseError(
                f"CSV is missing required columns: {', '.join(missing)}. "
                "Please use the template.",
                missing_columns=missing,
            )

        result = ImportResult()
        for row_number, line in enumerate(lines[1:], start=2):  # row 1 is header
            values = split_csv_line(line)
            try:
                result.trades.append(self._parse_row(values, header_index))
            except ValueError as e:
                result.warnings.append(RowSkipWarning(row_number=row_number, reason=str(e)))

        if not result.trades:
            raise StructuralParseError(
                "No valid trades could be parsed from the file. "
                "Please check the data format and content.",
                warnings=[str(w) for w in result.warnings],
            )

        if result.warnings:
            logger.warning(
                f"CSV import skipped {len(result.warnings)} row(s): "
                + "; ".join(str(w) for w in result.warnings)
            )

        return result

    @staticmethod
    def _decode(raw: Union[bytes, str]) -> str:
        if isinstance(raw, str):
            text = raw
        else:
            try:
                text = raw.decode("utf-8-sig")  # handles BOM automatically
            except UnicodeDecodeError:
                raise StructuralParseError("File is not valid UTF-8.")
        if text.startswith("\ufeff"):
            text = text[1:]
        if not text.strip():
            raise StructuralParseError("File is empty or could not be read.")
        return text

    def _parse_row(self, values: list[str], header_index: dict[str, int]) -> TradeCreate:
        """Parse and validate one data row."""

        def field(column: str) -> str:
            index = header_index[normalize_header(column)]
            return values[index] if index < len(values) else ""

        entry_price = self._parse_number(field("entryPrice"), "entryPrice")
        target_price = self._parse_number(field("targetPrice"), "targetPrice")
        stop_loss = self._parse_number(field("stopLoss"), "stopLoss")
        quantity = self._parse_number(field("quantity"), "quantity")

        date_str = field("date")
        try:
            date = parse_datetime_utc(date_str)
        except (ValueError, OverflowError):
            raise ValueError(f"Invalid or missing date: {date_str!r}")

        status_str = field("status").lower()
        if status_str not in _VALID_STATUSES:
            raise ValueError(
                f"Invalid status: {status_str!r}. "
                "Must be 'open', 'closed-profit', or 'closed-loss'."
            )

        return TradeCreate(
            coin_slug_or_address=field("coinSlugOrAddress").strip(),
            entry_price=entry_price,
            target_price=target_price,
            stop_loss=stop_loss,
            quantity=quantity,
            date=date,
            notes=field("notes"),
            status=TradeStatus(status_str),
        )

    @staticmethod
    def _parse_number(value: str, column: str) -> Decimal:
        """Parse a finite decimal number."""
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"Invalid number for {column}: {value!r}")
        if not number.is_finite():
            raise ValueError(f"Invalid number for {column}: {value!r}")
        return number
