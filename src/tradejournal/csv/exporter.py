"""CSV and XLSX export functionality."""

import io
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterable, Union

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from tradejournal.core.timezone import to_iso_utc
from tradejournal.csv.importer import CSV_COLUMNS
from tradejournal.domain.models import Trade, TradeCreate

UTF8_BOM = b"\xef\xbb\xbf"

XLSX_SHEET_NAME = "Trades"

# Display widths (characters) per column, in CSV_COLUMNS order
XLSX_COLUMN_WIDTHS = [28, 42, 12, 12, 12, 12, 15, 40]

ExportableTrade = Union[Trade, TradeCreate]


def escape_csv_value(value: Any) -> str:
    """
    Escape one value so the importer reads it back unchanged.

    Values containing a comma, quote or line break, or with leading/trailing
    whitespace the importer would trim, are wrapped in quotes with inner
    quotes doubled.
    """
    if value is None:
        return ""
    text = str(value)
    if any(c in text for c in ',"\n\r') or text != text.strip():
        return '"' + text.replace('"', '""') + '"'
    return text


def trade_to_row(trade: ExportableTrade) -> dict[str, Any]:
    """Map a trade onto the shared export columns."""
    return {
        "date": to_iso_utc(trade.date),
        "coinSlugOrAddress": trade.coin_slug_or_address,
        "entryPrice": trade.entry_price,
        "quantity": trade.quantity,
        "targetPrice": trade.target_price,
        "stopLoss": trade.stop_loss,
        "status": trade.status.value,
        "notes": trade.notes,
    }


class TradeExporter:
    """
    Exporter for trade data.

    Produces the exact inverse of CsvImportParser (CSV) and a single-sheet
    workbook with the same columns (XLSX). Only the eight shared columns are
    written; ids and live market data are not exported.
    """

    def to_csv_text(self, trades: Iterable[ExportableTrade]) -> str:
        """
        Render trades as CSV text (no BOM).

        Rows are joined with escape_csv_value rather than csv.DictWriter so the
        quoting rules mirror split_csv_line in the importer exactly.
        """
        lines = [",".join(CSV_COLUMNS)]
        for trade in trades:
            row = trade_to_row(trade)
            lines.append(",".join(escape_csv_value(row[c]) for c in CSV_COLUMNS))
        return "\n".join(lines)

    def to_csv_bytes(self, trades: Iterable[ExportableTrade]) -> bytes:
        """Render trades as BOM-prefixed UTF-8 CSV for spreadsheet compatibility."""
        return UTF8_BOM + self.to_csv_text(trades).encode("utf-8")

    def to_xlsx_bytes(self, trades: Iterable[ExportableTrade]) -> bytes:
        """Render trades as an XLSX workbook with a single 'Trades' sheet."""
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = XLSX_SHEET_NAME

        sheet.append(CSV_COLUMNS)
        for trade in trades:
            row = trade_to_row(trade)
            sheet.append([_xlsx_value(row[c]) for c in CSV_COLUMNS])

        for index, width in enumerate(XLSX_COLUMN_WIDTHS, start=1):
            sheet.column_dimensions[get_column_letter(index)].width = width

        buffer = io.BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    def export_csv(self, path: str, trades: Iterable[ExportableTrade]) -> None:
        """Write trades to a CSV file, creating parent directories."""
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(self.to_csv_bytes(trades))

    def export_xlsx(self, path: str, trades: Iterable[ExportableTrade]) -> None:
        """Write trades to an XLSX file, creating parent directories."""
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(self.to_xlsx_bytes(trades))


def _xlsx_value(value: Any) -> Any:
    # Numbers stay numeric in the sheet
    if isinstance(value, Decimal):
        return float(value)
    return value
