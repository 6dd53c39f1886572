"""CSV import/export utilities."""

from tradejournal.csv.importer import CsvImportParser, CSV_COLUMNS
from tradejournal.csv.exporter import TradeExporter
from tradejournal.csv.template import CsvTemplateGenerator

__all__ = [
    "CsvImportParser",
    "CSV_COLUMNS",
    "TradeExporter",
    "CsvTemplateGenerator",
]
