"""CSV template generation."""

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Optional

from tradejournal.core.timezone import now_utc
from tradejournal.csv.exporter import TradeExporter
from tradejournal.domain.models import TradeCreate, TradeStatus


class CsvTemplateGenerator:
    """Generator for blank CSV import templates."""

    def __init__(self, exporter: Optional[TradeExporter] = None):
        self._exporter = exporter or TradeExporter()

    def example_trades(self, date: Optional[datetime] = None) -> list[TradeCreate]:
        return [
            TradeCreate(
                coin_slug_or_address="0xDeAdBeef...",
                entry_price=Decimal("100"),
                target_price=Decimal("120"),
                stop_loss=Decimal("90"),
                quantity=Decimal("1.5"),
                date=date or now_utc(),
                notes="Example trade, you can add notes with commas here",
                status=TradeStatus.OPEN,
            )
        ]

    def template_bytes(self, date: Optional[datetime] = None) -> bytes:
        """Return a BOM-prefixed CSV template with header and one example row."""
        return self._exporter.to_csv_bytes(self.example_trades(date))

    def generate_template(self, path: str, date: Optional[datetime] = None) -> None:
        """
        Write the template to a file.

        Args:
            path: Output file path for the template
            date: Date for the example row (defaults to now)
        """
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(self.template_bytes(date))
