"""View models for PnL, import and dashboard outputs."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from tradejournal.domain.models import TradeCreate


@dataclass(frozen=True)
class PnlView:
    """Profit/loss of a position at a given live price."""

    pnl: Decimal
    pnl_percent: Decimal
    cost_basis: Decimal
    current_value: Decimal


@dataclass(frozen=True)
class RowSkipWarning:
    """A data row dropped during import. Non-fatal."""

    row_number: int
    reason: str

    def __str__(self) -> str:
        return f"Row {self.row_number}: {self.reason}"


@dataclass
class ImportResult:
    """Rows that survived import validation plus the rows that were skipped."""

    trades: list[TradeCreate] = field(default_factory=list)
    warnings: list[RowSkipWarning] = field(default_factory=list)

    @property
    def imported_count(self) -> int:
        return len(self.trades)

    @property
    def skipped_count(self) -> int:
        return len(self.warnings)


@dataclass
class DashboardStats:
    """Aggregate figures across the whole journal."""

    total_pnl: Decimal = field(default_factory=lambda: Decimal("0"))
    total_pnl_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    win_rate: Decimal = field(default_factory=lambda: Decimal("0"))
    open_trades_count: int = 0
    closed_trades_count: int = 0
    avg_entry_price: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass(frozen=True)
class EquityPoint:
    """One point of the cumulative PnL curve."""

    label: str
    equity: Decimal
    date: Optional[str] = None
