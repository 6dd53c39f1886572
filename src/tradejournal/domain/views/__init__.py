"""View models for service outputs."""

from tradejournal.domain.views.portfolio import (
    PnlView,
    RowSkipWarning,
    ImportResult,
    DashboardStats,
    EquityPoint,
)

__all__ = [
    "PnlView",
    "RowSkipWarning",
    "ImportResult",
    "DashboardStats",
    "EquityPoint",
]
