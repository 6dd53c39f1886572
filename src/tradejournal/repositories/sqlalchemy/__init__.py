"""SQLAlchemy repository implementations."""

from tradejournal.repositories.sqlalchemy.database import (
    Base,
    create_db_engine,
    init_db,
    open_session,
)
from tradejournal.repositories.sqlalchemy.trade_repo import SqlAlchemyTradeRepository

__all__ = [
    "Base",
    "create_db_engine",
    "init_db",
    "open_session",
    "SqlAlchemyTradeRepository",
]
