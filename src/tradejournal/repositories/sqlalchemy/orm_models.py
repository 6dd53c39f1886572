"""SQLAlchemy ORM model definitions."""

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Text,
    Numeric,
    Enum as SqlEnum,
)

from tradejournal.repositories.sqlalchemy.database import Base
from tradejournal.domain.models.enums import TradeStatus


class TradeORM(Base):
    """SQLAlchemy model for Trade (persistent fields only)."""

    __tablename__ = "trades"

    trade_id = Column(Integer, primary_key=True, autoincrement=True)
    coin_slug_or_address = Column(String(255), nullable=False, index=True)
    entry_price = Column(Numeric(precision=38, scale=12), nullable=False)
    target_price = Column(Numeric(precision=38, scale=12), nullable=False)
    stop_loss = Column(Numeric(precision=38, scale=12), nullable=False)
    quantity = Column(Numeric(precision=38, scale=8), nullable=False)
    notes = Column(Text, nullable=False, default="")
    date = Column(DateTime, nullable=False)
    status = Column(
        SqlEnum(TradeStatus, values_callable=lambda e: [m.value for m in e]),
        default=TradeStatus.OPEN,
        nullable=False,
    )
    market_cap_at_entry = Column(Numeric(precision=38, scale=2), nullable=True)
    target_market_cap = Column(Numeric(precision=38, scale=2), nullable=True)
