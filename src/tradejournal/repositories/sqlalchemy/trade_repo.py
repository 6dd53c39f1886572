"""SQLAlchemy implementation of TradeRepository."""

from typing import Optional

from sqlalchemy.orm import Session

from tradejournal.core.exceptions import NotFoundError
from tradejournal.core.timezone import to_utc
from tradejournal.domain.models import Trade, TradeCreate
from tradejournal.repositories.sqlalchemy.orm_models import TradeORM


class SqlAlchemyTradeRepository:
    """SQLAlchemy-backed trade store."""

    def __init__(self, db: Session):
        self._db = db

    def list_all(self) -> list[Trade]:
        """List all trades ordered by id."""
        orm_trades = self._db.query(TradeORM).order_by(TradeORM.trade_id).all()
        return [self._to_domain(t) for t in orm_trades]

    def get_by_id(self, trade_id: int) -> Optional[Trade]:
        """Retrieve trade by ID."""
        orm_trade = self._db.get(TradeORM, trade_id)
        return self._to_domain(orm_trade) if orm_trade else None

    def add(self, trade: TradeCreate) -> int:
        """Persist a new trade and return its generated id."""
        return self.bulk_add([trade])[0]

    def update(self, trade: Trade) -> None:
        """Overwrite the persistent fields of an existing trade."""
        self.bulk_update([trade])

    def delete(self, trade_id: int) -> None:
        """Delete a trade."""
        self.bulk_delete([trade_id])

    def bulk_add(self, trades: list[TradeCreate]) -> list[int]:
        """Persist several trades in one transaction."""
        orm_trades = [self._to_orm(t) for t in trades]
        self._db.add_all(orm_trades)
        self._db.commit()
        return [t.trade_id for t in orm_trades]

    def bulk_update(self, trades: list[Trade]) -> None:
        """Update several trades in one transaction."""
        for trade in trades:
            orm_trade = self._db.get(TradeORM, trade.trade_id)
            if orm_trade is None:
                self._db.rollback()
                raise NotFoundError("Trade", str(trade.trade_id))
            self._copy_fields(trade, orm_trade)
        self._db.commit()

    def bulk_delete(self, trade_ids: list[int]) -> None:
        """Delete several trades in one transaction."""
        if not trade_ids:
            return
        self._db.query(TradeORM).filter(
            TradeORM.trade_id.in_(trade_ids)
        ).delete(synchronize_session=False)
        self._db.commit()

    @staticmethod
    def _copy_fields(source, orm_trade: TradeORM) -> None:
        """Copy persistent fields from a Trade or TradeCreate onto an ORM row."""
        orm_trade.coin_slug_or_address = source.coin_slug_or_address
        orm_trade.entry_price = source.entry_price
        orm_trade.target_price = source.target_price
        orm_trade.stop_loss = source.stop_loss
        orm_trade.quantity = source.quantity
        orm_trade.notes = source.notes
        # SQLite DateTime is naive; store UTC wall time
        orm_trade.date = to_utc(source.date).replace(tzinfo=None)
        orm_trade.status = source.status
        orm_trade.market_cap_at_entry = source.market_cap_at_entry
        orm_trade.target_market_cap = source.target_market_cap

    @classmethod
    def _to_orm(cls, trade: TradeCreate) -> TradeORM:
        orm_trade = TradeORM()
        cls._copy_fields(trade, orm_trade)
        return orm_trade

    @staticmethod
    def _to_domain(orm: TradeORM) -> Trade:
        """Convert ORM model to domain model."""
        return Trade(
            trade_id=orm.trade_id,
            coin_slug_or_address=orm.coin_slug_or_address,
            entry_price=orm.entry_price,
            target_price=orm.target_price,
            stop_loss=orm.stop_loss,
            quantity=orm.quantity,
            notes=orm.notes or "",
            date=to_utc(orm.date),
            status=orm.status,
            market_cap_at_entry=orm.market_cap_at_entry,
            target_market_cap=orm.target_market_cap,
        )
