"""Engine and session construction for the trade store.

The application context owns the engine and the single session the trade
collection writes through; nothing here is module-global apart from Base.
"""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    return create_engine(database_url, echo=False)


def init_db(engine: Engine) -> None:
    """Create the trades table if it does not exist."""
    from tradejournal.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def open_session(engine: Engine) -> Session:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)()
