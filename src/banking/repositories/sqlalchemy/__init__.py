"""SQLAlchemy repository implementations."""

from banking.repositories.sqlalchemy.database import (
    create_db_engine,
    get_engine,
    get_session_factory,
    init_db,
    reset_database,
    Base,
)
from banking.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from banking.repositories.sqlalchemy.ledger_store import SqlAlchemyLedgerStore

__all__ = [
    "create_db_engine",
    "get_engine",
    "get_session_factory",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyLedgerStore",
]
