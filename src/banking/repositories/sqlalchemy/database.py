"""Engine and session factory for the ledger database.

The engine and factory are built lazily from settings and cached at module
level; ``reset_database()`` drops the cache so tests and scripts can point
the app at another URL.
"""

from typing import Optional

from sqlalchemy import create_engine, Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from banking.config.settings import get_settings

Base = declarative_base()

# Seconds a SQLite writer waits for the database lock before failing.
# Concurrent transfers queue on this lock.
SQLITE_BUSY_TIMEOUT = 30

_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """Create an engine, applying SQLite connection options when needed."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Transfers run their unit of work on worker threads
        connect_args["check_same_thread"] = False
        connect_args["timeout"] = SQLITE_BUSY_TIMEOUT
    return create_engine(database_url, connect_args=connect_args, echo=echo)


def get_engine() -> Engine:
    """Return the cached engine, creating it from settings on first use."""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_db_engine(settings.database_url, echo=settings.db_echo)
    return _engine


def get_session_factory() -> sessionmaker:
    """Return the cached session factory bound to ``get_engine()``."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(bind=get_engine(), autoflush=False)
    return _SessionLocal


def init_db() -> None:
    """Create the accounts and transfers tables if they are missing."""
    from banking.repositories.sqlalchemy import orm_models  # noqa: F401

    Base.metadata.create_all(bind=get_engine())


def reset_database() -> None:
    """Dispose the engine and forget the cached factory."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None
