"""Repository layer - data access abstractions and implementations."""

from banking.repositories.protocols import AccountRepository, LedgerStore

__all__ = [
    "AccountRepository",
    "LedgerStore",
]
