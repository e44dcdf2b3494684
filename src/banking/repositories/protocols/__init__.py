"""Repository protocol definitions (interfaces)."""

from banking.repositories.protocols.account_repo import AccountRepository
from banking.repositories.protocols.ledger_store import LedgerStore

__all__ = [
    "AccountRepository",
    "LedgerStore",
]
