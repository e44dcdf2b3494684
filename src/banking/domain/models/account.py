"""Account domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class Account:
    """
    Bank account.

    Balance is kept in the smallest currency unit and is never negative
    after a committed transfer. ``secret`` holds the bcrypt hash.
    """

    id: Optional[int]
    name: str
    cpf: str
    balance: int = 0
    secret: str = ""
    active: bool = True
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)


@dataclass
class NewAccountRequest:
    """Input data for opening an account."""

    name: Optional[str] = None
    cpf: Optional[str] = None
    secret: Optional[str] = None
    balance: Optional[int] = 0


@dataclass
class ListAccountQuery:
    """Zero-based page request for the account listing."""

    page_size: int = 15
    page: int = 0


@dataclass
class AccountListItem:
    id: int
    name: str
    cpf: str
    balance: int


@dataclass
class ListAccountsResponse:
    total: int
    page: int
    data: list[AccountListItem] = field(default_factory=list)


@dataclass
class BalanceResponse:
    balance: int
