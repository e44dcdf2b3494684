"""Domain models package."""

from banking.domain.models.account import (
    Account,
    NewAccountRequest,
    ListAccountQuery,
    AccountListItem,
    ListAccountsResponse,
    BalanceResponse,
)
from banking.domain.models.transfer import (
    TransferRequest,
    TransferRecord,
    ListTransferQuery,
    TransferListItem,
    ListTransferResponse,
)
from banking.domain.models.auth import LoginRequest, LoginResponse

__all__ = [
    "Account",
    "NewAccountRequest",
    "ListAccountQuery",
    "AccountListItem",
    "ListAccountsResponse",
    "BalanceResponse",
    "TransferRequest",
    "TransferRecord",
    "ListTransferQuery",
    "TransferListItem",
    "ListTransferResponse",
    "LoginRequest",
    "LoginResponse",
]
