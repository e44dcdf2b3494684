"""Pydantic schemas for API request/response."""

from banking.api.schemas.account import (
    AccountCreate,
    AccountCreatedResponse,
    AccountListItemResponse,
    AccountListResponse,
    BalanceResponse,
)
from banking.api.schemas.auth import LoginRequestSchema, LoginResponseSchema
from banking.api.schemas.transfer import (
    TransferCreateRequest,
    TransferItemResponse,
    TransferListResponse,
)

__all__ = [
    "AccountCreate",
    "AccountCreatedResponse",
    "AccountListItemResponse",
    "AccountListResponse",
    "BalanceResponse",
    "LoginRequestSchema",
    "LoginResponseSchema",
    "TransferCreateRequest",
    "TransferItemResponse",
    "TransferListResponse",
]
