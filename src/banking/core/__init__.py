"""Core utilities and shared functionality."""

from banking.core.timezone import now_utc, to_utc, UTC
from banking.core.deadline import Deadline, run_with_deadline
from banking.core.exceptions import (
    AppError,
    ArgumentError,
    TransferRequestError,
    AccountNotFoundError,
    DatabaseError,
    AuthError,
    RequestTimeoutError,
    InternalError,
    ConfigurationError,
)

__all__ = [
    "now_utc",
    "to_utc",
    "UTC",
    "Deadline",
    "run_with_deadline",
    "AppError",
    "ArgumentError",
    "TransferRequestError",
    "AccountNotFoundError",
    "DatabaseError",
    "AuthError",
    "RequestTimeoutError",
    "InternalError",
    "ConfigurationError",
]
