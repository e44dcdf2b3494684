"""Service layer - business logic orchestration."""

from banking.services.transfer_validator import validate_transfer_request
from banking.services.transfer_service import TransferService, TransferConfig
from banking.services.account_service import AccountService
from banking.services.auth_service import AuthService, hash_password, verify_password

__all__ = [
    "validate_transfer_request",
    "TransferService",
    "TransferConfig",
    "AccountService",
    "AuthService",
    "hash_password",
    "verify_password",
]
