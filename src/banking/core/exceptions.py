"""Application-level exceptions.

Every error carries a fixed ``prefix`` and a ``context`` built by joining the
constructor arguments with ``": "``, so ``str(error)`` reads
``"<prefix>: <context>"``.
"""


class AppError(Exception):
    """Base exception for application errors."""

    prefix = "application error"
    code = "APP_ERROR"

    def __init__(self, *context: str):
        self.context = ": ".join(c for c in context if c)
        self.message = f"{self.prefix}: {self.context}" if self.context else self.prefix
        super().__init__(self.message)


class ArgumentError(AppError):
    """Raised when request fields are missing or malformed."""

    prefix = "invalid argument"
    code = "ARGUMENT_ERROR"


class TransferRequestError(AppError):
    """Raised when a transfer is rejected by a business rule."""

    prefix = "transfer error"
    code = "TRANSFER_ERROR"


class AccountNotFoundError(AppError):
    """Raised by the store when an account id does not exist."""

    prefix = "database error"
    code = "ACCOUNT_NOT_FOUND"

    def __init__(self, account_id: int):
        self.account_id = account_id
        super().__init__("account not found", str(account_id))


class DatabaseError(AppError):
    """Raised when the store fails for infrastructure reasons."""

    prefix = "database error"
    code = "DATABASE_ERROR"


class AuthError(AppError):
    """Raised on bad credentials or an invalid token."""

    prefix = "authentication error"
    code = "AUTH_ERROR"


class RequestTimeoutError(AppError):
    """Raised when a request deadline expires or is cancelled."""

    prefix = "request timeout"
    code = "REQUEST_TIMEOUT"


class InternalError(AppError):
    """Raised for unexpected failures that are not the caller's fault."""

    prefix = "internal error"
    code = "INTERNAL_ERROR"


class ConfigurationError(AppError):
    """Raised at startup when required settings are missing."""

    prefix = "configuration error"
    code = "CONFIGURATION_ERROR"
