"""Dependency injection for FastAPI."""

from typing import Optional

from fastapi import Depends, Header, Query

from banking.config.settings import get_settings
from banking.core.exceptions import ArgumentError, AuthError
from banking.core.validators import INT64_MAX
from banking.domain.models import ListAccountQuery, ListTransferQuery
from banking.repositories.sqlalchemy.database import get_session_factory
from banking.repositories.sqlalchemy import (
    SqlAlchemyAccountRepository,
    SqlAlchemyLedgerStore,
)
from banking.services import (
    AccountService,
    AuthService,
    TransferService,
    TransferConfig,
)

BEARER_SCHEME = "Bearer "


def get_account_repo() -> SqlAlchemyAccountRepository:
    """Provide AccountRepository instance."""
    return SqlAlchemyAccountRepository(get_session_factory())


def get_ledger_store() -> SqlAlchemyLedgerStore:
    """Provide LedgerStore instance."""
    return SqlAlchemyLedgerStore(get_session_factory())


def get_request_timeout() -> float:
    """Seconds every handler may spend before answering 408."""
    return get_settings().request_timeout_seconds


def get_account_service(
    account_repo: SqlAlchemyAccountRepository = Depends(get_account_repo),
) -> AccountService:
    """Provide AccountService instance."""
    return AccountService(
        account_repo=account_repo,
        bcrypt_rounds=get_settings().bcrypt_rounds,
    )


def get_auth_service(
    account_repo: SqlAlchemyAccountRepository = Depends(get_account_repo),
) -> AuthService:
    """Provide AuthService instance."""
    settings = get_settings()
    return AuthService(
        account_repo=account_repo,
        jwt_secret=settings.jwt_secret,
        jwt_algorithm=settings.jwt_algorithm,
        expire_minutes=settings.jwt_expire_minutes,
    )


def get_transfer_service(
    store: SqlAlchemyLedgerStore = Depends(get_ledger_store),
) -> TransferService:
    """Provide TransferService instance."""
    return TransferService(
        store=store,
        config=TransferConfig.from_settings(get_settings()),
    )


def get_current_account_id(
    authorization: Optional[str] = Header(default=None),
) -> int:
    """Resolve the authenticated account from an ``Authorization: Bearer`` header."""
    if not authorization or not authorization.startswith(BEARER_SCHEME):
        raise AuthError("invalid authentication token")
    token = authorization[len(BEARER_SCHEME):].strip()
    if not token:
        raise AuthError("invalid authentication token")

    settings = get_settings()
    verifier = AuthService(
        account_repo=None,
        jwt_secret=settings.jwt_secret,
        jwt_algorithm=settings.jwt_algorithm,
    )
    return verifier.verify_token(token)


class PageParams:
    """
    ``pageSize`` and 1-indexed ``page`` query parameters.

    Parsed by hand so bad values produce the API's own 400 error body.
    """

    def __init__(
        self,
        page_size: Optional[str] = Query(default=None, alias="pageSize"),
        page: Optional[str] = Query(default=None, alias="page"),
    ):
        settings = get_settings()
        invalid = []

        self.page_size = settings.default_page_size
        if page_size is not None and page_size != "":
            try:
                self.page_size = int(page_size)
            except ValueError:
                invalid.append("pageSize")
            else:
                if not 1 <= self.page_size <= settings.max_page_size:
                    invalid.append("pageSize")

        # Zero-based internally
        self.page = 0
        if page is not None and page != "":
            try:
                self.page = int(page) - 1
            except ValueError:
                invalid.append("page")
            else:
                if self.page < 0 or self.page * self.page_size > INT64_MAX:
                    invalid.append("page")

        if invalid:
            raise ArgumentError("invalid query params", ", ".join(invalid))

    def transfer_query(self) -> ListTransferQuery:
        return ListTransferQuery(page_size=self.page_size, page=self.page)

    def account_query(self) -> ListAccountQuery:
        return ListAccountQuery(page_size=self.page_size, page=self.page)
