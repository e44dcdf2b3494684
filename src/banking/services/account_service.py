"""Account service: opening accounts, listing them and reading balances."""

import logging
from typing import Optional

from banking.core.deadline import Deadline
from banking.core.exceptions import AccountNotFoundError, ArgumentError
from banking.core.validators import INT64_MAX, validate_cpf
from banking.domain.models import (
    Account,
    NewAccountRequest,
    ListAccountQuery,
    ListAccountsResponse,
    BalanceResponse,
)
from banking.repositories.protocols import AccountRepository
from banking.services.auth_service import hash_password, BCRYPT_ROUNDS

logger = logging.getLogger(__name__)

SECRET_MIN_LENGTH = 8
SECRET_MAX_LENGTH = 16


class AccountService:
    """
    Service for account management.

    Balances are only set here at account creation; afterwards they change
    exclusively through transfers. Every operation accepts an optional
    ``Deadline`` and checks it before touching the repository.
    """

    def __init__(self, account_repo: AccountRepository, bcrypt_rounds: int = BCRYPT_ROUNDS):
        self._account_repo = account_repo
        self._bcrypt_rounds = bcrypt_rounds

    def create_account(
        self,
        request: NewAccountRequest,
        deadline: Optional[Deadline] = None,
    ) -> Account:
        """
        Open a new account with an initial balance.

        Raises:
            ArgumentError: missing or invalid fields, or an already
                registered CPF.
            RequestTimeoutError: the deadline passed before commit.
        """
        self._validate(request)

        _check(deadline)
        if self._account_repo.get_by_cpf(request.cpf) is not None:
            raise ArgumentError("cpf already registered")

        secret = hash_password(request.secret, rounds=self._bcrypt_rounds)
        _check(deadline)
        account = Account(
            id=None,
            name=request.name.strip(),
            cpf=request.cpf,
            balance=request.balance or 0,
            secret=secret,
            active=True,
        )
        created = self._account_repo.create(account, deadline)
        logger.info("Account %s created", created.id)
        return created

    def list_accounts(
        self,
        query: ListAccountQuery,
        deadline: Optional[Deadline] = None,
    ) -> ListAccountsResponse:
        """List one page of accounts."""
        _check(deadline)
        return self._account_repo.list_page(query)

    def get_balance(
        self,
        account_id: int,
        deadline: Optional[Deadline] = None,
    ) -> BalanceResponse:
        """Return the balance of an account."""
        _check(deadline)
        balance = self._account_repo.get_balance(account_id)
        if balance is None:
            raise AccountNotFoundError(account_id)
        return BalanceResponse(balance=balance)

    @staticmethod
    def _validate(request: NewAccountRequest) -> None:
        invalid = []
        if not request.secret:
            invalid.append("secret")
        if not request.cpf:
            invalid.append("cpf")
        if not request.name or not request.name.strip():
            invalid.append("name")
        if request.balance is not None and not 0 <= request.balance <= INT64_MAX:
            invalid.append("balance")
        if invalid:
            raise ArgumentError(", ".join(invalid))

        try:
            validate_cpf(request.cpf)
        except ValueError as exc:
            invalid.append(str(exc))
        if not SECRET_MIN_LENGTH <= len(request.secret) <= SECRET_MAX_LENGTH:
            invalid.append(
                f"secret must be between {SECRET_MIN_LENGTH} and {SECRET_MAX_LENGTH} characters"
            )
        if invalid:
            raise ArgumentError(", ".join(invalid))


def _check(deadline: Optional[Deadline]) -> None:
    if deadline is not None:
        deadline.check()
