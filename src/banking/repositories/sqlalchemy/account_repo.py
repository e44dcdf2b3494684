"""SQLAlchemy implementation of AccountRepository.

Like the ledger store, every method opens its own session from the factory,
so a call that outlives its request (after a timeout) never touches a
session the request has already closed.
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from banking.core.deadline import Deadline
from banking.core.exceptions import ArgumentError, DatabaseError
from banking.domain.models import (
    Account,
    AccountListItem,
    ListAccountQuery,
    ListAccountsResponse,
)
from banking.repositories.sqlalchemy.orm_models import AccountORM

logger = logging.getLogger(__name__)


class SqlAlchemyAccountRepository:
    """SQLAlchemy-backed account repository."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def create(self, account: Account, deadline: Optional[Deadline] = None) -> Account:
        """
        Persist a new account.

        The commit is claimed on ``deadline`` first, so a timed-out request
        never leaves an account behind.

        Raises:
            ArgumentError: the CPF is already registered (including when a
                concurrent request registered it first).
            RequestTimeoutError: the deadline was cancelled before commit.
            DatabaseError: the database failed.
        """
        orm_account = AccountORM(
            name=account.name,
            cpf=account.cpf,
            secret=account.secret,
            balance=account.balance,
            active=account.active,
        )
        try:
            with self._session_factory() as db:
                db.add(orm_account)
                db.flush()
                if deadline is not None:
                    deadline.begin_commit()
                db.commit()
                db.refresh(orm_account)
                return self._to_domain(orm_account)
        except IntegrityError as exc:
            if self.get_by_cpf(account.cpf) is not None:
                raise ArgumentError("cpf already registered") from exc
            logger.exception("Failed to create account")
            raise DatabaseError("failed to create account") from exc
        except SQLAlchemyError as exc:
            logger.exception("Failed to create account")
            raise DatabaseError("failed to create account") from exc

    def get_by_id(self, account_id: int) -> Optional[Account]:
        """Retrieve account by ID."""
        try:
            with self._session_factory() as db:
                orm_account = db.query(AccountORM).filter(
                    AccountORM.id == account_id
                ).first()
                return self._to_domain(orm_account) if orm_account else None
        except SQLAlchemyError as exc:
            logger.exception("Failed to fetch account %s", account_id)
            raise DatabaseError("failed to fetch account") from exc

    def get_by_cpf(self, cpf: str) -> Optional[Account]:
        """Retrieve account by CPF."""
        try:
            with self._session_factory() as db:
                orm_account = db.query(AccountORM).filter(
                    AccountORM.cpf == cpf
                ).first()
                return self._to_domain(orm_account) if orm_account else None
        except SQLAlchemyError as exc:
            logger.exception("Failed to fetch account by cpf")
            raise DatabaseError("failed to fetch account") from exc

    def get_balance(self, account_id: int) -> Optional[int]:
        """Return the account balance, or None if the account does not exist."""
        try:
            with self._session_factory() as db:
                return db.query(AccountORM.balance).filter(
                    AccountORM.id == account_id
                ).scalar()
        except SQLAlchemyError as exc:
            logger.exception("Failed to fetch balance of account %s", account_id)
            raise DatabaseError("failed to fetch balance") from exc

    def list_page(self, query: ListAccountQuery) -> ListAccountsResponse:
        """List one page of accounts ordered by ID."""
        try:
            with self._session_factory() as db:
                total = db.query(AccountORM).count()
                rows = (
                    db.query(AccountORM)
                    .order_by(AccountORM.id)
                    .offset(query.page_size * query.page)
                    .limit(query.page_size)
                    .all()
                )
                data = [
                    AccountListItem(id=a.id, name=a.name, cpf=a.cpf, balance=a.balance)
                    for a in rows
                ]
        except SQLAlchemyError as exc:
            logger.exception("Failed to list accounts")
            raise DatabaseError("failed to list accounts") from exc

        return ListAccountsResponse(total=total, page=query.page + 1, data=data)

    @staticmethod
    def _to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return Account(
            id=orm.id,
            name=orm.name,
            cpf=orm.cpf,
            balance=orm.balance,
            secret=orm.secret,
            active=orm.active,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )
