"""SQLAlchemy implementation of LedgerStore.

Each operation opens its own session from the factory, so a unit of work
belongs entirely to the thread running it and can outlive the request that
started it (a timed-out transfer still rolls back on its own thread).

Balances are only changed by guarded UPDATE statements issued inside the
transfer's unit of work. The debit carries ``balance >= amount`` in its
WHERE clause, so the database serializes concurrent debits of the same
account and the loser affects zero rows instead of overdrawing.
"""

import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased, sessionmaker

from banking.core.deadline import Deadline
from banking.core.exceptions import (
    AccountNotFoundError,
    DatabaseError,
    TransferRequestError,
)
from banking.core.timezone import now_utc, to_utc
from banking.core.validators import INT64_MAX
from banking.domain.models import (
    Account,
    TransferRequest,
    TransferRecord,
    ListTransferQuery,
    ListTransferResponse,
    TransferListItem,
)
from banking.repositories.sqlalchemy.orm_models import AccountORM, TransferORM
from banking.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository

logger = logging.getLogger(__name__)

MAX_BALANCE = INT64_MAX


class SqlAlchemyLedgerStore:
    """SQLAlchemy-backed ledger store."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def get_account_balance(self, account_id: int) -> int:
        """Return the current balance of an account."""
        try:
            with self._session_factory() as db:
                balance = db.query(AccountORM.balance).filter(
                    AccountORM.id == account_id
                ).scalar()
        except SQLAlchemyError as exc:
            logger.exception("Failed to fetch balance of account %s", account_id)
            raise DatabaseError("failed to fetch account balance") from exc
        if balance is None:
            raise AccountNotFoundError(account_id)
        return balance

    def get_account_by_id(self, account_id: int) -> Account:
        """Return an account."""
        try:
            with self._session_factory() as db:
                orm_account = db.query(AccountORM).filter(
                    AccountORM.id == account_id
                ).first()
                account = (
                    SqlAlchemyAccountRepository._to_domain(orm_account)
                    if orm_account
                    else None
                )
        except SQLAlchemyError as exc:
            logger.exception("Failed to fetch account %s", account_id)
            raise DatabaseError("failed to fetch account") from exc
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    def add_transfer(
        self,
        request: TransferRequest,
        deadline: Optional[Deadline] = None,
    ) -> TransferRecord:
        """
        Record the transfer, debit origin and credit destination atomically.

        Any failure rolls the whole unit of work back before raising.

        Raises:
            TransferRequestError: origin cannot cover the amount, or the
                credit would overflow the destination balance.
            AccountNotFoundError: either account vanished.
            RequestTimeoutError: the deadline was cancelled before commit.
            DatabaseError: the database failed.
        """
        db = self._session_factory()
        try:
            record = self._insert_record(db, request)
            self._debit_origin(db, request.origin, request.amount)
            self._credit_destination(db, request.destination, request.amount)
            if deadline is not None:
                deadline.begin_commit()
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception(
                "Transfer %s -> %s rolled back", request.origin, request.destination
            )
            raise DatabaseError("failed to commit transfer") from exc
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
        return record

    def get_transfers(
        self,
        account_id: int,
        query: ListTransferQuery,
    ) -> ListTransferResponse:
        """Page through transfers where the account is origin or destination."""
        origin = aliased(AccountORM)
        destination = aliased(AccountORM)
        involves_account = or_(
            TransferORM.origin_id == account_id,
            TransferORM.destination_id == account_id,
        )
        try:
            with self._session_factory() as db:
                total = db.query(TransferORM).filter(involves_account).count()
                rows = (
                    db.query(TransferORM, origin, destination)
                    .join(origin, TransferORM.origin_id == origin.id)
                    .join(destination, TransferORM.destination_id == destination.id)
                    .filter(involves_account)
                    .order_by(TransferORM.id)
                    .offset(query.offset)
                    .limit(query.page_size)
                    .all()
                )
                data = [
                    TransferListItem(
                        amount=transfer.amount,
                        created_at=to_utc(transfer.created_at),
                        destination_name=dest.name,
                        destination_cpf=dest.cpf,
                        origin_name=orig.name,
                        origin_cpf=orig.cpf,
                    )
                    for transfer, orig, dest in rows
                ]
        except SQLAlchemyError as exc:
            logger.exception("Failed to list transfers of account %s", account_id)
            raise DatabaseError("failed to list transfers") from exc

        return ListTransferResponse(total=total, page=query.page + 1, data=data)

    # Unit-of-work steps. None of them commit.

    def _insert_record(self, db: Session, request: TransferRequest) -> TransferRecord:
        created_at = now_utc().replace(tzinfo=None)
        orm_transfer = TransferORM(
            origin_id=request.origin,
            destination_id=request.destination,
            amount=request.amount,
            created_at=created_at,
        )
        db.add(orm_transfer)
        db.flush()
        return TransferRecord(
            id=orm_transfer.id,
            origin_id=orm_transfer.origin_id,
            destination_id=orm_transfer.destination_id,
            amount=orm_transfer.amount,
            created_at=to_utc(created_at),
        )

    def _debit_origin(self, db: Session, account_id: int, amount: int) -> None:
        updated = (
            db.query(AccountORM)
            .filter(AccountORM.id == account_id, AccountORM.balance >= amount)
            .update(
                {
                    AccountORM.balance: AccountORM.balance - amount,
                    AccountORM.updated_at: now_utc().replace(tzinfo=None),
                },
                synchronize_session=False,
            )
        )
        if updated != 1:
            self._raise_if_missing(db, account_id)
            raise TransferRequestError("not enough funds")

    def _credit_destination(self, db: Session, account_id: int, amount: int) -> None:
        updated = (
            db.query(AccountORM)
            .filter(
                AccountORM.id == account_id,
                AccountORM.balance <= MAX_BALANCE - amount,
            )
            .update(
                {
                    AccountORM.balance: AccountORM.balance + amount,
                    AccountORM.updated_at: now_utc().replace(tzinfo=None),
                },
                synchronize_session=False,
            )
        )
        if updated != 1:
            self._raise_if_missing(db, account_id)
            raise TransferRequestError("destination balance limit exceeded")

    @staticmethod
    def _raise_if_missing(db: Session, account_id: int) -> None:
        exists = db.query(AccountORM.id).filter(AccountORM.id == account_id).first()
        if exists is None:
            raise AccountNotFoundError(account_id)
