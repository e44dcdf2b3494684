"""Transfer engine: validates, authorizes and executes money transfers."""

import logging
from dataclasses import dataclass
from typing import Optional

from banking.core.deadline import Deadline, run_with_deadline
from banking.core.exceptions import AccountNotFoundError, TransferRequestError
from banking.domain.models import (
    TransferRequest,
    ListTransferQuery,
    ListTransferResponse,
)
from banking.repositories.protocols import LedgerStore
from banking.services.transfer_validator import validate_transfer_request

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransferConfig:
    """Timeouts for the transfer engine, fixed at startup."""

    request_timeout_seconds: float = 5.0

    @classmethod
    def from_settings(cls, settings) -> "TransferConfig":
        return cls(request_timeout_seconds=settings.request_timeout_seconds)


class TransferService:
    """
    Service for moving money between accounts.

    A transfer goes validated -> funds checked -> destination checked ->
    committed. A failure at any stage leaves both balances as they were:
    nothing is written before the store's unit of work, and the store rolls
    that back on any error. The service holds no locks and never retries;
    concurrent transfers are serialized by the store.
    """

    def __init__(self, store: LedgerStore, config: Optional[TransferConfig] = None):
        self._store = store
        self._config = config or TransferConfig()

    @property
    def config(self) -> TransferConfig:
        return self._config

    def do_transfer(
        self,
        request: TransferRequest,
        deadline: Optional[Deadline] = None,
    ) -> None:
        """
        Execute a transfer.

        Raises:
            ArgumentError: the request is malformed (no store call is made).
            TransferRequestError: not enough funds, or an unknown account.
            DatabaseError: the store failed; nothing was applied.
            RequestTimeoutError: the deadline passed before commit.
        """
        validate_transfer_request(request)

        self._check(deadline)
        try:
            origin_balance = self._store.get_account_balance(request.origin)
        except AccountNotFoundError as exc:
            raise TransferRequestError("origin account not found", exc.context)

        if origin_balance < request.amount:
            logger.info(
                "Transfer %s -> %s rejected: not enough funds",
                request.origin,
                request.destination,
            )
            raise TransferRequestError("not enough funds")

        self._check(deadline)
        try:
            self._store.get_account_by_id(request.destination)
        except AccountNotFoundError as exc:
            raise TransferRequestError("destination account not found", exc.context)

        self._check(deadline)
        try:
            record = self._store.add_transfer(request, deadline)
        except AccountNotFoundError as exc:
            side = "origin" if exc.account_id == request.origin else "destination"
            raise TransferRequestError(f"{side} account not found", exc.context)

        logger.info(
            "Transfer %s committed: %s -> %s amount=%s",
            record.id,
            record.origin_id,
            record.destination_id,
            record.amount,
        )

    def get_transfers(
        self,
        account_id: int,
        query: ListTransferQuery,
        deadline: Optional[Deadline] = None,
    ) -> ListTransferResponse:
        """Return one page of the account's transfer history."""
        self._check(deadline)
        return self._store.get_transfers(account_id, query)

    async def submit_transfer(self, request: TransferRequest) -> None:
        """Run ``do_transfer`` on a worker thread bound to the request timeout."""
        await run_with_deadline(
            self.do_transfer,
            request,
            timeout_seconds=self._config.request_timeout_seconds,
        )

    async def fetch_transfers(
        self,
        account_id: int,
        query: ListTransferQuery,
    ) -> ListTransferResponse:
        """Run ``get_transfers`` on a worker thread bound to the request timeout."""
        return await run_with_deadline(
            self.get_transfers,
            account_id,
            query,
            timeout_seconds=self._config.request_timeout_seconds,
        )

    @staticmethod
    def _check(deadline: Optional[Deadline]) -> None:
        if deadline is not None:
            deadline.check()
