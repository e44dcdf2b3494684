"""Ledger store protocol: what the transfer engine needs from storage."""

from typing import Protocol, Optional

from banking.core.deadline import Deadline
from banking.domain.models import (
    Account,
    TransferRequest,
    TransferRecord,
    ListTransferQuery,
    ListTransferResponse,
)


class LedgerStore(Protocol):
    """
    Transactional store for balances and transfer records.

    Implementations raise AccountNotFoundError for unknown accounts and wrap
    infrastructure failures in DatabaseError.
    """

    def get_account_balance(self, account_id: int) -> int:
        """Return the current balance of an account."""
        ...

    def get_account_by_id(self, account_id: int) -> Account:
        """Return an account."""
        ...

    def add_transfer(
        self,
        request: TransferRequest,
        deadline: Optional[Deadline] = None,
    ) -> TransferRecord:
        """
        Record the transfer, debit origin and credit destination as one
        unit of work. Either all three apply or none do.
        """
        ...

    def get_transfers(
        self,
        account_id: int,
        query: ListTransferQuery,
    ) -> ListTransferResponse:
        """Page through transfers where the account is origin or destination."""
        ...
