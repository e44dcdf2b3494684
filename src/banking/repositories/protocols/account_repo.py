"""Account repository protocol."""

from typing import Protocol, Optional

from banking.core.deadline import Deadline
from banking.domain.models import Account, ListAccountQuery, ListAccountsResponse


class AccountRepository(Protocol):
    """Interface for account data access."""

    def create(self, account: Account, deadline: Optional[Deadline] = None) -> Account:
        """Persist a new account, claiming the commit on ``deadline`` if given."""
        ...

    def get_by_id(self, account_id: int) -> Optional[Account]:
        """Retrieve account by ID."""
        ...

    def get_by_cpf(self, cpf: str) -> Optional[Account]:
        """Retrieve account by CPF."""
        ...

    def get_balance(self, account_id: int) -> Optional[int]:
        """Return the account balance, or None if the account does not exist."""
        ...

    def list_page(self, query: ListAccountQuery) -> ListAccountsResponse:
        """List one page of accounts ordered by ID."""
        ...
