"""Transfer domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class TransferRequest:
    """
    A request to move ``amount`` from ``origin`` to ``destination``.

    ``origin`` always comes from the authenticated caller. ``destination``
    and ``amount`` may be missing when decoded from a request body; the
    validator reports them.
    """

    origin: int
    destination: Optional[int] = None
    amount: Optional[int] = None


@dataclass(frozen=True)
class TransferRecord:
    """Append-only audit entry for one committed transfer."""

    id: Optional[int]
    origin_id: int
    destination_id: int
    amount: int
    created_at: datetime


@dataclass
class ListTransferQuery:
    """Zero-based page request for the transfer history."""

    page_size: int = 15
    page: int = 0

    @property
    def offset(self) -> int:
        return self.page_size * self.page


@dataclass
class TransferListItem:
    """A transfer joined with both parties' display fields."""

    amount: int
    created_at: datetime
    destination_name: str
    destination_cpf: str
    origin_name: str
    origin_cpf: str


@dataclass
class ListTransferResponse:
    """One page of transfer history; ``page`` is 1-indexed."""

    total: int
    page: int
    data: list[TransferListItem] = field(default_factory=list)
