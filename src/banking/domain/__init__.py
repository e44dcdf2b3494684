"""Domain layer - pure business models with no external dependencies."""

from banking.domain.models import (
    Account,
    TransferRequest,
    TransferRecord,
    ListTransferQuery,
    ListTransferResponse,
)

__all__ = [
    "Account",
    "TransferRequest",
    "TransferRecord",
    "ListTransferQuery",
    "ListTransferResponse",
]
