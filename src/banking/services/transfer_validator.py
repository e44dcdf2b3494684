"""Structural validation of transfer requests. Pure; no I/O."""

from banking.core.exceptions import ArgumentError
from banking.core.validators import INT64_MAX, is_positive_int64
from banking.domain.models import TransferRequest

MAX_AMOUNT = INT64_MAX


def validate_transfer_request(request: TransferRequest) -> None:
    """
    Reject a malformed transfer before it reaches storage.

    All offending fields are reported together, e.g.
    ``invalid argument: amount, destination``.

    Raises:
        ArgumentError: on a missing/non-positive amount, a missing or
            out-of-range destination, or a transfer to the origin
            account itself.
    """
    invalid = []

    if not is_positive_int64(request.amount):
        invalid.append("amount")

    if not is_positive_int64(request.destination):
        invalid.append("destination")

    if invalid:
        raise ArgumentError(", ".join(invalid))

    if request.destination == request.origin:
        raise ArgumentError("destination", "cannot transfer to the same account")
