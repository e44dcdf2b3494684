"""
Unit tests for transfer request validation.

Tests cover:
- Well-formed requests
- Missing and non-positive amounts
- Missing destination
- Several offending fields reported together
- Transfers to the origin account itself
"""

import pytest

from banking.core.exceptions import ArgumentError
from banking.domain.models import TransferRequest
from banking.services.transfer_validator import MAX_AMOUNT, validate_transfer_request


# =============================================================================
# VALID REQUESTS
# =============================================================================


class TestValidRequests:
    """Requests that must pass untouched."""

    def test_positive_amount_and_destination(self):
        validate_transfer_request(TransferRequest(origin=1, destination=2, amount=100))

    def test_amount_at_upper_bound(self):
        validate_transfer_request(TransferRequest(origin=1, destination=2, amount=MAX_AMOUNT))


# =============================================================================
# INVALID FIELDS
# =============================================================================


class TestInvalidFields:
    """Requests rejected with ArgumentError."""

    @pytest.mark.parametrize("amount", [None, 0, -1, -500])
    def test_bad_amount(self, amount):
        """
        GIVEN a request with a missing, zero or negative amount
        WHEN I validate it
        THEN ArgumentError names the amount field
        """
        with pytest.raises(ArgumentError) as exc_info:
            validate_transfer_request(TransferRequest(origin=1, destination=2, amount=amount))

        assert exc_info.value.message == "invalid argument: amount"

    def test_amount_above_upper_bound(self):
        with pytest.raises(ArgumentError):
            validate_transfer_request(
                TransferRequest(origin=1, destination=2, amount=MAX_AMOUNT + 1)
            )

    @pytest.mark.parametrize("destination", [0, -3, MAX_AMOUNT + 1, 2**64])
    def test_destination_out_of_range(self, destination):
        """
        GIVEN a destination that is not a positive 64-bit account ID
        WHEN I validate the request
        THEN only destination is reported, before any storage access
        """
        with pytest.raises(ArgumentError) as exc_info:
            validate_transfer_request(
                TransferRequest(origin=1, destination=destination, amount=10)
            )

        assert exc_info.value.message == "invalid argument: destination"

    def test_boolean_amount_rejected(self):
        with pytest.raises(ArgumentError):
            validate_transfer_request(TransferRequest(origin=1, destination=2, amount=True))

    def test_missing_destination(self):
        with pytest.raises(ArgumentError) as exc_info:
            validate_transfer_request(TransferRequest(origin=1, amount=100))

        assert exc_info.value.message == "invalid argument: destination"

    def test_all_offending_fields_reported_together(self):
        """
        GIVEN a request with neither amount nor destination
        WHEN I validate it
        THEN both fields appear in one error, amount first
        """
        with pytest.raises(ArgumentError) as exc_info:
            validate_transfer_request(TransferRequest(origin=1))

        assert str(exc_info.value) == "invalid argument: amount, destination"


# =============================================================================
# SELF TRANSFER
# =============================================================================


class TestSelfTransfer:

    def test_same_origin_and_destination_rejected(self):
        """
        GIVEN origin == destination
        WHEN I validate the request
        THEN it is rejected before any storage access
        """
        with pytest.raises(ArgumentError) as exc_info:
            validate_transfer_request(TransferRequest(origin=7, destination=7, amount=10))

        assert "cannot transfer to the same account" in exc_info.value.message
