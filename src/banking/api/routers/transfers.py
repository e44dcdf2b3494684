"""Transfer endpoints.

Both handlers await the transfer engine's deadline-bound variants, so a
request that outlives ``request_timeout_seconds`` answers 408 and its unit
of work is rolled back.
"""

from fastapi import APIRouter, Depends

from banking.api.deps import (
    PageParams,
    get_current_account_id,
    get_transfer_service,
)
from banking.api.schemas import TransferCreateRequest, TransferListResponse
from banking.domain.models import TransferRequest
from banking.services import TransferService

router = APIRouter(prefix="/transfers", tags=["transfers"])


@router.post("", response_model=TransferCreateRequest, status_code=201)
async def create_transfer(
    data: TransferCreateRequest,
    account_id: int = Depends(get_current_account_id),
    service: TransferService = Depends(get_transfer_service),
):
    """Transfer money from the authenticated account; echoes the request."""
    await service.submit_transfer(
        TransferRequest(
            origin=account_id,
            destination=data.destination,
            amount=data.amount,
        )
    )
    return data


@router.get("", response_model=TransferListResponse)
async def list_transfers(
    params: PageParams = Depends(),
    account_id: int = Depends(get_current_account_id),
    service: TransferService = Depends(get_transfer_service),
):
    """Transfers sent or received by the authenticated account."""
    result = await service.fetch_transfers(account_id, params.transfer_query())
    return TransferListResponse.model_validate(result, from_attributes=True)
