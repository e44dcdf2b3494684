"""Account endpoints.

Handlers run the service on a worker thread bound to the request timeout,
answering 408 when it runs out.
"""

from fastapi import APIRouter, Depends, Path

from banking.api.deps import (
    PageParams,
    get_account_service,
    get_current_account_id,
    get_request_timeout,
)
from banking.api.schemas import (
    AccountCreate,
    AccountCreatedResponse,
    AccountListResponse,
    BalanceResponse,
)
from banking.core.deadline import run_with_deadline
from banking.core.validators import INT64_MAX
from banking.domain.models import NewAccountRequest
from banking.services import AccountService

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.post("", response_model=AccountCreatedResponse, status_code=201)
async def create_account(
    data: AccountCreate,
    service: AccountService = Depends(get_account_service),
    timeout: float = Depends(get_request_timeout),
):
    """Open a new account."""
    await run_with_deadline(
        service.create_account,
        NewAccountRequest(
            name=data.name,
            cpf=data.cpf,
            secret=data.secret,
            balance=data.balance,
        ),
        timeout_seconds=timeout,
    )
    return AccountCreatedResponse()


@router.get("", response_model=AccountListResponse)
async def list_accounts(
    params: PageParams = Depends(),
    _: int = Depends(get_current_account_id),
    service: AccountService = Depends(get_account_service),
    timeout: float = Depends(get_request_timeout),
):
    """List accounts, one page at a time."""
    result = await run_with_deadline(
        service.list_accounts,
        params.account_query(),
        timeout_seconds=timeout,
    )
    return AccountListResponse.model_validate(result, from_attributes=True)


@router.get("/balance", response_model=BalanceResponse)
async def get_own_balance(
    account_id: int = Depends(get_current_account_id),
    service: AccountService = Depends(get_account_service),
    timeout: float = Depends(get_request_timeout),
):
    """Balance of the authenticated account."""
    result = await run_with_deadline(service.get_balance, account_id, timeout_seconds=timeout)
    return BalanceResponse(balance=result.balance)


@router.get("/{account_id}/balance", response_model=BalanceResponse)
async def get_balance(
    account_id: int = Path(ge=1, le=INT64_MAX),
    _: int = Depends(get_current_account_id),
    service: AccountService = Depends(get_account_service),
    timeout: float = Depends(get_request_timeout),
):
    """Balance of any account."""
    result = await run_with_deadline(service.get_balance, account_id, timeout_seconds=timeout)
    return BalanceResponse(balance=result.balance)
