"""Login endpoint."""

from fastapi import APIRouter, Depends

from banking.api.deps import get_auth_service, get_request_timeout
from banking.api.schemas import LoginRequestSchema, LoginResponseSchema
from banking.core.deadline import run_with_deadline
from banking.domain.models import LoginRequest
from banking.services import AuthService

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=LoginResponseSchema)
async def login(
    data: LoginRequestSchema,
    service: AuthService = Depends(get_auth_service),
    timeout: float = Depends(get_request_timeout),
):
    """Exchange CPF and secret for a bearer token."""
    result = await run_with_deadline(
        service.login,
        LoginRequest(cpf=data.cpf, secret=data.secret),
        timeout_seconds=timeout,
    )
    return LoginResponseSchema(token=result.token)
