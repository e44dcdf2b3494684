"""Pydantic schemas for account endpoints."""

from typing import Optional

from pydantic import BaseModel, Field


class AccountCreate(BaseModel):
    """Request schema for opening an account.

    Fields are optional here so the service can report every missing field
    in one error.
    """

    name: Optional[str] = Field(default=None, max_length=255)
    cpf: Optional[str] = Field(default=None, description="CPF formatted as ddd.ddd.ddd-dd")
    secret: Optional[str] = Field(default=None, description="8 to 16 characters")
    balance: Optional[int] = Field(default=0, description="Initial balance in cents")


class AccountCreatedResponse(BaseModel):
    msg: str = "account created"


class AccountListItemResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    name: str
    cpf: str
    balance: int


class AccountListResponse(BaseModel):
    """Response schema for the account listing."""

    model_config = {"from_attributes": True}

    total: int
    page: int
    data: list[AccountListItemResponse]


class BalanceResponse(BaseModel):
    model_config = {"from_attributes": True}

    balance: int
