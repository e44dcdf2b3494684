"""Pydantic schemas for transfer endpoints."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TransferCreateRequest(BaseModel):
    """
    Request schema for creating a transfer.

    The origin is the authenticated caller and is never read from the body.
    """

    destination: Optional[int] = Field(default=None, description="Destination account ID")
    amount: Optional[int] = Field(default=None, description="Amount in cents, must be > 0")


class TransferItemResponse(BaseModel):
    """One transfer with both parties' display fields."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    amount: int
    created_at: datetime = Field(serialization_alias="transferDate")
    destination_name: str = Field(serialization_alias="destinationName")
    destination_cpf: str = Field(serialization_alias="destinationCpf")
    origin_name: str = Field(serialization_alias="originName")
    origin_cpf: str = Field(serialization_alias="originCpf")


class TransferListResponse(BaseModel):
    """Response schema for the transfer history."""

    model_config = ConfigDict(from_attributes=True)

    total: int
    page: int
    data: list[TransferItemResponse]
