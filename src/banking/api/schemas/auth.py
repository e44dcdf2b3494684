"""Pydantic schemas for login."""

from typing import Optional

from pydantic import BaseModel


class LoginRequestSchema(BaseModel):
    cpf: Optional[str] = None
    secret: Optional[str] = None


class LoginResponseSchema(BaseModel):
    token: str
