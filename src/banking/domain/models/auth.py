"""Login models."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class LoginRequest:
    cpf: Optional[str] = None
    secret: Optional[str] = None


@dataclass
class LoginResponse:
    token: str
