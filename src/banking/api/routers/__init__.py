"""API routers package."""

from banking.api.routers.auth import router as auth_router
from banking.api.routers.accounts import router as accounts_router
from banking.api.routers.transfers import router as transfers_router

__all__ = [
    "auth_router",
    "accounts_router",
    "transfers_router",
]
