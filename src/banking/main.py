"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from banking import __version__
from banking.config.settings import get_settings
from banking.config.logging_config import setup_logging
from banking.repositories.sqlalchemy.database import init_db
from banking.api.routers import auth_router, accounts_router, transfers_router
from banking.core.exceptions import (
    AppError,
    ArgumentError,
    TransferRequestError,
    AuthError,
    AccountNotFoundError,
    RequestTimeoutError,
    DatabaseError,
    InternalError,
)

logger = logging.getLogger(__name__)

# Error class -> HTTP status. Looked up along the exception's MRO.
ERROR_STATUS: dict[type[AppError], int] = {
    ArgumentError: 400,
    TransferRequestError: 400,
    AuthError: 401,
    AccountNotFoundError: 404,
    RequestTimeoutError: 408,
    DatabaseError: 500,
    InternalError: 500,
    AppError: 500,
}


def status_for(exc: AppError) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS:
            return ERROR_STATUS[cls]
    return 500


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    settings = get_settings()
    settings.validate_required()
    if settings.jwt_secret == "change-me":
        logger.warning("JWT_SECRET is the built-in default; set it in the environment")
    init_db()
    logger.info("Started %s %s", settings.app_name, __version__)
    yield
    # Shutdown (nothing to clean up)


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Accounts, login, balances and money transfers",
    version=__version__,
    lifespan=lifespan,
)

# Include routers
app.include_router(auth_router)
app.include_router(accounts_router)
app.include_router(transfers_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Report undecodable requests with the same envelope as ArgumentError."""
    fields = []
    for error in exc.errors():
        if error.get("type") == "json_invalid":
            name = "malformed request body"
        else:
            name = str(error.get("loc", ("",))[-1])
        if name and name not in fields:
            fields.append(name)
    error = ArgumentError(", ".join(fields) or "malformed request")
    return JSONResponse(status_code=400, content={"error": error.message})


@app.get("/")
def health_check() -> dict[str, bool]:
    """Health check endpoint."""
    return {"ok": True}
