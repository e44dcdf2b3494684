"""
Authentication service.

Provides password hashing/verification, login and JWT issuance/verification.
"""

import logging
from datetime import timedelta
from typing import Optional

import bcrypt
import jwt

from banking.core.deadline import Deadline
from banking.core.exceptions import ArgumentError, AuthError
from banking.core.timezone import now_utc
from banking.core.validators import validate_cpf
from banking.domain.models import Account, LoginRequest, LoginResponse
from banking.repositories.protocols import AccountRepository

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 12


# =============================================================================
# Password Hashing
# =============================================================================


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password
        rounds: bcrypt cost factor

    Returns:
        Hashed password string
    """
    # bcrypt has a 72-byte limit
    password_bytes = password.encode("utf-8")[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if ``plain_password`` matches the stored hash."""
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8")[:72],
            hashed_password.encode("utf-8"),
        )
    except ValueError as exc:
        logger.warning("Password verification failed: %s", exc)
        return False


# =============================================================================
# Login and tokens
# =============================================================================


class AuthService:
    """Authenticates accounts by CPF and secret and issues bearer tokens."""

    def __init__(
        self,
        account_repo: Optional[AccountRepository],
        jwt_secret: str,
        jwt_algorithm: str = "HS256",
        expire_minutes: int = 15,
    ):
        self._account_repo = account_repo
        self._jwt_secret = jwt_secret
        self._jwt_algorithm = jwt_algorithm
        self._expire_minutes = expire_minutes

    def login(
        self,
        request: LoginRequest,
        deadline: Optional[Deadline] = None,
    ) -> LoginResponse:
        """
        Verify credentials and return a signed token.

        Raises:
            ArgumentError: missing fields or malformed CPF.
            AuthError: unknown CPF, wrong secret or inactive account.
            RequestTimeoutError: the deadline passed during the lookup.
        """
        self._validate(request)

        if deadline is not None:
            deadline.check()
        account = self._account_repo.get_by_cpf(request.cpf)
        if account is None or not verify_password(request.secret, account.secret):
            logger.info("Login rejected for cpf %s", request.cpf)
            raise AuthError("invalid credentials")
        if not account.active:
            raise AuthError("this account is inactive")

        if deadline is not None:
            deadline.check()

        return LoginResponse(token=self.issue_token(account))

    def issue_token(self, account: Account) -> str:
        """Create a signed JWT identifying the account."""
        claims = {
            "authorized": True,
            "userId": account.id,
            "exp": now_utc() + timedelta(minutes=self._expire_minutes),
        }
        return jwt.encode(claims, self._jwt_secret, algorithm=self._jwt_algorithm)

    def verify_token(self, token: str) -> int:
        """
        Decode a bearer token and return the account ID it carries.

        Raises:
            AuthError: if the token is malformed, expired or wrongly signed.
        """
        try:
            payload = jwt.decode(token, self._jwt_secret, algorithms=[self._jwt_algorithm])
        except jwt.InvalidTokenError:
            raise AuthError("invalid authentication token")

        user_id = payload.get("userId")
        if not payload.get("authorized") or not isinstance(user_id, int) or isinstance(user_id, bool):
            raise AuthError("invalid authentication token")
        return user_id

    @staticmethod
    def _validate(request: LoginRequest) -> None:
        missing = []
        if not request.cpf:
            missing.append("CPF")
        if not request.secret:
            missing.append("Secret")
        if missing:
            raise ArgumentError("missing values", ", ".join(missing))

        try:
            validate_cpf(request.cpf)
        except ValueError as exc:
            raise ArgumentError("invalid CPF", str(exc))
