"""
Pytest configuration and fixtures for banking API tests.

This module provides:
- Test settings (in-memory database, cheap bcrypt, fixed JWT secret)
- In-memory SQLite database fixtures
- Repository, store and service fixtures
- An in-memory LedgerStore double that records its calls
- Factory helpers for accounts, CPFs and auth headers
"""

from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from banking.main import app
from banking.api.deps import get_account_repo, get_ledger_store
from banking.config.settings import Settings, set_settings, reset_settings
from banking.core.deadline import Deadline
from banking.core.exceptions import (
    AccountNotFoundError,
    DatabaseError,
    TransferRequestError,
)
from banking.core.timezone import now_utc
from banking.domain.models import (
    Account,
    TransferRequest,
    TransferRecord,
    ListTransferQuery,
    ListTransferResponse,
    TransferListItem,
)
from banking.repositories.sqlalchemy.database import Base, reset_database
# Import ORM models to register them with Base before creating tables
from banking.repositories.sqlalchemy import orm_models  # noqa: F401
from banking.repositories.sqlalchemy import (
    SqlAlchemyAccountRepository,
    SqlAlchemyLedgerStore,
)
from banking.services import (
    AccountService,
    AuthService,
    TransferService,
    TransferConfig,
)

TEST_JWT_SECRET = "test-secret"


# =============================================================================
# CPF HELPERS
# =============================================================================


def _check_digit(digits: str, first_weight: int) -> str:
    total = sum(int(d) * (i + first_weight) for i, d in enumerate(digits))
    remainder = total % 11
    return "0" if remainder == 10 else str(remainder)


def make_cpf(seed: int) -> str:
    """Build a valid formatted CPF from any number below 10**9."""
    base = f"{seed:09d}"
    first = _check_digit(base, 1)
    second = _check_digit(base + first, 0)
    digits = base + first + second
    return f"{digits[0:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:11]}"


# =============================================================================
# SETTINGS
# =============================================================================


@pytest.fixture(autouse=True)
def test_settings() -> Settings:
    """Install deterministic settings for every test."""
    settings = Settings(
        database_url="sqlite://",
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=4,
        request_timeout_seconds=5.0,
        log_level="WARNING",
    )
    set_settings(settings)
    yield settings
    reset_database()
    reset_settings()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(test_engine) -> sessionmaker:
    """Session factory bound to the test engine."""
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def account_repo(session_factory) -> SqlAlchemyAccountRepository:
    """Provide test AccountRepository."""
    return SqlAlchemyAccountRepository(session_factory)


@pytest.fixture
def ledger_store(session_factory) -> SqlAlchemyLedgerStore:
    """Provide test LedgerStore."""
    return SqlAlchemyLedgerStore(session_factory)


# =============================================================================
# IN-MEMORY LEDGER STORE DOUBLE
# =============================================================================


class InMemoryLedgerStore:
    """
    LedgerStore double keeping balances in a dict.

    Every call is appended to ``calls``. ``fail_on`` names a method that
    raises DatabaseError. ``before_commit`` runs inside ``add_transfer``
    after the staged changes are computed and before the deadline is
    claimed, mimicking a slow commit.
    """

    def __init__(self, balances: Optional[dict[int, int]] = None):
        self.balances: dict[int, int] = dict(balances or {})
        self.names: dict[int, str] = {i: f"Account {i}" for i in self.balances}
        self.records: list[TransferRecord] = []
        self.calls: list[tuple] = []
        self.fail_on: Optional[str] = None
        self.before_commit: Optional[Callable[[], None]] = None

    def _maybe_fail(self, method: str) -> None:
        if self.fail_on == method:
            raise DatabaseError(f"{method} failed")

    def get_account_balance(self, account_id: int) -> int:
        self.calls.append(("get_account_balance", account_id))
        self._maybe_fail("get_account_balance")
        if account_id not in self.balances:
            raise AccountNotFoundError(account_id)
        return self.balances[account_id]

    def get_account_by_id(self, account_id: int) -> Account:
        self.calls.append(("get_account_by_id", account_id))
        self._maybe_fail("get_account_by_id")
        if account_id not in self.balances:
            raise AccountNotFoundError(account_id)
        return Account(
            id=account_id,
            name=self.names[account_id],
            cpf=make_cpf(account_id),
            balance=self.balances[account_id],
        )

    def add_transfer(
        self,
        request: TransferRequest,
        deadline: Optional[Deadline] = None,
    ) -> TransferRecord:
        self.calls.append(("add_transfer", request))
        self._maybe_fail("add_transfer")
        staged = dict(self.balances)
        if staged[request.origin] < request.amount:
            raise TransferRequestError("not enough funds")
        staged[request.origin] -= request.amount
        staged[request.destination] += request.amount
        if self.before_commit is not None:
            self.before_commit()
        if deadline is not None:
            deadline.begin_commit()
        self.balances = staged
        record = TransferRecord(
            id=len(self.records) + 1,
            origin_id=request.origin,
            destination_id=request.destination,
            amount=request.amount,
            created_at=now_utc(),
        )
        self.records.append(record)
        return record

    def get_transfers(
        self,
        account_id: int,
        query: ListTransferQuery,
    ) -> ListTransferResponse:
        self.calls.append(("get_transfers", account_id))
        self._maybe_fail("get_transfers")
        matching = [
            r for r in self.records
            if account_id in (r.origin_id, r.destination_id)
        ]
        page = matching[query.offset:query.offset + query.page_size]
        return ListTransferResponse(
            total=len(matching),
            page=query.page + 1,
            data=[
                TransferListItem(
                    amount=r.amount,
                    created_at=r.created_at,
                    destination_name=self.names[r.destination_id],
                    destination_cpf=make_cpf(r.destination_id),
                    origin_name=self.names[r.origin_id],
                    origin_cpf=make_cpf(r.origin_id),
                )
                for r in page
            ],
        )


@pytest.fixture
def memory_store() -> InMemoryLedgerStore:
    """Store double with account 1 (1000), 2 (500) and 3 (100)."""
    return InMemoryLedgerStore({1: 1000, 2: 500, 3: 100})


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def transfer_config() -> TransferConfig:
    return TransferConfig(request_timeout_seconds=5.0)


@pytest.fixture
def transfer_service(ledger_store, transfer_config) -> TransferService:
    """Provide TransferService backed by SQLite."""
    return TransferService(store=ledger_store, config=transfer_config)


@pytest.fixture
def memory_transfer_service(memory_store, transfer_config) -> TransferService:
    """Provide TransferService backed by the in-memory double."""
    return TransferService(store=memory_store, config=transfer_config)


@pytest.fixture
def account_service(account_repo) -> AccountService:
    """Provide test AccountService."""
    return AccountService(account_repo=account_repo, bcrypt_rounds=4)


@pytest.fixture
def auth_service(account_repo) -> AuthService:
    """Provide test AuthService."""
    return AuthService(account_repo=account_repo, jwt_secret=TEST_JWT_SECRET)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def account_factory(account_repo) -> Callable[..., Account]:
    """Factory for creating test accounts directly through the repository."""
    counter = {"n": 0}

    def _create_account(
        balance: int = 0,
        name: Optional[str] = None,
        cpf: Optional[str] = None,
        active: bool = True,
        secret: str = "not-a-real-hash",
    ) -> Account:
        counter["n"] += 1
        return account_repo.create(
            Account(
                id=None,
                name=name or f"Test Account {counter['n']}",
                cpf=cpf or make_cpf(100_000 + counter["n"]),
                balance=balance,
                secret=secret,
                active=active,
            )
        )

    return _create_account


@pytest.fixture
def token_for() -> Callable[[Account], str]:
    """Issue a bearer token for an account."""
    issuer = AuthService(account_repo=None, jwt_secret=TEST_JWT_SECRET)
    return issuer.issue_token


@pytest.fixture
def auth_headers(token_for) -> Callable[[Account], dict]:
    """Build an Authorization header for an account."""

    def _headers(account: Account) -> dict:
        return {"Authorization": f"Bearer {token_for(account)}"}

    return _headers


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(session_factory) -> TestClient:
    """Provide FastAPI test client with test database."""

    app.dependency_overrides[get_account_repo] = lambda: SqlAlchemyAccountRepository(session_factory)
    app.dependency_overrides[get_ledger_store] = lambda: SqlAlchemyLedgerStore(session_factory)
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
