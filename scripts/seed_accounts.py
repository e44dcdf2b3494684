#!/usr/bin/env python3
"""
Seed the configured database with demo accounts and a few transfers.
Safe to re-run: accounts whose CPF already exists are skipped.
"""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from banking.config.logging_config import setup_logging
from banking.config.settings import get_settings
from banking.core.exceptions import AppError
from banking.domain.models import NewAccountRequest, TransferRequest
from banking.repositories.sqlalchemy import (
    SqlAlchemyAccountRepository,
    SqlAlchemyLedgerStore,
    get_session_factory,
    init_db,
)
from banking.services import AccountService, TransferService, TransferConfig

DEMO_ACCOUNTS = [
    # name, cpf, secret, initial balance in cents
    ("Ana Souza", "529.982.247-25", "ana-secret1", 100_000),
    ("Bruno Lima", "111.444.777-35", "bruno-secret", 50_000),
    ("Carla Dias", "123.456.789-09", "carla-secret", 0),
]

DEMO_TRANSFERS = [
    # origin index, destination index, amount in cents
    (0, 1, 12_500),
    (1, 2, 3_000),
    (0, 2, 7_250),
]


def seed() -> None:
    setup_logging("INFO")
    settings = get_settings()
    print(f"Seeding {settings.database_url}")
    init_db()

    repo = SqlAlchemyAccountRepository(get_session_factory())
    accounts = AccountService(repo, bcrypt_rounds=settings.bcrypt_rounds)

    ids = []
    for name, cpf, secret, balance in DEMO_ACCOUNTS:
        existing = repo.get_by_cpf(cpf)
        if existing:
            print(f"✓ {name} already exists (id={existing.id})")
            ids.append(existing.id)
            continue
        created = accounts.create_account(
            NewAccountRequest(name=name, cpf=cpf, secret=secret, balance=balance)
        )
        print(f"✓ Created {name} (id={created.id}, balance={balance})")
        ids.append(created.id)

    transfers = TransferService(
        SqlAlchemyLedgerStore(get_session_factory()),
        TransferConfig.from_settings(settings),
    )
    for origin, destination, amount in DEMO_TRANSFERS:
        request = TransferRequest(origin=ids[origin], destination=ids[destination], amount=amount)
        try:
            transfers.do_transfer(request)
            print(f"✓ Transfer {ids[origin]} -> {ids[destination]}: {amount}")
        except AppError as e:
            print(f"✗ Transfer {ids[origin]} -> {ids[destination]} skipped: {e.message}")


if __name__ == "__main__":
    seed()
