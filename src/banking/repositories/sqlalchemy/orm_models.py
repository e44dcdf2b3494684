"""SQLAlchemy ORM model definitions."""

from datetime import datetime, timezone

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import relationship

from banking.repositories.sqlalchemy.database import Base


def _utcnow() -> datetime:
    # Stored naive, always UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class AccountORM(Base):
    """SQLAlchemy model for Account."""

    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint("balance >= 0", name="ck_accounts_balance_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    cpf = Column(String(14), unique=True, nullable=False, index=True)
    secret = Column(String(255), nullable=False)
    balance = Column(BigInteger, nullable=False, default=0)
    active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=_utcnow)
    updated_at = Column(DateTime, nullable=True, onupdate=_utcnow)

    outgoing = relationship(
        "TransferORM",
        foreign_keys="TransferORM.origin_id",
        back_populates="origin",
    )
    incoming = relationship(
        "TransferORM",
        foreign_keys="TransferORM.destination_id",
        back_populates="destination",
    )


class TransferORM(Base):
    """SQLAlchemy model for a transfer record (append-only)."""

    __tablename__ = "transfers"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transfers_amount_positive"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    origin_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    destination_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    amount = Column(BigInteger, nullable=False)
    created_at = Column(DateTime, nullable=False, default=_utcnow)

    origin = relationship("AccountORM", foreign_keys=[origin_id], back_populates="outgoing")
    destination = relationship(
        "AccountORM",
        foreign_keys=[destination_id],
        back_populates="incoming",
    )
