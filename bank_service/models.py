"""SQLAlchemy ORM models for the bank service."""
import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Enum, Float, Text, Uuid

from bank_service.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TransactionKind(str, enum.Enum):
    """The two kinds of ledger entry."""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class User(Base):
    """An account holder. Users are not linked to transactions."""
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)


class Transaction(Base):
    """A single deposit or withdrawal. Rows are never updated after insert."""
    __tablename__ = "transactions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    kind = Column(
        Enum(
            TransactionKind,
            name="transaction_kind",
            values_callable=lambda kinds: [k.value for k in kinds],
        ),
        nullable=False,
    )
    amount = Column(Float, nullable=False)  # Always > 0; sign comes from kind
    occurred_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False, index=True)
