"""Pydantic schemas for request/response validation."""
import uuid
from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from bank_service.models import TransactionKind


class UserCreate(BaseModel):
    """Request body for POST /users."""
    name: str = Field(..., description="Display name of the user")


class UserUpdate(BaseModel):
    """Request body for PUT /users/{user_id}. An omitted name leaves the user unchanged."""
    name: Optional[str] = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str


class BalanceResponse(BaseModel):
    """Response body for GET /balance."""
    balance: Union[int, float]


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str


class TransactionResponse(BaseModel):
    """A single ledger entry as returned by GET /transactions."""
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    kind: TransactionKind
    amount: float
    occurred_at: datetime = Field(..., serialization_alias="occurredAt")
