"""API route handlers for the bank service."""
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from bank_service.database import get_db
from bank_service.ledger import as_json_number, format_amount
from bank_service.schemas import (
    BalanceResponse,
    ErrorResponse,
    MessageResponse,
    TransactionResponse,
    UserCreate,
    UserResponse,
    UserUpdate,
)
from bank_service.services import BankService, UserService

users_router = APIRouter(prefix="/users", tags=["users"])
bank_router = APIRouter(tags=["bank"])

NOT_FOUND = {404: {"model": ErrorResponse}}
BAD_REQUEST = {400: {"model": ErrorResponse}}


def _requested_amount(body: Any) -> Any:
    """
    Pull `amount` out of a raw JSON body.

    Bodies are not schema-validated so that every malformed amount reaches
    the ledger checks and gets a 400. Non-object bodies carry no amount.
    """
    if isinstance(body, dict):
        return body.get("amount")
    return None


# =============================================================================
# USERS
# =============================================================================

@users_router.get("", response_model=list[UserResponse])
def list_users(db: Session = Depends(get_db)):
    """List every user in insertion order."""
    return UserService(db).list_users()


@users_router.get("/{user_id}", response_model=UserResponse, responses=NOT_FOUND)
def get_user(user_id: str, db: Session = Depends(get_db)):
    return UserService(db).get_user(user_id)


@users_router.post("", response_model=UserResponse, status_code=201)
def create_user(body: UserCreate, db: Session = Depends(get_db)):
    return UserService(db).create_user(body.name)


@users_router.put("/{user_id}", response_model=UserResponse, responses=NOT_FOUND)
def update_user(user_id: str, body: UserUpdate, db: Session = Depends(get_db)):
    """Rename a user. Only the name is mutable."""
    return UserService(db).update_user(user_id, body.name)


@users_router.delete("/{user_id}", response_model=MessageResponse, responses=NOT_FOUND)
def delete_user(user_id: str, db: Session = Depends(get_db)):
    UserService(db).delete_user(user_id)
    return MessageResponse(message="User deleted")


# =============================================================================
# BANK
# =============================================================================

@bank_router.get("/balance", response_model=BalanceResponse)
def get_balance(db: Session = Depends(get_db)):
    """Current balance, derived from the full transaction history."""
    return BalanceResponse(balance=as_json_number(BankService(db).get_balance()))


@bank_router.post("/deposit", response_model=MessageResponse, responses=BAD_REQUEST)
def deposit(body: Any = Body(None, examples=[{"amount": 100}]), db: Session = Depends(get_db)):
    amount = BankService(db).deposit(_requested_amount(body))
    return MessageResponse(message=f"Deposited ${format_amount(amount)}")


@bank_router.post("/withdraw", response_model=MessageResponse, responses=BAD_REQUEST)
def withdraw(body: Any = Body(None, examples=[{"amount": 100}]), db: Session = Depends(get_db)):
    """
    Withdraw if the balance allows it.

    Fails with 400 for a non-positive or non-numeric amount, and with
    400 "Insufficient funds" when the amount exceeds the balance.
    """
    amount = BankService(db).withdraw(_requested_amount(body))
    return MessageResponse(message=f"Withdrew ${format_amount(amount)}")


@bank_router.get("/transactions", response_model=list[TransactionResponse])
def list_transactions(db: Session = Depends(get_db)):
    """All transactions, newest first."""
    return BankService(db).list_transactions()


@bank_router.delete("/transactions", response_model=MessageResponse)
def clear_transactions(db: Session = Depends(get_db)):
    BankService(db).clear_transactions()
    return MessageResponse(message="All transactions cleared.")


router = APIRouter()
router.include_router(users_router)
router.include_router(bank_router)
