"""Bank service: deposits, withdrawals, balance and transaction history."""
import uuid
from typing import Any

from sqlalchemy.orm import Session

from bank_service import metrics
from bank_service.errors import InsufficientFunds, InvalidAmount
from bank_service.ledger import calculate_balance, check_withdrawal, validate_amount
from bank_service.logging import get_logger, log_transaction, timed_operation
from bank_service.models import Transaction, TransactionKind
from bank_service.schemas import TransactionResponse

logger = get_logger(__name__)


class BankService:
    """
    Service for the single shared account.

    The balance is recomputed from the whole transaction table on every call.
    Withdrawals read the balance and insert the new row in two separate
    round trips with no lock around them, so two concurrent withdrawals can
    both pass the funds check.
    """

    def __init__(self, db: Session):
        """
        Initialize the bank service.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    def get_balance(self) -> float:
        """Sum deposits minus withdrawals over the full history."""
        with timed_operation("balance_calculation", logger) as outcome:
            rows = self.db.query(Transaction.kind, Transaction.amount).all()
            balance = calculate_balance(rows)
            outcome.update(transaction_count=len(rows), balance=balance)

        metrics.record_balance(balance)
        return balance

    def deposit(self, amount: Any) -> float:
        """
        Record a deposit.

        Args:
            amount: Raw amount from the request body

        Returns:
            The validated amount

        Raises:
            InvalidAmount: if amount is not a positive finite number
        """
        kind = TransactionKind.DEPOSIT
        try:
            value = validate_amount(amount, kind)
        except InvalidAmount:
            log_transaction(logger, kind.value, repr(amount), accepted=False, reason="invalid_amount")
            metrics.record_rejection(kind.value, "invalid_amount")
            raise

        self._record(kind, value)
        log_transaction(logger, kind.value, value, accepted=True)
        return value

    def withdraw(self, amount: Any) -> float:
        """
        Record a withdrawal if the balance covers it.

        Args:
            amount: Raw amount from the request body

        Returns:
            The validated amount

        Raises:
            InvalidAmount: if amount is not a positive finite number
            InsufficientFunds: if amount exceeds the current balance
        """
        kind = TransactionKind.WITHDRAWAL
        try:
            value = validate_amount(amount, kind)
        except InvalidAmount:
            log_transaction(logger, kind.value, repr(amount), accepted=False, reason="invalid_amount")
            metrics.record_rejection(kind.value, "invalid_amount")
            raise

        balance = self.get_balance()
        try:
            check_withdrawal(value, balance)
        except InsufficientFunds:
            log_transaction(
                logger, kind.value, value, accepted=False,
                reason="insufficient_funds", balance=balance,
            )
            metrics.record_rejection(kind.value, "insufficient_funds")
            raise

        self._record(kind, value)
        log_transaction(logger, kind.value, value, accepted=True, balance=balance - value)
        return value

    def _record(self, kind: TransactionKind, amount: float) -> Transaction:
        transaction = Transaction(id=uuid.uuid4(), kind=kind, amount=amount)
        self.db.add(transaction)
        self.db.commit()
        metrics.record_transaction(kind.value, amount)
        return transaction

    def list_transactions(self) -> list[TransactionResponse]:
        """All transactions, newest first."""
        transactions = (
            self.db.query(Transaction)
            .order_by(Transaction.occurred_at.desc())
            .all()
        )
        return [TransactionResponse.model_validate(t) for t in transactions]

    def clear_transactions(self) -> int:
        """Delete every transaction. Returns the number of rows removed."""
        removed = self.db.query(Transaction).delete()
        self.db.commit()

        logger.info("transactions_cleared", removed=removed)
        metrics.record_clear(removed)
        return removed
