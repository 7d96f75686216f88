"""Errors raised by the bank service and rendered as `{"error": ...}` bodies."""
from bank_service.models import TransactionKind


class BankServiceError(Exception):
    """Base class for errors that map to a client-facing HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidAmount(BankServiceError):
    """Raised when a deposit or withdrawal amount is not a positive finite number."""

    status_code = 400

    def __init__(self, kind: TransactionKind):
        self.kind = kind
        super().__init__(f"Invalid {kind.value} amount")


class InsufficientFunds(BankServiceError):
    """Raised when a withdrawal exceeds the current balance."""

    status_code = 400

    def __init__(self, amount: float, balance: float):
        self.amount = amount
        self.balance = balance
        super().__init__("Insufficient funds")


class NotFound(BankServiceError):
    status_code = 404


class UserNotFound(NotFound):
    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__("User not found")
