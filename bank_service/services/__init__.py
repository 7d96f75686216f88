"""Service layer for the bank service."""
from bank_service.services.bank import BankService
from bank_service.services.users import UserService

__all__ = ["BankService", "UserService"]
