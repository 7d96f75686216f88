"""Balance derivation and deposit/withdrawal admission."""
from bank_service.ledger.admission import check_withdrawal, format_amount, validate_amount
from bank_service.ledger.balance import as_json_number, calculate_balance, signed_amount

__all__ = [
    "as_json_number",
    "calculate_balance",
    "check_withdrawal",
    "format_amount",
    "signed_amount",
    "validate_amount",
]
