"""
Admission checks for deposits and withdrawals.

Amounts arrive straight from the JSON body and may be anything. Only real
JSON numbers that are finite and strictly positive are accepted; booleans
are rejected even though Python treats them as integers.
"""
import math
from decimal import Decimal
from typing import Any

from bank_service.errors import InsufficientFunds, InvalidAmount
from bank_service.models import TransactionKind


def validate_amount(value: Any, kind: TransactionKind) -> float:
    """
    Validate a requested amount and return it as a float.

    Raises:
        InvalidAmount: if the value is not a positive finite number
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidAmount(kind)

    try:
        amount = float(value)
    except OverflowError:
        # Integers too large for a double
        raise InvalidAmount(kind) from None

    if not math.isfinite(amount) or amount <= 0:
        raise InvalidAmount(kind)

    return amount


def check_withdrawal(amount: float, balance: float) -> None:
    """
    Gate a withdrawal against the current balance.

    Withdrawing exactly the balance is allowed.

    Raises:
        InsufficientFunds: if amount exceeds balance
    """
    if amount > balance:
        raise InsufficientFunds(amount, balance)


def format_amount(amount: float) -> str:
    """
    Render an amount the way the confirmation messages print numbers.

    Plain decimal notation from 1e-6 up to 1e21, exponent notation outside
    that range: 100.0 -> "100", 12.5 -> "12.5", 1e21 -> "1e+21", 1e-7 -> "1e-7".
    """
    value = float(amount)
    if value == 0:
        return "0"

    text = repr(value)  # shortest digits that round-trip
    if 1e-6 <= abs(value) < 1e21:
        if value.is_integer():
            return str(int(value))
        if "e" in text:
            # repr switches to exponent form below 1e-4
            return format(Decimal(text), "f")
        return text

    mantissa, _, exponent = text.partition("e")
    power = int(exponent)
    sign = "+" if power > 0 else "-"
    return f"{mantissa}e{sign}{abs(power)}"
