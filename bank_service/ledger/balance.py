"""
Balance Calculator

The balance is never stored. It is derived on every request from the full
transaction history:

    balance = sum(deposits) - sum(withdrawals)

Keeping no running total means the balance can never drift from the ledger,
at the cost of a full scan per read. The ledger is assumed to stay small;
a stored running total (or a periodic snapshot) would be the way to scale it.
"""
from typing import Iterable, Tuple, Union

from bank_service.models import TransactionKind

LedgerEntry = Tuple[Union[TransactionKind, str], float]


def signed_amount(kind: Union[TransactionKind, str], amount: float) -> float:
    """Return +amount for a deposit and -amount for a withdrawal."""
    kind = TransactionKind(kind)
    if kind is TransactionKind.DEPOSIT:
        return amount
    return -amount


def calculate_balance(entries: Iterable[LedgerEntry]) -> float:
    """
    Fold (kind, amount) pairs into a signed total.

    An empty history yields 0.
    """
    balance = 0.0
    for kind, amount in entries:
        balance += signed_amount(kind, amount)
    return balance


def as_json_number(value: float) -> Union[int, float]:
    """
    Return integral values as int so they serialize as `100`, not `100.0`.

    From 1e21 up the float is kept; JSON then writes it in exponent form.
    """
    if value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value
