"""
Tests for the balance calculator and the admission checks.

These are pure functions; no store is involved.
"""
import math

import pytest

from bank_service.errors import InsufficientFunds, InvalidAmount
from bank_service.ledger import (
    as_json_number,
    calculate_balance,
    check_withdrawal,
    format_amount,
    signed_amount,
    validate_amount,
)
from bank_service.models import TransactionKind

DEPOSIT = TransactionKind.DEPOSIT
WITHDRAWAL = TransactionKind.WITHDRAWAL


class TestCalculateBalance:
    """Balance is deposits minus withdrawals over the whole history."""

    def test_empty_history_is_zero(self):
        assert calculate_balance([]) == 0

    def test_deposits_only(self):
        assert calculate_balance([(DEPOSIT, 100), (DEPOSIT, 50)]) == 150

    def test_deposits_minus_withdrawals(self):
        entries = [(DEPOSIT, 100), (WITHDRAWAL, 30), (DEPOSIT, 20), (WITHDRAWAL, 40)]
        assert calculate_balance(entries) == 50

    def test_order_does_not_matter(self):
        entries = [(WITHDRAWAL, 30), (DEPOSIT, 100), (WITHDRAWAL, 70)]
        assert calculate_balance(entries) == calculate_balance(list(reversed(entries))) == 0

    def test_accepts_kind_values_as_strings(self):
        assert calculate_balance([("deposit", 10), ("withdrawal", 4)]) == 6

    def test_can_go_negative(self):
        """The fold itself does not clamp; only admission prevents overdraft."""
        assert calculate_balance([(WITHDRAWAL, 5)]) == -5

    def test_accepts_a_generator(self):
        entries = ((DEPOSIT, n) for n in range(1, 5))
        assert calculate_balance(entries) == 10


class TestSignedAmount:

    def test_deposit_is_positive(self):
        assert signed_amount(DEPOSIT, 12.5) == 12.5

    def test_withdrawal_is_negative(self):
        assert signed_amount(WITHDRAWAL, 12.5) == -12.5

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError):
            signed_amount("refund", 1)


class TestValidateAmount:
    """Only positive finite JSON numbers pass."""

    @pytest.mark.parametrize("value", [1, 100, 0.01, 12.5, 10**9])
    def test_accepts_positive_numbers(self, value):
        assert validate_amount(value, DEPOSIT) == float(value)

    def test_returns_float(self):
        assert isinstance(validate_amount(100, DEPOSIT), float)

    @pytest.mark.parametrize("value", [0, -5, -0.01, 0.0])
    def test_rejects_non_positive(self, value):
        with pytest.raises(InvalidAmount):
            validate_amount(value, DEPOSIT)

    @pytest.mark.parametrize("value", [None, "100", [100], {"value": 1}, True, False])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(InvalidAmount):
            validate_amount(value, WITHDRAWAL)

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
    def test_rejects_non_finite(self, value):
        with pytest.raises(InvalidAmount):
            validate_amount(value, DEPOSIT)

    def test_rejects_integer_too_large_for_float(self):
        with pytest.raises(InvalidAmount):
            validate_amount(10**400, DEPOSIT)

    def test_error_message_names_the_operation(self):
        with pytest.raises(InvalidAmount) as deposit_err:
            validate_amount(-1, DEPOSIT)
        with pytest.raises(InvalidAmount) as withdrawal_err:
            validate_amount(-1, WITHDRAWAL)

        assert deposit_err.value.message == "Invalid deposit amount"
        assert withdrawal_err.value.message == "Invalid withdrawal amount"
        assert deposit_err.value.status_code == 400


class TestCheckWithdrawal:

    def test_amount_below_balance_passes(self):
        check_withdrawal(40, 100)

    def test_exact_balance_passes(self):
        check_withdrawal(100, 100)

    def test_amount_above_balance_rejected(self):
        with pytest.raises(InsufficientFunds) as err:
            check_withdrawal(150, 100)

        assert err.value.message == "Insufficient funds"
        assert err.value.amount == 150
        assert err.value.balance == 100

    def test_any_withdrawal_rejected_on_empty_ledger(self):
        with pytest.raises(InsufficientFunds):
            check_withdrawal(0.01, 0)


class TestFormatAmount:

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (100, "100"),
            (100.0, "100"),
            (12.5, "12.5"),
            (0.01, "0.01"),
            (0.00005, "0.00005"),
            (1e-6, "0.000001"),
            (1e20, "100000000000000000000"),
        ],
    )
    def test_formatting(self, amount, expected):
        assert format_amount(amount) == expected

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (1e21, "1e+21"),
            (1.5e22, "1.5e+22"),
            (1e-7, "1e-7"),
            (2.5e-8, "2.5e-8"),
        ],
    )
    def test_exponent_notation_outside_plain_range(self, amount, expected):
        """Very large and very small amounts use a signed, unpadded exponent."""
        assert format_amount(amount) == expected


class TestAsJsonNumber:

    @pytest.mark.parametrize("value,expected", [(0.0, 0), (100.0, 100), (-40.0, -40)])
    def test_integral_values_become_int(self, value, expected):
        result = as_json_number(value)
        assert result == expected
        assert isinstance(result, int)

    def test_fractional_values_stay_float(self):
        assert as_json_number(12.5) == 12.5

    def test_huge_values_stay_float(self):
        assert isinstance(as_json_number(1e21), float)
