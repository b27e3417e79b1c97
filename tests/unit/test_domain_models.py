"""
Тесты для доменных моделей: Account (credit/debit) и Quote

Проверяет:
1. Создание и валидацию модели Account
2. Immutability (frozen=True): credit/debit возвращают новый экземпляр
3. Отсутствующий баланс трактуется как 0
4. debit(credit(a, x), x) == a
5. Форматирование '<id>: <balance> <CCY>'
"""

from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.core.domain import (
    Account,
    Quote,
    credit,
    debit,
    format_account,
    modify_balance,
    normalize_currency_code,
)


@pytest.fixture
def eur_account() -> Account:
    return Account(id="ACC-1", balance=Decimal("1000.00"), ccy="eur")


class TestAccountModel:
    def test_currency_normalized(self, eur_account):
        assert eur_account.ccy == "EUR"

    def test_balance_optional(self):
        account = Account(id="ACC-2", ccy="NOK")
        assert account.balance is None
        assert account.balance_or_zero() == Decimal(0)

    def test_immutability(self, eur_account):
        """Account должен быть immutable (frozen=True)"""
        with pytest.raises(ValidationError):
            eur_account.balance = Decimal("1")

    def test_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            Account(id="", balance=Decimal("1"), ccy="EUR")

    def test_empty_currency_rejected(self):
        with pytest.raises(ValidationError):
            Account(id="ACC-1", balance=Decimal("1"), ccy="  ")

    def test_non_finite_balance_rejected(self):
        with pytest.raises(ValidationError):
            Account(id="ACC-1", balance=Decimal("NaN"), ccy="EUR")

    def test_json_roundtrip(self, eur_account):
        restored = Account.model_validate_json(eur_account.model_dump_json())
        assert restored == eur_account


class TestCreditDebit:
    def test_credit(self, eur_account):
        updated = credit(eur_account, Decimal("50.50"))

        assert updated.balance == Decimal("1050.50")
        assert updated.id == eur_account.id
        assert updated.ccy == eur_account.ccy
        assert eur_account.balance == Decimal("1000.00")
        assert updated is not eur_account

    def test_debit(self, eur_account):
        updated = debit(eur_account, "203.34")

        assert updated.balance == Decimal("796.66")
        assert str(updated.balance) == "796.66"
        assert eur_account.balance == Decimal("1000.00")

    def test_absent_balance_is_zero(self):
        empty = Account(id="ACC-3", ccy="USD")

        assert credit(empty, 5).balance == Decimal(5)
        assert debit(empty, 5).balance == Decimal(-5)

    def test_overdraft_allowed(self, eur_account):
        assert debit(eur_account, 1500).balance == Decimal("-500.00")

    def test_negative_amounts_allowed(self, eur_account):
        assert credit(eur_account, -100).balance == Decimal("900.00")

    def test_float_amount_is_exact(self, eur_account):
        assert credit(eur_account, 0.1).balance == Decimal("1000.10")

    @pytest.mark.parametrize("amount", ["0.01", "203.34", "999999.99", "-42", "1E+3"])
    def test_debit_inverts_credit(self, eur_account, amount):
        assert debit(credit(eur_account, amount), amount) == eur_account

    def test_non_finite_amount_rejected(self, eur_account):
        with pytest.raises(ValueError):
            credit(eur_account, float("inf"))

    def test_modify_balance_custom_op(self, eur_account):
        doubled = modify_balance(lambda balance, amount: balance * amount, eur_account, 2)
        assert doubled.balance == Decimal("2000.00")


class TestFormatting:
    def test_format(self, eur_account):
        assert format_account(eur_account) == "ACC-1: 1000.00 EUR"
        assert str(eur_account) == "ACC-1: 1000.00 EUR"

    def test_format_absent_balance(self):
        assert str(Account(id="ACC-2", ccy="nok")) == "ACC-2: 0 NOK"


class TestQuote:
    def test_valid(self):
        quote = Quote(ask="1.2003", bid="1.2203")
        assert quote.ask == Decimal("1.2003")
        assert quote.ask_bid_sum() == Decimal("2.4206")

    def test_bid_above_ask_allowed(self):
        """bid <= ask: конвенция, а не инвариант модели."""
        assert Quote(ask=1, bid=2).bid == Decimal(2)

    @pytest.mark.parametrize("ask, bid", [(0, 1), (1, 0), (-1, 1), ("NaN", 1)])
    def test_non_positive_rejected(self, ask, bid):
        with pytest.raises(ValidationError):
            Quote(ask=ask, bid=bid)

    def test_immutability(self):
        quote = Quote(ask=1, bid=1)
        with pytest.raises(ValidationError):
            quote.ask = Decimal(2)

    def test_normalize_currency_code(self):
        assert normalize_currency_code(" nok ") == "NOK"

        with pytest.raises(ValueError):
            normalize_currency_code("")

        with pytest.raises(ValueError):
            normalize_currency_code(978)
