"""
Account — Модель счёта и операции с балансом

Immutable Pydantic модель счёта. Баланс никогда не присваивается напрямую:
любое изменение делается через credit/debit, возвращающий новый экземпляр Account.
Отсутствующий баланс (None) трактуется как 0 перед применением операции.
"""

from decimal import Decimal
from typing import Callable, Optional

from pydantic import BaseModel, Field

from src.core.domain.quote import CurrencyCode
from src.core.math.precision import DecimalLike, add_exact, subtract_exact, to_decimal


# =============================================================================
# ACCOUNT MODEL
# =============================================================================


class Account(BaseModel):
    """
    Модель счёта.

    Immutable модель (frozen=True). Все изменения баланса создают новый
    экземпляр через credit/debit.
    """

    id: str = Field(..., min_length=1, description="Идентификатор счёта (например, 'ACC-1')")
    balance: Optional[Decimal] = Field(
        None, description="Баланс в валюте счёта (None = баланс отсутствует)"
    )
    ccy: CurrencyCode = Field(..., description="Валюта счёта (например, 'EUR')")

    model_config = {"frozen": True}

    def balance_or_zero(self) -> Decimal:
        """Баланс, где отсутствующее значение равно 0."""
        return self.balance if self.balance is not None else Decimal(0)

    def __str__(self) -> str:
        return format_account(self)


# =============================================================================
# BALANCE OPERATIONS
# =============================================================================


def modify_balance(
    op: Callable[[Decimal, Decimal], Decimal],
    account: Account,
    amount: DecimalLike,
) -> Account:
    """
    Применение op к балансу счёта.

    Args:
        op: Бинарная операция (баланс, сумма) → новый баланс
        account: Исходный счёт (не изменяется)
        amount: Сумма операции

    Returns:
        Новый Account с balance = op(balance or 0, amount)
    """
    new_balance = op(account.balance_or_zero(), to_decimal(amount))
    return account.model_copy(update={"balance": new_balance})


def credit(account: Account, amount: DecimalLike) -> Account:
    """Зачисление: balance + amount. Отрицательные суммы допустимы."""
    return modify_balance(add_exact, account, amount)


def debit(account: Account, amount: DecimalLike) -> Account:
    """Списание: balance - amount. Проверки овердрафта нет."""
    return modify_balance(subtract_exact, account, amount)


def format_account(account: Account) -> str:
    """Формат '<id>: <balance> <CCY>', например 'ACC-1: 796.66 EUR'."""
    return f"{account.id}: {account.balance_or_zero()} {account.ccy}"
