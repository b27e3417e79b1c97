"""
TransferContext — перевод денег между счетами с конверсией валюты

Контекст создаётся на один перевод и связывает:
- источник котировок (QuoteLookup или таблица курсов)
- счёт-источник (списание в его валюте)
- счёт-получатель (зачисление в его валюте)
- сумму в валюте источника

Порядок enact():
1. rate = mid_rate(rate_precision, quotes, source.ccy, target.ccy)
2. converted = amount * rate, округление до conversion_precision
3. source' = debit(source, amount), target' = credit(target, converted)

Ошибки шагов 1-2 (UnknownCurrency, DivisionByZero, InvalidPrecision)
пробрасываются без изменений до вычисления любого нового счёта.
Частичный перевод не наблюдаем: либо TransferResult, либо исключение.

Перевод в той же валюте не является особым случаем: курс равен 1, но
сумма всё равно округляется до conversion_precision и может измениться
(203.34 EUR → 203.3 EUR).
"""

from dataclasses import dataclass, field
from decimal import Decimal

from pydantic import BaseModel, Field

from src.core.contracts import validate_transfer_result
from src.core.domain.account import Account, credit, debit
from src.core.domain.quote import QuoteLookup
from src.core.logging import get_transfer_logger
from src.core.math.precision import (
    CONVERSION_PRECISION,
    DEFAULT_RATE_PRECISION,
    DecimalLike,
    RateError,
    multiply_with_precision,
    to_decimal,
    validate_precision,
)
from src.core.math.rates import QuoteSource, as_quote_lookup, mid_rate


# =============================================================================
# RESULT MODEL
# =============================================================================


class TransferResult(BaseModel):
    """
    Снапшоты обоих счетов после перевода.

    Immutable модель (frozen=True). Сохранение остаётся за вызывающим.
    """

    source: Account = Field(..., description="Счёт-источник после списания")
    target: Account = Field(..., description="Счёт-получатель после зачисления")

    model_config = {"frozen": True}

    def to_contract(self) -> dict:
        """
        JSON-совместимый dict (Decimal → str), проверенный контрактом transfer_result.

        Raises:
            jsonschema.ValidationError: Код валюты счёта не буквенно-цифровой
        """
        data = self.model_dump(mode="json")
        validate_transfer_result(data)
        return data


# =============================================================================
# TRANSFER CONTEXT
# =============================================================================


@dataclass(frozen=True)
class TransferContext:
    """Один перевод: source → target на amount в валюте source."""

    quotes: QuoteSource
    source: Account
    target: Account
    amount: Decimal
    rate_precision: int = DEFAULT_RATE_PRECISION
    conversion_precision: int = CONVERSION_PRECISION
    _lookup: QuoteLookup = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "amount", to_decimal(self.amount))
        validate_precision(self.rate_precision)
        validate_precision(self.conversion_precision)
        object.__setattr__(self, "_lookup", as_quote_lookup(self.quotes))

    def exchange_rate(self, target_ccy: str) -> Decimal:
        """Mid-курс из валюты источника в target_ccy."""
        return mid_rate(self.rate_precision, self._lookup, self.source.ccy, target_ccy)

    def convert(self, target_ccy: str, amount: DecimalLike) -> Decimal:
        """
        Конверсия суммы из валюты источника в target_ccy.

        Returns:
            amount * rate, округлённое до conversion_precision значащих цифр
        """
        exchange_rate = self.exchange_rate(target_ccy)
        return multiply_with_precision(amount, exchange_rate, self.conversion_precision)

    def enact(self) -> TransferResult:
        """
        Выполнение перевода.

        Returns:
            TransferResult с новыми экземплярами обоих счетов

        Raises:
            UnknownCurrency, DivisionByZero, InvalidPrecision: из расчёта курса
        """
        log = get_transfer_logger(__name__).bind(
            source_id=self.source.id,
            target_id=self.target.id,
            source_ccy=self.source.ccy,
            target_ccy=self.target.ccy,
            amount=str(self.amount),
        )

        try:
            exchange_rate = self.exchange_rate(self.target.ccy)
            converted = multiply_with_precision(
                self.amount, exchange_rate, self.conversion_precision
            )
        except RateError as e:
            log.warning("transfer_aborted", error_type=type(e).__name__, error=str(e))
            raise

        result = TransferResult(
            source=debit(self.source, self.amount),
            target=credit(self.target, converted),
        )

        log.info(
            "transfer_enacted",
            rate=str(exchange_rate),
            converted_amount=str(converted),
        )
        return result


def transfer_money(
    quotes: QuoteSource,
    source: Account,
    target: Account,
    amount: DecimalLike,
    **precision_overrides: int,
) -> TransferContext:
    """
    Создание контекста перевода.

    Args:
        quotes: Таблица курсов или QuoteLookup
        source: Счёт-источник
        target: Счёт-получатель
        amount: Сумма в валюте источника (знак не ограничен)
        **precision_overrides: rate_precision / conversion_precision

    Example:
        >>> ctx = transfer_money(rates, eur_account, nok_account, "203.34")
        >>> result = ctx.enact()  # doctest: +SKIP
    """
    return TransferContext(quotes, source, target, amount, **precision_overrides)
