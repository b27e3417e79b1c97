"""
Quote — Котировка валюты (ask/bid) и таблица курсов

Immutable Pydantic модель котировки одной валюты относительно базовой.
RateTable: отображение код валюты → Quote. Калькулятор курсов читает
таблицу только через QuoteLookup (функция код → Quote), что позволяет
подставлять live-источник котировок без конкретной таблицы.
"""

from decimal import Decimal
from typing import Annotated, Any, Callable, Mapping

from pydantic import BaseModel, BeforeValidator, Field

from src.core.contracts import validate_rate_table


# =============================================================================
# CURRENCY CODE
# =============================================================================


def normalize_currency_code(code: Any) -> str:
    """
    Нормализация кода валюты: strip + upper.

    "eur", " EUR " и "EUR" обозначают одну валюту.

    Raises:
        ValueError: Если код не строка или пустой
    """
    if not isinstance(code, str):
        raise ValueError(f"Currency code must be a string, got {type(code).__name__}")

    normalized = code.strip().upper()
    if not normalized:
        raise ValueError("Currency code cannot be empty")

    return normalized


CurrencyCode = Annotated[str, BeforeValidator(normalize_currency_code)]


# =============================================================================
# QUOTE MODEL
# =============================================================================


class Quote(BaseModel):
    """
    Котировка валюты: цена продажи (ask) и покупки (bid).

    Обе цены строго положительные. bid <= ask является конвенцией, не инвариантом.
    """

    ask: Decimal = Field(..., gt=0, description="Цена продажи (ask)")
    bid: Decimal = Field(..., gt=0, description="Цена покупки (bid)")

    model_config = {"frozen": True}

    def ask_bid_sum(self) -> Decimal:
        """Сумма ask + bid (числитель/знаменатель mid-rate)."""
        return self.ask + self.bid


RateTable = Mapping[str, Quote]
QuoteLookup = Callable[[str], Quote]


# =============================================================================
# RATE TABLE
# =============================================================================


def build_rate_table(raw: Mapping[str, Any]) -> dict[str, Quote]:
    """
    Построение таблицы курсов из сырых данных.

    Args:
        raw: {код: {"ask": x, "bid": y}} или {код: Quote}. Сырые котировки
            проверяются контрактом rate_table до построения моделей.

    Returns:
        dict с нормализованными кодами в исходном порядке

    Raises:
        jsonschema.ValidationError: Таблица не соответствует контракту rate_table
        ValueError: Дубликат кода после нормализации
    """
    validate_rate_table(
        {
            code: quote.model_dump() if isinstance(quote, Quote) else quote
            for code, quote in raw.items()
        }
    )

    table: dict[str, Quote] = {}

    for code, quote in raw.items():
        ccy = normalize_currency_code(code)
        if ccy in table:
            raise ValueError(f"Duplicate currency code after normalization: {code!r}")

        table[ccy] = quote if isinstance(quote, Quote) else Quote.model_validate(quote)

    return table
