"""
Rates — Кросс-курсы из таблицы котировок ask/bid

Модуль вычисляет курс source → target по котировкам обеих валют
относительно общей базовой валюты:

    rate = field(quote(target)) / field(quote(source))

с округлением до precision значащих цифр. ask/bid/mid являются специализациями
одной функции rate, различающиеся только селектором field.

ФОРМУЛЫ:
    ask_rate = target.ask / source.ask
    bid_rate = target.bid / source.bid
    mid_rate = (target.ask + target.bid) / (source.ask + source.bid)

mid_rate это отношение сумм, а не среднее: множитель 1/2 сокращается.
Курс валюты к самой себе всегда 1 (числитель и знаменатель из одной котировки).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Таблица курсов только читается (через QuoteLookup)
2. Обе котировки получаются до любой арифметики
3. Результат детерминирован для фиксированных входов
"""

from decimal import Decimal
from typing import Callable, Iterable, Mapping, Optional, Union

from src.core.domain.quote import (
    Quote,
    QuoteLookup,
    RateTable,
    normalize_currency_code,
)
from src.core.math.precision import RateError, divide_with_precision, validate_precision

QuoteField = Callable[[Quote], Decimal]
QuoteSource = Union[RateTable, QuoteLookup]
RateFn = Callable[[str, str], Decimal]


# =============================================================================
# EXCEPTIONS
# =============================================================================


class UnknownCurrency(RateError, LookupError):
    """Источник котировок не знает запрошенную валюту."""

    def __init__(self, currency: str):
        super().__init__(f"Currency not found: {currency}")
        self.currency = currency


# =============================================================================
# СЕЛЕКТОРЫ ПОЛЕЙ КОТИРОВКИ
# =============================================================================


def ask_field(quote: Quote) -> Decimal:
    return quote.ask


def bid_field(quote: Quote) -> Decimal:
    return quote.bid


def ask_bid_sum_field(quote: Quote) -> Decimal:
    """ask + bid (не среднее)."""
    return quote.ask_bid_sum()


# =============================================================================
# ИСТОЧНИК КОТИРОВОК
# =============================================================================


def table_lookup(table: RateTable) -> QuoteLookup:
    """
    QuoteLookup поверх таблицы курсов.

    Коды нормализуются (strip + upper) и в ключах, и в запросах.

    Raises (при вызове):
        UnknownCurrency: Валюты нет в таблице
    """
    normalized = {normalize_currency_code(code): quote for code, quote in table.items()}

    def lookup(ccy: str) -> Quote:
        try:
            code = normalize_currency_code(ccy)
        except ValueError:
            raise UnknownCurrency(str(ccy)) from None

        quote = normalized.get(code)
        if quote is None:
            raise UnknownCurrency(code)
        return quote

    return lookup


def fetch_quote(quote_lookup: QuoteLookup, ccy: str) -> Quote:
    """
    Котировка из произвольного QuoteLookup.

    Внешний источник может сообщить об отсутствии валюты через KeyError
    (или другой LookupError) либо вернуть None. Оба случая приводятся к
    UnknownCurrency.

    Raises:
        UnknownCurrency: Нет котировки для ccy
    """
    try:
        quote = quote_lookup(ccy)
    except UnknownCurrency:
        raise
    except LookupError as e:
        raise UnknownCurrency(ccy) from e

    if quote is None:
        raise UnknownCurrency(ccy)
    return quote


def as_quote_lookup(quotes: QuoteSource) -> QuoteLookup:
    """Таблица → table_lookup; callable возвращается как есть."""
    if isinstance(quotes, Mapping):
        return table_lookup(quotes)
    if callable(quotes):
        return quotes
    raise TypeError(f"Expected a rate table or a quote lookup, got {type(quotes).__name__}")


# =============================================================================
# КРОСС-КУРСЫ
# =============================================================================


def rate(
    precision: int,
    quote_field: QuoteField,
    quote_lookup: QuoteLookup,
    source_ccy: str,
    target_ccy: str,
) -> Decimal:
    """
    Курс source → target: field(target) / field(source).

    Args:
        precision: Значащие цифры результата (>= 1)
        quote_field: Селектор скаляра из Quote (ask, bid, ask+bid)
        quote_lookup: Функция код валюты → Quote
        source_ccy: Исходная валюта
        target_ccy: Целевая валюта

    Returns:
        Курс, округлённый до precision значащих цифр (ROUND_HALF_UP)

    Raises:
        InvalidPrecision: precision не целое >= 1
        UnknownCurrency: Нет котировки для source или target
        DivisionByZero: field(source) == 0

    Examples:
        >>> lookup = table_lookup({"USD": Quote(ask=1, bid=1), "EUR": Quote(ask=2, bid=2)})
        >>> rate(10, ask_field, lookup, "USD", "EUR")
        Decimal('2')
    """
    validate_precision(precision)

    source_quote = fetch_quote(quote_lookup, source_ccy)
    target_quote = fetch_quote(quote_lookup, target_ccy)

    return divide_with_precision(
        quote_field(target_quote),
        quote_field(source_quote),
        precision,
    )


def ask_rate(precision: int, quotes: QuoteSource, source_ccy: str, target_ccy: str) -> Decimal:
    """Курс по ask-котировкам."""
    return rate(precision, ask_field, as_quote_lookup(quotes), source_ccy, target_ccy)


def bid_rate(precision: int, quotes: QuoteSource, source_ccy: str, target_ccy: str) -> Decimal:
    """Курс по bid-котировкам."""
    return rate(precision, bid_field, as_quote_lookup(quotes), source_ccy, target_ccy)


def mid_rate(precision: int, quotes: QuoteSource, source_ccy: str, target_ccy: str) -> Decimal:
    """
    Mid-курс: (target.ask + target.bid) / (source.ask + source.bid).

    Пример: USD {1, 1}, EUR {1.2003, 1.2203}
        mid_rate(10, table, "EUR", "USD") = 2 / 2.4206
    """
    return rate(precision, ask_bid_sum_field, as_quote_lookup(quotes), source_ccy, target_ccy)


def rate_fn(
    precision: int,
    quotes: QuoteSource,
    quote_field: QuoteField = ask_bid_sum_field,
) -> RateFn:
    """
    Двухаргументная функция курса (source, target) → Decimal.

    По умолчанию mid-курс. Precision проверяется сразу, а не при вызове.
    """
    validate_precision(precision)
    lookup = as_quote_lookup(quotes)

    def compute(source_ccy: str, target_ccy: str) -> Decimal:
        return rate(precision, quote_field, lookup, source_ccy, target_ccy)

    return compute


def cross_rate_matrix(
    precision: int,
    table: RateTable,
    currencies: Optional[Iterable[str]] = None,
    quote_field: QuoteField = ask_bid_sum_field,
) -> dict[tuple[str, str], Decimal]:
    """
    Курсы для всех упорядоченных пар валют.

    Args:
        precision: Значащие цифры курса
        table: Таблица курсов
        currencies: Подмножество валют (default: все валюты таблицы, в её порядке)
        quote_field: Селектор (default: mid)

    Returns:
        {(source, target): rate}, включая диагональ (source == target)
    """
    compute = rate_fn(precision, table, quote_field)
    codes = [normalize_currency_code(c) for c in (currencies if currencies is not None else table)]

    return {(s, t): compute(s, t) for s in codes for t in codes}
