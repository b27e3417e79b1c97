"""
Precision — Decimal-арифметика с явной точностью

Модуль обеспечивает детерминированные денежные вычисления:
- Конверсия входов в Decimal (float через str, без двоичного шума)
- Округление до N значащих цифр
- Деление/умножение с явным decimal.Context на каждом вызове
- Точное сложение/вычитание балансов

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Глобальный decimal-контекст не изменяется и не влияет на точность
2. Единая политика округления: ROUND_HALF_UP
3. NaN/Infinity не попадают в вычисления (ValueError на входе)
4. Деление на ноль → DivisionByZero, а не fallback
"""

from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation
from typing import Final, Union

# =============================================================================
# ПАРАМЕТРЫ ТОЧНОСТИ
# =============================================================================

# Единственная политика округления во всех операциях
ROUNDING_POLICY: Final[str] = ROUND_HALF_UP

# Точность кросс-курса по умолчанию (значащие цифры)
DEFAULT_RATE_PRECISION: Final[int] = 10

# Точность конверсии суммы в валюту получателя (значащие цифры)
CONVERSION_PRECISION: Final[int] = 4


DecimalLike = Union[Decimal, int, float, str]


# =============================================================================
# EXCEPTIONS
# =============================================================================


class RateError(Exception):
    """Базовая ошибка вычисления курса. Все ошибки детерминированы входами."""

    pass


class InvalidPrecision(RateError, ValueError):
    """Точность не является целым числом >= 1."""

    pass


class DivisionByZero(RateError, ZeroDivisionError):
    """Делитель, полученный из котировки, равен нулю."""

    pass


# =============================================================================
# КОНВЕРСИЯ И ВАЛИДАЦИЯ
# =============================================================================


def to_decimal(value: DecimalLike) -> Decimal:
    """
    Конверсия значения в конечный Decimal.

    float конвертируется через str(), поэтому 0.1 → Decimal("0.1").

    Args:
        value: Decimal, int, float или строка

    Returns:
        Decimal

    Raises:
        ValueError: Если значение не число, NaN или Infinity

    Examples:
        >>> to_decimal(0.1)
        Decimal('0.1')
        >>> to_decimal("1.2003")
        Decimal('1.2003')
    """
    if isinstance(value, bool):
        raise ValueError(f"Boolean is not a decimal value: {value!r}")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip() if isinstance(value, str) else str(value))
        except InvalidOperation:
            raise ValueError(f"Not a decimal value: {value!r}") from None
    else:
        raise ValueError(f"Unsupported decimal value type: {type(value).__name__}")

    if not result.is_finite():
        raise ValueError(f"Decimal value must be finite (not NaN/Inf), got {value!r}")

    return result


def validate_precision(precision: int) -> int:
    """
    Проверка точности: целое число >= 1.

    Raises:
        InvalidPrecision: bool, не-int или precision < 1
    """
    if isinstance(precision, bool) or not isinstance(precision, int):
        raise InvalidPrecision(f"Precision must be an integer, got {precision!r}")

    if precision < 1:
        raise InvalidPrecision(f"Precision must be >= 1, got {precision}")

    return precision


def precision_context(precision: int) -> Context:
    """Изолированный decimal.Context с заданной точностью и ROUND_HALF_UP."""
    return Context(prec=validate_precision(precision), rounding=ROUNDING_POLICY)


# =============================================================================
# ОПЕРАЦИИ С ЯВНОЙ ТОЧНОСТЬЮ
# =============================================================================


def round_significant(value: DecimalLike, precision: int) -> Decimal:
    """
    Округление до precision значащих цифр.

    Examples:
        >>> round_significant("539.843087", 4)
        Decimal('539.8')
        >>> round_significant("0.00012345", 2)
        Decimal('0.00012')
    """
    return precision_context(precision).plus(to_decimal(value))


def divide_with_precision(
    numerator: DecimalLike,
    denominator: DecimalLike,
    precision: int,
) -> Decimal:
    """
    Деление с округлением результата до precision значащих цифр.

    В отличие от float-деления здесь нет epsilon-защиты: нулевой делитель
    является ошибкой входных данных.

    Args:
        numerator: Числитель
        denominator: Знаменатель
        precision: Количество значащих цифр результата

    Returns:
        numerator / denominator с precision значащими цифрами

    Raises:
        InvalidPrecision: Если precision < 1
        DivisionByZero: Если denominator == 0
    """
    ctx = precision_context(precision)
    num = to_decimal(numerator)
    denom = to_decimal(denominator)

    if denom.is_zero():
        raise DivisionByZero(f"Division by zero: {num} / {denom}")

    return ctx.divide(num, denom)


def multiply_with_precision(a: DecimalLike, b: DecimalLike, precision: int) -> Decimal:
    """Произведение a * b, округлённое до precision значащих цифр."""
    return precision_context(precision).multiply(to_decimal(a), to_decimal(b))


def exact_context(a: Decimal, b: Decimal) -> Context:
    """
    Context, точности которого хватает на a ± b без округления.

    Цифры результата: от старшего разряда (плюс перенос) до младшего
    показателя любого из операндов.
    """
    exponent = min(a.as_tuple().exponent, b.as_tuple().exponent)
    digits = max(a.adjusted(), b.adjusted()) - exponent + 2
    return precision_context(max(digits, 1))


def add_exact(a: DecimalLike, b: DecimalLike) -> Decimal:
    """Точное сложение балансов (без округления)."""
    x, y = to_decimal(a), to_decimal(b)
    return exact_context(x, y).add(x, y)


def subtract_exact(a: DecimalLike, b: DecimalLike) -> Decimal:
    """Точное вычитание балансов (без округления)."""
    x, y = to_decimal(a), to_decimal(b)
    return exact_context(x, y).subtract(x, y)
