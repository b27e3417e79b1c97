"""
Core math modules

Decimal-примитивы с явной точностью и расчёт кросс-курсов.
"""

# Precision
from src.core.math.precision import (
    # Constants
    CONVERSION_PRECISION,
    DEFAULT_RATE_PRECISION,
    ROUNDING_POLICY,
    # Exceptions
    DivisionByZero,
    InvalidPrecision,
    RateError,
    # Functions
    add_exact,
    divide_with_precision,
    exact_context,
    multiply_with_precision,
    precision_context,
    round_significant,
    subtract_exact,
    to_decimal,
    validate_precision,
)

# Rates
from src.core.math.rates import (
    UnknownCurrency,
    as_quote_lookup,
    ask_bid_sum_field,
    ask_field,
    ask_rate,
    bid_field,
    bid_rate,
    cross_rate_matrix,
    fetch_quote,
    mid_rate,
    rate,
    rate_fn,
    table_lookup,
)

__all__ = [
    # Precision — Constants
    "CONVERSION_PRECISION",
    "DEFAULT_RATE_PRECISION",
    "ROUNDING_POLICY",
    # Precision — Exceptions
    "DivisionByZero",
    "InvalidPrecision",
    "RateError",
    # Precision — Functions
    "add_exact",
    "divide_with_precision",
    "exact_context",
    "multiply_with_precision",
    "precision_context",
    "round_significant",
    "subtract_exact",
    "to_decimal",
    "validate_precision",
    # Rates — Exceptions
    "UnknownCurrency",
    # Rates — Field selectors
    "ask_bid_sum_field",
    "ask_field",
    "bid_field",
    # Rates — Functions
    "as_quote_lookup",
    "ask_rate",
    "bid_rate",
    "cross_rate_matrix",
    "fetch_quote",
    "mid_rate",
    "rate",
    "rate_fn",
    "table_lookup",
]
