"""
Domain models and value objects.

Contains Quote (ask/bid), rate tables and Account with its balance operations.
"""

from src.core.domain.account import (
    Account,
    credit,
    debit,
    format_account,
    modify_balance,
)
from src.core.domain.quote import (
    CurrencyCode,
    Quote,
    QuoteLookup,
    RateTable,
    build_rate_table,
    normalize_currency_code,
)

__all__ = [
    # Quote module
    "CurrencyCode",
    "Quote",
    "QuoteLookup",
    "RateTable",
    "build_rate_table",
    "normalize_currency_code",
    # Account model
    "Account",
    "credit",
    "debit",
    "format_account",
    "modify_balance",
]
