"""
Contract Validation Module

Валидация JSON контрактов: таблицы курсов и результаты переводов.
"""

from .validators import (
    RATE_TABLE,
    SCHEMA_DIR,
    TRANSFER_RESULT,
    ContractValidator,
    RateTableValidator,
    SchemaLoader,
    TransferResultValidator,
    contract_validator,
    default_loader,
    validate_rate_table,
    validate_transfer_result,
)

__all__ = [
    # Constants
    "RATE_TABLE",
    "SCHEMA_DIR",
    "TRANSFER_RESULT",
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "RateTableValidator",
    "TransferResultValidator",
    # Functions
    "contract_validator",
    "default_loader",
    "validate_rate_table",
    "validate_transfer_result",
]
