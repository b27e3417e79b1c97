"""
Contracts — JSON Schema контракты на границах ядра

Два контракта:
- rate_table: сырые котировки {код: {ask, bid}} до построения Quote
  (проверяется в build_rate_table)
- transfer_result: снапшоты счетов после перевода
  (проверяется в TransferResult.to_contract)

Схемы поставляются внутри пакета (schema/*.json) и загружаются лениво,
при первом обращении к контракту. Нарушение контракта логируется и
пробрасывается как jsonschema.ValidationError.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import jsonschema
from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from src.core.logging import get_logger

SCHEMA_DIR = Path(__file__).parent / "schema"

RATE_TABLE = "rate_table"
TRANSFER_RESULT = "transfer_result"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """Чтение и meta-проверка схем из каталога (по умолчанию SCHEMA_DIR)."""

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or SCHEMA_DIR
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени файла без расширения.

        Raises:
            FileNotFoundError: Нет файла <schema_name>.json
            ValueError: Схема не проходит meta-валидацию Draft 2020-12
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.is_file():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_path.name}: {e.message}") from e

        self._schemas[schema_name] = schema
        return schema


@lru_cache(maxsize=None)
def default_loader() -> SchemaLoader:
    """Общий загрузчик встроенных схем, создаётся при первом вызове."""
    return SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """Draft 2020-12 валидатор одного контракта."""

    def __init__(self, schema_name: str, loader: Optional[SchemaLoader] = None):
        self.schema_name = schema_name
        self.schema = (loader or default_loader()).load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Raises:
            jsonschema.ValidationError: Первое (наиболее релевантное) нарушение
        """
        error = best_match(self.validator.iter_errors(data))
        if error is None:
            return

        get_logger(__name__).warning(
            "contract_violation",
            contract=self.schema_name,
            path="/".join(str(p) for p in error.absolute_path),
            error=error.message,
        )
        raise error

    def is_valid(self, data: Any) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any) -> Iterator[jsonschema.ValidationError]:
        return self.validator.iter_errors(data)


class RateTableValidator(ContractValidator):
    def __init__(self, loader: Optional[SchemaLoader] = None):
        super().__init__(RATE_TABLE, loader)


class TransferResultValidator(ContractValidator):
    def __init__(self, loader: Optional[SchemaLoader] = None):
        super().__init__(TRANSFER_RESULT, loader)


@lru_cache(maxsize=None)
def contract_validator(schema_name: str) -> ContractValidator:
    """Кэшированный валидатор встроенного контракта."""
    return ContractValidator(schema_name)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_rate_table(data: Any) -> None:
    """
    Сырая таблица курсов: коды буквенно-цифровые, ask/bid строго положительные,
    числом или десятичной строкой.

    Raises:
        jsonschema.ValidationError
    """
    contract_validator(RATE_TABLE).validate(data)


def validate_transfer_result(data: Any) -> None:
    """
    Raises:
        jsonschema.ValidationError
    """
    contract_validator(TRANSFER_RESULT).validate(data)
