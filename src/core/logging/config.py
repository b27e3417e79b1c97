"""
Logging — централизованная конфигурация structlog

Все модули получают логгер через get_logger(__name__). configure_logging
вызывается один раз вызывающей стороной (приложение, тесты).
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    extra_processors: Optional[list] = None,
) -> None:
    """
    Конфигурация structlog для всего приложения.

    Args:
        level: Уровень логирования (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: JSON-вывод вместо человекочитаемого
        include_timestamp: Добавлять ISO timestamp
        extra_processors: Дополнительные structlog processors

    Raises:
        ValueError: Неизвестный уровень логирования
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown logging level: {level}")

    logging.basicConfig(
        level=log_level,
        stream=sys.stdout,
        format="%(message)s",  # форматирует structlog
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """Логгер structlog (name обычно __name__)."""
    return structlog.get_logger(name)


def get_transfer_logger(name: str) -> FilteringBoundLogger:
    """Логгер с контекстом подсистемы переводов."""
    return get_logger(name).bind(subsystem="transfer")
