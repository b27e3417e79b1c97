"""
Structured logging (structlog) для переводов.
"""

from .config import configure_logging, get_logger, get_transfer_logger

__all__ = ["configure_logging", "get_logger", "get_transfer_logger"]
