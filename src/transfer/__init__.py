"""Transfer: перевод денег между счетами в разных валютах."""

from .context import TransferContext, TransferResult, transfer_money

__all__ = [
    "TransferContext",
    "TransferResult",
    "transfer_money",
]
