from .domain import Account, Transaction, TransactionKind
from .schemas import (
    AccountCreate,
    AccountResponse,
    TransactionCreate,
    TransactionResponse,
    TransferRequest,
)

__all__ = [
    "Account",
    "Transaction",
    "TransactionKind",
    "AccountCreate",
    "AccountResponse",
    "TransactionCreate",
    "TransactionResponse",
    "TransferRequest",
]
