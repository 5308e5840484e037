from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from ..core.errors import InvalidArgumentError


class TransactionKind(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"

    @classmethod
    def parse(cls, value: "TransactionKind | str") -> "TransactionKind":
        try:
            return cls(value)
        except ValueError as exc:
            raise InvalidArgumentError(
                "Transaction type must be 'deposit' or 'withdrawal'"
            ) from exc


@dataclass(frozen=True)
class Account:
    """Read-only snapshot of an account as stored in the ledger."""

    id: str
    owner: str
    balance: float


@dataclass(frozen=True)
class Transaction:
    """Committed balance mutation against a single account."""

    id: str
    account_id: str
    kind: TransactionKind
    amount: float
    timestamp: datetime
