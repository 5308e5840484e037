from __future__ import annotations

from typing import Optional


class LedgerError(Exception):
    """Base class for every error raised by the ledger core."""


class InvalidArgumentError(LedgerError):
    """Raised when client input is malformed or out of range."""


class AccountNotFoundError(LedgerError):
    """Raised when an account id is missing from the store."""

    def __init__(self, message: str, account_id: Optional[str] = None) -> None:
        super().__init__(message)
        self.account_id = account_id


class InsufficientFundsError(LedgerError):
    """Raised when a withdrawal would drop balance below zero."""


class SameAccountError(LedgerError):
    """Raised when a transfer names the same account on both sides."""


class TransferFailedError(LedgerError):
    """Raised when the deposit leg failed and the withdrawal was compensated."""


class CriticalInconsistencyError(LedgerError):
    """Raised when the deposit leg and its compensation both failed.

    Funds have left the source account without arriving anywhere; operators
    must be alerted.
    """
