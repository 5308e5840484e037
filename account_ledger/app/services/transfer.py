from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple
from uuid import uuid4

from ..core.errors import (
    AccountNotFoundError,
    CriticalInconsistencyError,
    InsufficientFundsError,
    InvalidArgumentError,
    SameAccountError,
    TransferFailedError,
)
from ..models import Transaction, TransactionKind
from .store import LedgerStore


logger = logging.getLogger(__name__)


class TransferState(str, Enum):
    WITHDRAWING = "withdrawing"
    DEPOSITING = "depositing"
    COMPENSATING = "compensating"
    COMMITTED = "committed"
    FAILED = "failed"
    INCONSISTENT = "inconsistent"


@dataclass
class TransferSaga:
    """Progress of a single transfer through its withdraw/deposit steps."""

    from_account_id: str
    to_account_id: str
    amount: float
    id: str = field(default_factory=lambda: str(uuid4()))
    state: TransferState = TransferState.WITHDRAWING
    withdrawal: Optional[Transaction] = None
    deposit: Optional[Transaction] = None
    compensation: Optional[Transaction] = None

    def move_to(self, state: TransferState) -> None:
        logger.debug(
            "transfer.state",
            extra={"transfer_id": self.id, "from": self.state.value, "to": state.value},
        )
        self.state = state

    def log_extra(self) -> dict:
        return {
            "transfer_id": self.id,
            "from_account_id": self.from_account_id,
            "to_account_id": self.to_account_id,
            "amount": self.amount,
            "state": self.state.value,
        }


class TransferService:
    """Moves funds between two accounts as withdraw + deposit.

    The two legs are separate store calls, so the move is not atomic across
    accounts. When the deposit leg fails the withdrawal is compensated with a
    deposit back into the source; both records stay in the source's history.
    """

    def __init__(self, store: LedgerStore) -> None:
        self.store = store

    def _check_preconditions(
        self, from_account_id: str, to_account_id: str, amount: float
    ) -> None:
        if from_account_id == to_account_id:
            raise SameAccountError("Account IDs must be different")
        if not math.isfinite(amount) or amount <= 0:
            raise InvalidArgumentError("Amount cannot be 0 or negative")
        if not self.store.has_account(from_account_id):
            raise AccountNotFoundError(
                "Invalid 'from' account ID", account_id=from_account_id
            )
        if not self.store.has_account(to_account_id):
            raise AccountNotFoundError(
                "Invalid 'to' account ID", account_id=to_account_id
            )

    def transfer(
        self,
        from_account_id: str,
        to_account_id: str,
        amount: float,
    ) -> Tuple[Transaction, Transaction]:
        self._check_preconditions(from_account_id, to_account_id, amount)
        saga = TransferSaga(from_account_id, to_account_id, amount)

        try:
            saga.withdrawal = self.store.apply_transaction(
                from_account_id, amount, TransactionKind.WITHDRAWAL
            )
        except InsufficientFundsError as exc:
            saga.move_to(TransferState.FAILED)
            raise InsufficientFundsError(
                "Insufficient funds in 'from' account"
            ) from exc
        except Exception:
            saga.move_to(TransferState.FAILED)
            raise

        saga.move_to(TransferState.DEPOSITING)
        try:
            saga.deposit = self.store.apply_transaction(
                to_account_id, amount, TransactionKind.DEPOSIT
            )
        except Exception as deposit_exc:
            self._compensate(saga, deposit_exc)

        saga.move_to(TransferState.COMMITTED)
        logger.info("transfer.committed", extra=saga.log_extra())
        return saga.withdrawal, saga.deposit

    def _compensate(self, saga: TransferSaga, cause: Exception) -> None:
        saga.move_to(TransferState.COMPENSATING)
        logger.warning(
            "transfer.deposit_failed",
            extra={**saga.log_extra(), "error": str(cause)},
        )
        try:
            saga.compensation = self.store.apply_transaction(
                saga.from_account_id, saga.amount, TransactionKind.DEPOSIT
            )
        except Exception as compensation_exc:
            saga.move_to(TransferState.INCONSISTENT)
            logger.critical(
                "transfer.inconsistent",
                extra={**saga.log_extra(), "error": str(compensation_exc)},
                exc_info=compensation_exc,
            )
            raise CriticalInconsistencyError(
                "Critical error: failed to rollback withdrawal"
            ) from compensation_exc

        saga.move_to(TransferState.FAILED)
        logger.warning("transfer.compensated", extra=saga.log_extra())
        raise TransferFailedError("Failed to complete transfer") from cause
