from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Dict, List
from uuid import uuid4

from ..core.errors import (
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidArgumentError,
)
from ..models import Account, Transaction, TransactionKind


logger = logging.getLogger(__name__)


@dataclass
class _AccountRecord:
    id: str
    owner: str
    balance: float

    def snapshot(self) -> Account:
        return Account(id=self.id, owner=self.owner, balance=self.balance)


class LedgerStore:
    """In-memory account table plus append-only transaction log.

    The account table and the log are guarded by separate locks. Anything that
    needs both takes the account lock first, then the log lock.
    """

    def __init__(self) -> None:
        self._accounts: Dict[str, _AccountRecord] = {}
        self._log: Dict[str, List[Transaction]] = {}
        self._accounts_lock = threading.Lock()
        self._log_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------
    def create_account(self, owner: str, initial_balance: float) -> Account:
        if not math.isfinite(initial_balance) or initial_balance < 0:
            raise InvalidArgumentError("Initial balance cannot be less than 0")
        if owner == "":
            raise InvalidArgumentError("Owner cannot be empty")

        record = _AccountRecord(
            id=str(uuid4()),
            owner=owner,
            balance=float(initial_balance),
        )
        with self._accounts_lock:
            self._accounts[record.id] = record
            account = record.snapshot()

        logger.info(
            "account.created",
            extra={"account_id": account.id, "owner": account.owner},
        )
        return account

    def get_account(self, account_id: str) -> Account:
        with self._accounts_lock:
            record = self._accounts.get(account_id)
            if record is None:
                raise AccountNotFoundError(
                    f"Account {account_id} not found", account_id=account_id
                )
            return record.snapshot()

    def has_account(self, account_id: str) -> bool:
        with self._accounts_lock:
            return account_id in self._accounts

    def list_accounts(self) -> List[Account]:
        with self._accounts_lock:
            return [record.snapshot() for record in self._accounts.values()]

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------
    def list_transactions(self, account_id: str) -> List[Transaction]:
        # Existence is checked by the caller; unknown ids just have no entries.
        with self._log_lock:
            return list(self._log.get(account_id, ()))

    def apply_transaction(
        self,
        account_id: str,
        amount: float,
        kind: TransactionKind | str,
    ) -> Transaction:
        """Mutate one balance and append the matching log record atomically.

        Both locks are held for the whole call, so no reader can observe the
        balance change without the record or the other way round.
        """
        with self._accounts_lock, self._log_lock:
            record = self._accounts.get(account_id)
            if record is None:
                raise AccountNotFoundError(
                    f"Account {account_id} not found", account_id=account_id
                )
            if not math.isfinite(amount) or amount <= 0:
                raise InvalidArgumentError("Amount cannot be 0 or negative")
            kind = TransactionKind.parse(kind)

            if kind is TransactionKind.WITHDRAWAL and amount > record.balance:
                logger.info(
                    "transaction.rejected",
                    extra={
                        "account_id": account_id,
                        "amount": amount,
                        "balance": record.balance,
                    },
                )
                raise InsufficientFundsError("Insufficient funds")

            transaction = Transaction(
                id=str(uuid4()),
                account_id=account_id,
                kind=kind,
                amount=float(amount),
                timestamp=datetime.now(UTC),
            )
            if kind is TransactionKind.DEPOSIT:
                record.balance += transaction.amount
            else:
                record.balance -= transaction.amount
            self._log.setdefault(account_id, []).append(transaction)
            balance = record.balance

        logger.info(
            "transaction.applied",
            extra={
                "account_id": account_id,
                "transaction_id": transaction.id,
                "type": transaction.kind.value,
                "amount": transaction.amount,
                "balance": balance,
            },
        )
        return transaction
