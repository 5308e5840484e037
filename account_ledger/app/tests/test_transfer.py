import logging

import pytest

from ..core.errors import (
    AccountNotFoundError,
    CriticalInconsistencyError,
    InsufficientFundsError,
    InvalidArgumentError,
    SameAccountError,
    TransferFailedError,
)
from ..models import TransactionKind
from ..services import LedgerStore, TransferService


class FlakyStore(LedgerStore):
    """Store whose deposits fail for the listed accounts."""

    def __init__(self) -> None:
        super().__init__()
        self.failing_deposits: set[str] = set()

    def apply_transaction(self, account_id, amount, kind):
        if kind == TransactionKind.DEPOSIT and account_id in self.failing_deposits:
            raise RuntimeError(f"deposit into {account_id} failed")
        return super().apply_transaction(account_id, amount, kind)


@pytest.fixture
def store() -> FlakyStore:
    return FlakyStore()

@pytest.fixture
def service(store: FlakyStore) -> TransferService:
    return TransferService(store)


def test_transfer_moves_funds(store: FlakyStore, service: TransferService) -> None:
    source = store.create_account("A", 100)
    dest = store.create_account("B", 50)

    withdrawal, deposit = service.transfer(source.id, dest.id, 50)

    assert withdrawal.kind is TransactionKind.WITHDRAWAL
    assert withdrawal.account_id == source.id
    assert withdrawal.amount == 50
    assert deposit.kind is TransactionKind.DEPOSIT
    assert deposit.account_id == dest.id
    assert deposit.amount == 50
    assert store.get_account(source.id).balance == 50
    assert store.get_account(dest.id).balance == 100
    assert store.list_transactions(source.id) == [withdrawal]
    assert store.list_transactions(dest.id) == [deposit]

def test_same_account_checked_first(service: TransferService) -> None:
    with pytest.raises(SameAccountError):
        service.transfer("missing", "missing", -1)

@pytest.mark.parametrize("amount", [0, -3, float("nan"), float("inf")])
def test_amount_checked_before_existence(service: TransferService, amount: float) -> None:
    with pytest.raises(InvalidArgumentError):
        service.transfer("a", "b", amount)

def test_unknown_source_checked_before_destination(service: TransferService) -> None:
    with pytest.raises(AccountNotFoundError) as excinfo:
        service.transfer("from-missing", "to-missing", 1)
    assert excinfo.value.account_id == "from-missing"

def test_unknown_destination(store: FlakyStore, service: TransferService) -> None:
    source = store.create_account("A", 10)

    with pytest.raises(AccountNotFoundError) as excinfo:
        service.transfer(source.id, "to-missing", 1)
    assert excinfo.value.account_id == "to-missing"
    assert store.get_account(source.id).balance == 10

def test_insufficient_funds_changes_nothing(
    store: FlakyStore, service: TransferService
) -> None:
    source = store.create_account("A", 10)
    dest = store.create_account("B", 0)

    with pytest.raises(InsufficientFundsError) as excinfo:
        service.transfer(source.id, dest.id, 10.5)
    assert str(excinfo.value) == "Insufficient funds in 'from' account"

    assert store.get_account(source.id).balance == 10
    assert store.list_transactions(source.id) == []
    assert store.list_transactions(dest.id) == []

def test_failed_deposit_is_compensated(store: FlakyStore, service: TransferService) -> None:
    source = store.create_account("A", 100)
    dest = store.create_account("B", 0)
    store.failing_deposits.add(dest.id)

    with pytest.raises(TransferFailedError):
        service.transfer(source.id, dest.id, 30)

    assert store.get_account(source.id).balance == 100
    assert store.get_account(dest.id).balance == 0
    history = store.list_transactions(source.id)
    assert [(t.kind, t.amount) for t in history] == [
        (TransactionKind.WITHDRAWAL, 30),
        (TransactionKind.DEPOSIT, 30),
    ]
    assert store.list_transactions(dest.id) == []

def test_failed_compensation_is_critical(
    store: FlakyStore, service: TransferService, caplog: pytest.LogCaptureFixture
) -> None:
    source = store.create_account("A", 100)
    dest = store.create_account("B", 0)
    store.failing_deposits.update({source.id, dest.id})

    with caplog.at_level(logging.CRITICAL):
        with pytest.raises(CriticalInconsistencyError):
            service.transfer(source.id, dest.id, 30)

    assert store.get_account(source.id).balance == 70
    assert any(record.message == "transfer.inconsistent" for record in caplog.records)

def test_balances_never_negative_after_mixed_operations(
    store: FlakyStore, service: TransferService
) -> None:
    a = store.create_account("A", 20)
    b = store.create_account("B", 5)

    for source, dest, amount in [(a, b, 15), (b, a, 25), (a, b, 40), (b, a, 1)]:
        try:
            service.transfer(source.id, dest.id, amount)
        except InsufficientFundsError:
            pass

    assert store.get_account(a.id).balance >= 0
    assert store.get_account(b.id).balance >= 0
    assert store.get_account(a.id).balance + store.get_account(b.id).balance == 25
