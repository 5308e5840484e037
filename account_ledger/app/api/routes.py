from fastapi import APIRouter, Depends, status

from ..core.dependencies import (
    get_existing_account,
    get_ledger_store,
    get_transfer_service,
    read_transaction_payload,
)
from ..models import (
    Account,
    AccountCreate,
    AccountResponse,
    TransactionCreate,
    TransactionResponse,
    TransferRequest,
)
from ..services import LedgerStore, TransferService


router = APIRouter(prefix="/accounts", tags=["accounts"])

@router.post("", response_model=AccountResponse, status_code=status.HTTP_201_CREATED)
def create_account(
    payload: AccountCreate,
    store: LedgerStore = Depends(get_ledger_store),
) -> AccountResponse:
    account = store.create_account(payload.owner, payload.initial_balance)
    return AccountResponse.from_account(account)

@router.get("", response_model=list[AccountResponse])
def list_accounts(
    store: LedgerStore = Depends(get_ledger_store),
) -> list[AccountResponse]:
    return [AccountResponse.from_account(account) for account in store.list_accounts()]

@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: str,
    store: LedgerStore = Depends(get_ledger_store),
) -> AccountResponse:
    return AccountResponse.from_account(store.get_account(account_id))

@router.get("/{account_id}/transactions", response_model=list[TransactionResponse])
def list_transactions(
    account: Account = Depends(get_existing_account),
    store: LedgerStore = Depends(get_ledger_store),
) -> list[TransactionResponse]:
    return [
        TransactionResponse.from_transaction(transaction)
        for transaction in store.list_transactions(account.id)
    ]

@router.post(
    "/{account_id}/transactions",
    response_model=TransactionResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_transaction(
    account: Account = Depends(get_existing_account),
    payload: TransactionCreate = Depends(read_transaction_payload),
    store: LedgerStore = Depends(get_ledger_store),
) -> TransactionResponse:
    transaction = store.apply_transaction(account.id, payload.amount, payload.type)
    return TransactionResponse.from_transaction(transaction)

transfer_router = APIRouter(prefix="/transfer", tags=["transfers"])

@transfer_router.post(
    "",
    response_model=list[TransactionResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_transfer(
    payload: TransferRequest,
    service: TransferService = Depends(get_transfer_service),
) -> list[TransactionResponse]:
    withdrawal, deposit = service.transfer(
        payload.from_account_id, payload.to_account_id, payload.amount
    )
    return [
        TransactionResponse.from_transaction(withdrawal),
        TransactionResponse.from_transaction(deposit),
    ]

__all__ = ["router", "transfer_router"]
