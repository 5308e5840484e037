from functools import lru_cache

from fastapi import Depends, Request
from pydantic import ValidationError

from ..models import Account, TransactionCreate
from ..services import LedgerStore, TransferService
from .errors import InvalidArgumentError


@lru_cache()
def get_ledger_store() -> LedgerStore:
    return LedgerStore()


def get_transfer_service(
    store: LedgerStore = Depends(get_ledger_store),
) -> TransferService:
    return TransferService(store)


def get_existing_account(
    account_id: str,
    store: LedgerStore = Depends(get_ledger_store),
) -> Account:
    return store.get_account(account_id)


async def read_transaction_payload(
    request: Request,
    account: Account = Depends(get_existing_account),
) -> TransactionCreate:
    # Depends on the account so an unknown id is reported before a bad body.
    try:
        return TransactionCreate.model_validate_json(await request.body())
    except ValidationError as exc:
        raise InvalidArgumentError("Invalid JSON") from exc
