from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .domain import Account, Transaction


class AccountCreate(BaseModel):
    owner: str = Field(default="", description="Display name of the account holder")
    initial_balance: float = Field(
        ..., allow_inf_nan=False, description="Opening balance, must be >= 0"
    )


class AccountResponse(BaseModel):
    id: str
    owner: str
    balance: float

    @classmethod
    def from_account(cls, account: Account) -> "AccountResponse":
        return cls(id=account.id, owner=account.owner, balance=account.balance)


class TransactionCreate(BaseModel):
    type: str = Field(default="", description="Either 'deposit' or 'withdrawal'")
    amount: float = Field(..., allow_inf_nan=False, description="Strictly positive amount")


class TransactionResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    account_id: str = Field(..., alias="accountId")
    type: Literal["deposit", "withdrawal"]
    amount: float
    timestamp: datetime

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "TransactionResponse":
        return cls(
            id=transaction.id,
            account_id=transaction.account_id,
            type=transaction.kind.value,
            amount=transaction.amount,
            timestamp=transaction.timestamp,
        )


class TransferRequest(BaseModel):
    from_account_id: str = ""
    to_account_id: str = ""
    amount: float = Field(..., allow_inf_nan=False)
