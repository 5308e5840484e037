from .store import LedgerStore
from .transfer import TransferSaga, TransferService, TransferState

__all__ = ["LedgerStore", "TransferSaga", "TransferService", "TransferState"]
