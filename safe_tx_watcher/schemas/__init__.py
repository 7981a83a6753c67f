"""Safe transaction watcher schemas."""

from .common import LedgerLookup, normalize_tx_hash
from .enums import LookupStatus, TransactionKind, WaitStage
from .transactions import SafeConfirmation, SafeMultisigTransaction

__all__ = [
    # Enums
    "TransactionKind",
    "LookupStatus",
    "WaitStage",
    # Common
    "LedgerLookup",
    "normalize_tx_hash",
    # Safe
    "SafeConfirmation",
    "SafeMultisigTransaction",
]
