"""Enumerations for the Safe transaction watcher."""

from enum import Enum


class TransactionKind(str, Enum):
    """Classification verdict for a transaction hash."""

    NATIVE = "native"
    SAFE = "safe"


class LookupStatus(str, Enum):
    """Outcome of an on-ledger transaction lookup."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    TRANSIENT_ERROR = "transient_error"


class WaitStage(str, Enum):
    """Progress of a single confirmation wait."""

    CLASSIFYING = "classifying"
    NATIVE_WAIT = "native_wait"
    SAFE_POLLING = "safe_polling"
    SAFE_EXECUTED = "safe_executed"
    CONFIRMED = "confirmed"
