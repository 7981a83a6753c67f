"""Common schemas for the Safe transaction watcher."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from ..exceptions import InvalidTransactionHashError
from .enums import LookupStatus

_TX_HASH_RE = re.compile(r"^0x[0-9a-f]{64}$")


def normalize_tx_hash(value: str | bytes) -> str:
    """Normalize a transaction hash to lowercase 0x-prefixed hex.

    Args:
        value: Hex string (with or without 0x) or 32 raw bytes.

    Returns:
        Normalized hash string.

    Raises:
        InvalidTransactionHashError: If the value is not a 32-byte hash.
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) != 32:
            raise InvalidTransactionHashError(
                "Transaction hash must be 32 bytes", len(value)
            )
        return "0x" + bytes(value).hex()

    if not isinstance(value, str):
        raise InvalidTransactionHashError("Unsupported transaction hash type", type(value).__name__)

    candidate = value.strip().lower()
    if not candidate.startswith("0x"):
        candidate = "0x" + candidate
    if not _TX_HASH_RE.match(candidate):
        raise InvalidTransactionHashError("Invalid transaction hash", value)
    return candidate


@dataclass(frozen=True)
class LedgerLookup:
    """Result of looking a transaction up on the ledger."""

    status: LookupStatus
    transaction: Any = None
    error: BaseException | None = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND
