"""Decide whether a transaction hash belongs to a Safe or to the ledger.

A Safe multisig transaction has no ledger footprint until enough owners have
signed and someone executes it, so a hash that the node cannot find may be a
pending Safe transaction or a regular transaction the node has not indexed
yet. The classifier asks the ledger once and then asks the Safe Transaction
Service with exponential backoff, falling back to a native verdict when the
service never recognises the hash.
"""

from __future__ import annotations

import asyncio
import logging

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
)

from .config import SafeWatcherSettings
from .exceptions import SafeApiError
from .ledger import LedgerClient
from .safe_client import SafeClient
from .schemas import LookupStatus, TransactionKind, normalize_tx_hash

logger = logging.getLogger(__name__)


def backoff_delay(attempt: int, base_ms: int = 1000, cap_ms: int = 5000) -> float:
    """Delay in seconds before retry number ``attempt`` (0-based)."""
    return min(base_ms * 2**attempt, cap_ms) / 1000


class TransactionClassifier:
    """Classifies transaction hashes as native or Safe transactions.

    Verdicts are never cached; every call queries both backends again.
    """

    def __init__(
        self,
        ledger: LedgerClient,
        safe: SafeClient,
        settings: SafeWatcherSettings | None = None,
    ):
        self.ledger = ledger
        self.safe = safe
        self.settings = settings or SafeWatcherSettings()

    async def classify(self, tx_hash: str) -> TransactionKind:
        """Classify a transaction hash.

        Args:
            tx_hash: Transaction hash supplied by the caller.

        Returns:
            TransactionKind.NATIVE if the ledger knows the hash or the Safe
            service never does, TransactionKind.SAFE otherwise.
        """
        tx_hash = normalize_tx_hash(tx_hash)

        lookup = await self.ledger.find_transaction(tx_hash)
        if lookup.found:
            logger.debug(f"{tx_hash} found on ledger, native transaction")
            return TransactionKind.NATIVE

        if lookup.status is LookupStatus.TRANSIENT_ERROR:
            # Routed like a miss; an RPC hiccup cannot be told apart from absence here
            logger.warning(f"Ledger lookup for {tx_hash} errored, checking Safe service: {lookup.error}")

        if await self._known_to_safe(tx_hash):
            logger.info(f"{tx_hash} is a Safe multisig transaction")
            return TransactionKind.SAFE

        logger.info(
            f"{tx_hash} unknown to Safe service after "
            f"{self.settings.classify_max_attempts} attempts, treating as native"
        )
        return TransactionKind.NATIVE

    async def is_safe_transaction(self, tx_hash: str) -> bool:
        return await self.classify(tx_hash) is TransactionKind.SAFE

    def _backoff_wait(self, retry_state: RetryCallState) -> float:
        return backoff_delay(
            retry_state.attempt_number - 1,
            self.settings.classify_backoff_base_ms,
            self.settings.classify_backoff_cap_ms,
        )

    async def _known_to_safe(self, tx_hash: str) -> bool:
        """Query the Safe service with bounded exponential backoff."""
        max_attempts = self.settings.classify_max_attempts
        retrying = AsyncRetrying(
            retry=retry_if_exception_type(SafeApiError),
            stop=stop_after_attempt(max_attempts),
            wait=self._backoff_wait,
            sleep=asyncio.sleep,
            before_sleep=lambda state: logger.debug(
                f"Safe lookup {state.attempt_number}/{max_attempts} for {tx_hash} "
                f"missed: {state.outcome.exception()}"
            ),
            reraise=True,
        )

        try:
            async for attempt in retrying:
                with attempt:
                    await self.safe.get_multisig_transaction(tx_hash)
        except SafeApiError as e:
            logger.debug(f"Safe lookups for {tx_hash} exhausted: {e}")
            return False
        return True
