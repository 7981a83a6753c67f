"""Wait for a native or Safe transaction to be confirmed on the ledger."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from .classifier import TransactionClassifier
from .config import SafeWatcherSettings
from .exceptions import ConfirmationTimeoutError, SafeApiError
from .ledger import LedgerClient
from .safe_client import SafeClient
from .schemas import (
    SafeMultisigTransaction,
    TransactionKind,
    WaitStage,
    normalize_tx_hash,
)

logger = logging.getLogger(__name__)


@dataclass
class _WaitProgress:
    """Per-call progress, read back when a deadline expires."""

    tx_hash: str
    stage: WaitStage = WaitStage.CLASSIFYING

    def advance(self, stage: WaitStage) -> None:
        logger.debug(f"{self.tx_hash}: {self.stage.value} -> {stage.value}")
        self.stage = stage


class ConfirmationWaiter:
    """
    Resolves a transaction hash to a ledger-confirmed hash.

    Native transactions are awaited directly. Safe transactions are first
    polled on the Safe Transaction Service until all owners have signed and
    the transaction was executed, then the execution hash is awaited on the
    ledger.
    """

    def __init__(
        self,
        ledger: LedgerClient,
        safe: SafeClient,
        classifier: TransactionClassifier | None = None,
        settings: SafeWatcherSettings | None = None,
    ):
        self.ledger = ledger
        self.safe = safe
        self.settings = settings or SafeWatcherSettings()
        self.classifier = classifier or TransactionClassifier(ledger, safe, self.settings)

    async def wait_for_confirmation(
        self, tx_hash: str, timeout: float | None = None
    ) -> str:
        """Wait until ``tx_hash`` is confirmed and return the confirmed hash.

        Args:
            tx_hash: Native transaction hash or Safe transaction hash.
            timeout: Deadline in seconds for the whole wait. Defaults to
                ``settings.wait_timeout_seconds``; None waits indefinitely.

        Returns:
            ``tx_hash`` for native transactions, the execution hash for Safe
            transactions.

        Raises:
            ReceiptWaitError: If the ledger receipt wait fails.
            SafeApiError: If the Safe service rejects the request permanently.
            ConfirmationTimeoutError: If the deadline expires.
        """
        tx_hash = normalize_tx_hash(tx_hash)
        if timeout is None:
            timeout = self.settings.wait_timeout_seconds

        progress = _WaitProgress(tx_hash)
        if timeout is None:
            return await self._wait(progress)

        try:
            return await asyncio.wait_for(self._wait(progress), timeout)
        except asyncio.TimeoutError:
            raise ConfirmationTimeoutError(
                f"Transaction {tx_hash} not confirmed within {timeout}s",
                progress.stage.value,
            ) from None

    async def _wait(self, progress: _WaitProgress) -> str:
        tx_hash = progress.tx_hash
        kind = await self.classifier.classify(tx_hash)

        if kind is TransactionKind.SAFE:
            progress.advance(WaitStage.SAFE_POLLING)
            safe_tx = await self.poll_until_executed(tx_hash)
            progress.advance(WaitStage.SAFE_EXECUTED)
            tx_hash = normalize_tx_hash(safe_tx.execution_hash)
            logger.info(f"Safe transaction {progress.tx_hash} executed as {tx_hash}")

        progress.advance(WaitStage.NATIVE_WAIT)
        await self.ledger.wait_for_receipt(tx_hash)
        progress.advance(WaitStage.CONFIRMED)
        logger.info(f"Transaction {tx_hash} confirmed")
        return tx_hash

    async def poll_until_executed(self, safe_tx_hash: str) -> SafeMultisigTransaction:
        """Poll the Safe service until the transaction has been executed.

        There is no attempt limit; bound the wait with a deadline instead.
        Missing records and retriable service errors are polled again after
        ``safe_poll_interval_ms``.

        Raises:
            SafeApiError: For non-retriable errors (auth, validation).
        """
        safe_tx_hash = normalize_tx_hash(safe_tx_hash)
        interval = self.settings.safe_poll_interval_ms / 1000
        polls = 0

        while True:
            polls += 1
            try:
                safe_tx = await self.safe.get_multisig_transaction(safe_tx_hash)
            except SafeApiError as e:
                if not e.retriable:
                    logger.error(f"Safe service rejected {safe_tx_hash}: {e}")
                    raise
                logger.warning(f"Safe poll {polls} for {safe_tx_hash} failed: {e}")
            else:
                if safe_tx.execution_hash:
                    return safe_tx
                if safe_tx.is_executed:
                    logger.warning(f"Safe transaction {safe_tx_hash} executed without hash yet")
                else:
                    logger.debug(
                        f"Safe transaction {safe_tx_hash} pending "
                        f"({safe_tx.confirmations_collected}/{safe_tx.confirmations_required} signatures)"
                    )

            await asyncio.sleep(interval)
