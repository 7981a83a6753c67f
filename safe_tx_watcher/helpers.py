"""One-shot helpers wiring the real ledger and Safe clients."""

from __future__ import annotations

import logging

from .classifier import TransactionClassifier
from .config import SafeWatcherSettings
from .ledger import EthereumLedgerClient
from .safe_client import SafeTransactionServiceClient
from .waiter import ConfirmationWaiter

logger = logging.getLogger(__name__)


async def _safe_client_for(
    ledger: EthereumLedgerClient, settings: SafeWatcherSettings
) -> SafeTransactionServiceClient:
    chain_id = await ledger.get_chain_id()
    logger.debug(f"Scoping Safe service client to chain {chain_id}")
    return SafeTransactionServiceClient.for_chain(chain_id, settings)


async def is_safe_wallet_transaction(
    tx_hash: str,
    settings: SafeWatcherSettings | None = None,
    ledger: EthereumLedgerClient | None = None,
) -> bool:
    """Check whether a hash belongs to a Safe multisig transaction.

    Args:
        tx_hash: Transaction hash to check.
        settings: Watcher settings. If not provided, loads from environment.
        ledger: Ledger client to reuse. Built from settings if not provided.

    Returns:
        True for a Safe transaction, False for a regular ledger transaction.
    """
    settings = settings or SafeWatcherSettings()
    ledger = ledger or EthereumLedgerClient(settings)

    async with await _safe_client_for(ledger, settings) as safe:
        classifier = TransactionClassifier(ledger, safe, settings)
        return await classifier.is_safe_transaction(tx_hash)


async def wait_for_transaction_confirmation_receipt(
    tx_hash: str,
    settings: SafeWatcherSettings | None = None,
    ledger: EthereumLedgerClient | None = None,
    timeout: float | None = None,
) -> str:
    """Wait for a native or Safe transaction to be confirmed on the ledger.

    Args:
        tx_hash: Transaction hash or Safe transaction hash.
        settings: Watcher settings. If not provided, loads from environment.
        ledger: Ledger client to reuse. Built from settings if not provided.
        timeout: Deadline in seconds for the whole wait.

    Returns:
        The ledger-confirmed transaction hash.
    """
    settings = settings or SafeWatcherSettings()
    ledger = ledger or EthereumLedgerClient(settings)

    async with await _safe_client_for(ledger, settings) as safe:
        waiter = ConfirmationWaiter(ledger, safe, settings=settings)
        return await waiter.wait_for_confirmation(tx_hash, timeout=timeout)
