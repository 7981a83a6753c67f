"""Ethereum ledger access: transaction lookup and receipt waiting."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

from web3 import AsyncWeb3
from web3.exceptions import TimeExhausted, TransactionNotFound

from .config import SafeWatcherSettings
from .exceptions import ReceiptWaitError
from .schemas import LedgerLookup, LookupStatus, normalize_tx_hash

logger = logging.getLogger(__name__)


class LedgerClient(Protocol):
    """Capability needed from the ledger node."""

    async def find_transaction(self, tx_hash: str) -> LedgerLookup: ...

    async def wait_for_receipt(self, tx_hash: str) -> Any: ...

    async def get_chain_id(self) -> int: ...


class EthereumLedgerClient:
    """Ledger client backed by an async web3 HTTP provider."""

    def __init__(
        self,
        settings: SafeWatcherSettings | None = None,
        web3: AsyncWeb3 | None = None,
    ):
        self.settings = settings or SafeWatcherSettings()
        self._web3 = web3

    @property
    def web3(self) -> AsyncWeb3:
        """Get AsyncWeb3 instance (lazy loaded)."""
        if self._web3 is None:
            self._web3 = AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(self.settings.eth_rpc_url))
        return self._web3

    async def get_chain_id(self) -> int:
        """Get chain ID of the connected node."""
        return await self.web3.eth.chain_id

    async def find_transaction(self, tx_hash: str) -> LedgerLookup:
        """Look a transaction up on the ledger.

        Never raises: a missing transaction and an RPC failure are both
        reported through the lookup status.
        """
        tx_hash = normalize_tx_hash(tx_hash)
        try:
            tx = await self.web3.eth.get_transaction(tx_hash)
        except TransactionNotFound:
            return LedgerLookup(LookupStatus.NOT_FOUND)
        except Exception as e:
            logger.warning(f"Ledger lookup failed for {tx_hash}: {e}")
            return LedgerLookup(LookupStatus.TRANSIENT_ERROR, error=e)

        if tx is None:
            return LedgerLookup(LookupStatus.NOT_FOUND)
        return LedgerLookup(LookupStatus.FOUND, transaction=tx)

    async def wait_for_receipt(self, tx_hash: str) -> Any:
        """
        Wait until the transaction is mined and buried under
        ``confirmation_blocks`` blocks.
        Returns the receipt; raises ReceiptWaitError on timeout or RPC failure.
        """
        tx_hash = normalize_tx_hash(tx_hash)
        try:
            receipt = await self.web3.eth.wait_for_transaction_receipt(
                tx_hash,
                timeout=self.settings.receipt_timeout_seconds,
                poll_latency=self.settings.receipt_poll_latency_seconds,
            )
        except TimeExhausted as e:
            raise ReceiptWaitError(
                f"Receipt not available after {self.settings.receipt_timeout_seconds}s",
                tx_hash,
                str(e),
            ) from e
        except Exception as e:
            logger.error(f"Receipt wait failed for {tx_hash}: {e}")
            raise ReceiptWaitError("Receipt wait failed", tx_hash, str(e)) from e

        if receipt.get("status") == 0:
            logger.warning(f"Transaction {tx_hash} reverted on-chain")

        if self.settings.confirmation_blocks > 1:
            await self._wait_for_depth(tx_hash, receipt.get("blockNumber"))

        return receipt

    async def _wait_for_depth(self, tx_hash: str, tx_block: int | None) -> None:
        """Block until the receipt's block has enough confirmations."""
        if tx_block is None:
            return

        required = self.settings.confirmation_blocks
        while True:
            try:
                current_block = await self.web3.eth.block_number
            except Exception as e:
                raise ReceiptWaitError("Failed to read block number", tx_hash, str(e)) from e

            confirmations = current_block - tx_block + 1
            if confirmations >= required:
                logger.debug(f"Transaction {tx_hash} has {confirmations}/{required} confirmations")
                return

            await asyncio.sleep(self.settings.receipt_poll_latency_seconds)
