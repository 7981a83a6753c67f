"""Pytest configuration and fixtures."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from safe_tx_watcher import LedgerLookup, LookupStatus, SafeMultisigTransaction
from safe_tx_watcher.config import SafeWatcherSettings


@pytest.fixture
def settings() -> SafeWatcherSettings:
    """Create test settings."""
    return SafeWatcherSettings(
        eth_rpc_url="http://localhost:8545",
        safe_tx_service_url="https://safe.test.example",
    )


@pytest.fixture
def ledger() -> MagicMock:
    """Ledger client that knows no transactions and confirms everything."""
    client = MagicMock()
    client.find_transaction = AsyncMock(
        return_value=LedgerLookup(LookupStatus.NOT_FOUND)
    )
    client.wait_for_receipt = AsyncMock(return_value={"status": 1, "blockNumber": 100})
    client.get_chain_id = AsyncMock(return_value=11155111)
    return client


@pytest.fixture
def safe() -> MagicMock:
    """Safe client; tests set get_multisig_transaction behaviour."""
    client = MagicMock()
    client.get_multisig_transaction = AsyncMock()
    return client


@pytest.fixture
def make_safe_tx():
    """Factory for Safe multisig transaction records."""

    def _make(
        safe_tx_hash: str = "0x" + "bb" * 32,
        executed: bool = False,
        transaction_hash: str | None = None,
        confirmations: int = 1,
    ) -> SafeMultisigTransaction:
        return SafeMultisigTransaction(
            safe_tx_hash=safe_tx_hash,
            safe="0x" + "11" * 20,
            nonce=7,
            is_executed=executed,
            transaction_hash=transaction_hash,
            confirmations_required=2,
            confirmations=[{"owner": "0x" + f"{i:040x}"} for i in range(confirmations)],
        )

    return _make
