"""Safe Transaction Service endpoints per chain."""

from __future__ import annotations

from .exceptions import UnsupportedChainError

SAFE_TX_SERVICE_URLS: dict[int, str] = {
    1: "https://safe-transaction-mainnet.safe.global",
    10: "https://safe-transaction-optimism.safe.global",
    56: "https://safe-transaction-bsc.safe.global",
    100: "https://safe-transaction-gnosis-chain.safe.global",
    137: "https://safe-transaction-polygon.safe.global",
    324: "https://safe-transaction-zksync.safe.global",
    1101: "https://safe-transaction-zkevm.safe.global",
    5000: "https://safe-transaction-mantle.safe.global",
    8453: "https://safe-transaction-base.safe.global",
    42161: "https://safe-transaction-arbitrum.safe.global",
    42220: "https://safe-transaction-celo.safe.global",
    43114: "https://safe-transaction-avalanche.safe.global",
    59144: "https://safe-transaction-linea.safe.global",
    81457: "https://safe-transaction-blast.safe.global",
    84532: "https://safe-transaction-base-sepolia.safe.global",
    534352: "https://safe-transaction-scroll.safe.global",
    11155111: "https://safe-transaction-sepolia.safe.global",
}


def get_safe_service_url(chain_id: int, override: str | None = None) -> str:
    """Resolve the Safe Transaction Service base URL for a chain.

    Args:
        chain_id: EIP-155 chain id reported by the ledger node.
        override: Explicit URL that takes precedence over the built-in table.

    Returns:
        Base URL without trailing slash.

    Raises:
        UnsupportedChainError: If the chain is unknown and no override is given.
    """
    if override:
        return override.strip().rstrip("/")
    try:
        return SAFE_TX_SERVICE_URLS[chain_id]
    except KeyError:
        raise UnsupportedChainError(
            f"No Safe Transaction Service known for chain {chain_id}",
            "set SAFE_WATCHER_SAFE_TX_SERVICE_URL",
        ) from None
