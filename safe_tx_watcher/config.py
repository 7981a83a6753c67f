"""Configuration settings for the Safe transaction watcher."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SafeWatcherSettings(BaseSettings):
    """Watcher configuration.

    All settings can be configured via environment variables with SAFE_WATCHER_ prefix.
    """

    model_config = SettingsConfigDict(
        env_prefix="SAFE_WATCHER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Ethereum
    eth_rpc_url: str = Field(
        default="https://ethereum-sepolia-rpc.publicnode.com",
        description="JSON-RPC endpoint of the ledger node",
    )
    receipt_timeout_seconds: float = Field(
        default=180.0,
        description="Maximum time to wait for a transaction receipt",
    )
    receipt_poll_latency_seconds: float = Field(
        default=1.0,
        description="Interval between receipt polls",
    )
    confirmation_blocks: int = Field(
        default=1,
        ge=1,
        description="Blocks that must include the receipt before it counts as confirmed",
    )

    # Safe Transaction Service
    safe_tx_service_url: str | None = Field(
        default=None,
        description="Override for the Safe Transaction Service URL (derived from chain id if unset)",
    )
    safe_api_key: str | None = Field(
        default=None,
        description="Bearer API key for the Safe Transaction Service",
    )
    timeout_seconds: float = Field(
        default=30.0,
        description="HTTP request timeout in seconds",
    )

    # Classification
    classify_max_attempts: int = Field(
        default=15,
        ge=1,
        description="Total Safe lookups before falling back to a native verdict",
    )
    classify_backoff_base_ms: int = Field(
        default=1000,
        description="Base delay of the classification backoff",
    )
    classify_backoff_cap_ms: int = Field(
        default=5000,
        description="Upper bound of the classification backoff",
    )

    # Confirmation waiting
    safe_poll_interval_ms: int = Field(
        default=5000,
        description="Fixed interval between Safe execution polls",
    )
    wait_timeout_seconds: float | None = Field(
        default=None,
        description="Deadline for a whole confirmation wait (None waits forever)",
    )
