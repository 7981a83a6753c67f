"""Safe Transaction Service API client."""

from __future__ import annotations

from typing import Any, Protocol

import httpx
from pydantic import ValidationError

from .chains import get_safe_service_url
from .config import SafeWatcherSettings
from .exceptions import (
    SafeApiError,
    SafeAuthError,
    SafeNetworkError,
    SafeNotFoundError,
    SafeRateLimitError,
    SafeServerError,
    SafeValidationError,
)
from .schemas import SafeMultisigTransaction, normalize_tx_hash


class SafeClient(Protocol):
    """Capability needed from the multisig backend."""

    async def get_multisig_transaction(
        self, safe_tx_hash: str
    ) -> SafeMultisigTransaction: ...


class SafeTransactionServiceClient:
    """Async client for the Safe Transaction Service.

    Usage:
        async with SafeTransactionServiceClient(base_url, settings) as client:
            tx = await client.get_multisig_transaction(safe_tx_hash)
    """

    def __init__(self, base_url: str, settings: SafeWatcherSettings | None = None):
        """Initialize client.

        Args:
            base_url: Service base URL for one chain.
            settings: Watcher settings. If not provided, loads from environment.
        """
        self.base_url = base_url.rstrip("/")
        self.settings = settings or SafeWatcherSettings()
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def for_chain(
        cls, chain_id: int, settings: SafeWatcherSettings | None = None
    ) -> "SafeTransactionServiceClient":
        """Build a client scoped to the service of ``chain_id``."""
        settings = settings or SafeWatcherSettings()
        return cls(get_safe_service_url(chain_id, settings.safe_tx_service_url), settings)

    async def __aenter__(self) -> "SafeTransactionServiceClient":
        """Enter async context."""
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.settings.timeout_seconds),
            headers=self._default_headers(),
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Get HTTP client, ensuring it's initialized."""
        if self._client is None:
            raise RuntimeError(
                "Client not initialized. Use 'async with SafeTransactionServiceClient(...) as client:'"
            )
        return self._client

    def _default_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.settings.safe_api_key:
            headers["Authorization"] = f"Bearer {self.settings.safe_api_key}"
        return headers

    def _handle_error(self, response: httpx.Response) -> None:
        """Raise appropriate exception for error response.

        Args:
            response: HTTP response to check.

        Raises:
            SafeAuthError: For 401/403 responses.
            SafeNotFoundError: For 404 responses.
            SafeValidationError: For 400/422 responses.
            SafeRateLimitError: For 429 responses.
            SafeServerError: For 5xx responses.
            SafeApiError: For other error responses.
        """
        if response.is_success:
            return

        try:
            details = response.json()
        except ValueError:
            details = response.text

        status = response.status_code
        message = f"HTTP {status}"

        if status in (401, 403):
            raise SafeAuthError(message, details)
        elif status == 404:
            raise SafeNotFoundError(message, details)
        elif status in (400, 422):
            raise SafeValidationError(message, details)
        elif status == 429:
            raise SafeRateLimitError(message, details)
        elif status >= 500:
            raise SafeServerError(message, details)
        else:
            raise SafeApiError(message, details)

    async def _request(self, method: str, path: str) -> Any:
        """Make a single request to the service.

        Retrying is left to the caller, which owns the backoff policy.

        Args:
            method: HTTP method.
            path: API path.

        Returns:
            Response JSON data.

        Raises:
            SafeApiError: For error responses and bodies that are not JSON.
        """
        try:
            response = await self.client.request(method=method, url=path)
        except httpx.TimeoutException as e:
            raise SafeNetworkError(f"Timeout: {e}")
        except httpx.TransportError as e:
            raise SafeNetworkError(f"Network error: {e}")

        self._handle_error(response)
        try:
            return response.json()
        except ValueError as e:
            raise SafeApiError("Malformed response", response.text) from e

    async def get_multisig_transaction(
        self, safe_tx_hash: str
    ) -> SafeMultisigTransaction:
        """Get a multisig transaction by its Safe transaction hash.

        Args:
            safe_tx_hash: Safe internal transaction hash.

        Returns:
            Multisig transaction with execution status.
        """
        safe_tx_hash = normalize_tx_hash(safe_tx_hash)
        data = await self._request(
            "GET", f"/api/v1/multisig-transactions/{safe_tx_hash}/"
        )
        try:
            return SafeMultisigTransaction.model_validate(data)
        except ValidationError as e:
            raise SafeApiError("Malformed multisig transaction", str(e)) from e
