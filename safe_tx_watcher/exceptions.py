"""Custom exceptions for the Safe transaction watcher."""

from __future__ import annotations

from typing import Any


class SafeWatcherError(Exception):
    """Base exception for watcher errors."""

    def __init__(self, message: str, details: Any = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class InvalidTransactionHashError(SafeWatcherError, ValueError):
    """Value is not a 32-byte hex transaction hash."""

    pass


class UnsupportedChainError(SafeWatcherError):
    """No Safe Transaction Service is known for the chain."""

    pass


class SafeApiError(SafeWatcherError):
    """Base exception for Safe Transaction Service errors."""

    retriable = True


class SafeAuthError(SafeApiError):
    """Authentication/authorization error (401/403)."""

    retriable = False


class SafeValidationError(SafeApiError):
    """Request validation error (400/422)."""

    retriable = False


class SafeNotFoundError(SafeApiError):
    """Transaction unknown to the service (404)."""

    pass


class SafeRateLimitError(SafeApiError):
    """Rate limit exceeded error (429)."""

    pass


class SafeServerError(SafeApiError):
    """Server-side error (5xx)."""

    pass


class SafeNetworkError(SafeApiError):
    """Network connectivity error."""

    pass


class ReceiptWaitError(SafeWatcherError):
    """The ledger receipt wait failed or timed out."""

    def __init__(self, message: str, tx_hash: str, details: Any = None):
        super().__init__(message, details)
        self.tx_hash = tx_hash


class ConfirmationTimeoutError(SafeWatcherError):
    """The caller's deadline expired before the transaction was confirmed."""

    def __init__(self, message: str, stage: str, details: Any = None):
        super().__init__(message, details)
        self.stage = stage
