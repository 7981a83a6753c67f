"""Safe transaction watcher - classify and confirm native or Safe multisig transactions."""

from .chains import SAFE_TX_SERVICE_URLS, get_safe_service_url
from .classifier import TransactionClassifier, backoff_delay
from .config import SafeWatcherSettings
from .exceptions import (
    ConfirmationTimeoutError,
    InvalidTransactionHashError,
    ReceiptWaitError,
    SafeApiError,
    SafeAuthError,
    SafeNetworkError,
    SafeNotFoundError,
    SafeRateLimitError,
    SafeServerError,
    SafeValidationError,
    SafeWatcherError,
    UnsupportedChainError,
)
from .helpers import is_safe_wallet_transaction, wait_for_transaction_confirmation_receipt
from .ledger import EthereumLedgerClient, LedgerClient
from .safe_client import SafeClient, SafeTransactionServiceClient
from .schemas import (
    LedgerLookup,
    LookupStatus,
    SafeConfirmation,
    SafeMultisigTransaction,
    TransactionKind,
    WaitStage,
    normalize_tx_hash,
)
from .waiter import ConfirmationWaiter

__version__ = "0.1.0"

__all__ = [
    # Main classes
    "TransactionClassifier",
    "ConfirmationWaiter",
    "EthereumLedgerClient",
    "SafeTransactionServiceClient",
    "SafeWatcherSettings",
    # Protocols
    "LedgerClient",
    "SafeClient",
    # Exceptions
    "SafeWatcherError",
    "InvalidTransactionHashError",
    "UnsupportedChainError",
    "SafeApiError",
    "SafeAuthError",
    "SafeValidationError",
    "SafeNotFoundError",
    "SafeRateLimitError",
    "SafeServerError",
    "SafeNetworkError",
    "ReceiptWaitError",
    "ConfirmationTimeoutError",
    # Helpers
    "is_safe_wallet_transaction",
    "wait_for_transaction_confirmation_receipt",
    "backoff_delay",
    "get_safe_service_url",
    "SAFE_TX_SERVICE_URLS",
    # Schemas
    "TransactionKind",
    "LookupStatus",
    "WaitStage",
    "LedgerLookup",
    "normalize_tx_hash",
    "SafeConfirmation",
    "SafeMultisigTransaction",
]
