"""Tests for transaction classification."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from safe_tx_watcher import (
    LedgerLookup,
    LookupStatus,
    SafeNetworkError,
    SafeNotFoundError,
    SafeTransactionServiceClient,
    TransactionClassifier,
    TransactionKind,
    backoff_delay,
)

NATIVE_HASH = "0x" + "aa" * 32
SAFE_HASH = "0x" + "bb" * 32
UNKNOWN_HASH = "0x" + "dd" * 32


class TestBackoffDelay:
    """Test exponential backoff schedule."""

    def test_doubles_from_base(self) -> None:
        assert backoff_delay(0) == 1.0
        assert backoff_delay(1) == 2.0
        assert backoff_delay(2) == 4.0

    def test_capped(self) -> None:
        assert backoff_delay(3) == 5.0
        assert backoff_delay(13) == 5.0

    def test_custom_base_and_cap(self) -> None:
        assert backoff_delay(0, base_ms=100, cap_ms=250) == 0.1
        assert backoff_delay(2, base_ms=100, cap_ms=250) == 0.25


class TestTransactionClassifier:
    """Test native/Safe classification."""

    @pytest.mark.asyncio
    async def test_found_on_ledger_is_native(self, ledger, safe, settings) -> None:
        """Test a ledger hit never consults the Safe service."""
        ledger.find_transaction.return_value = LedgerLookup(
            LookupStatus.FOUND, transaction={"hash": NATIVE_HASH}
        )
        classifier = TransactionClassifier(ledger, safe, settings)

        assert await classifier.classify(NATIVE_HASH) == TransactionKind.NATIVE
        assert await classifier.is_safe_transaction(NATIVE_HASH) is False
        safe.get_multisig_transaction.assert_not_called()

    @pytest.mark.asyncio
    async def test_known_to_safe_is_safe(self, ledger, safe, settings, make_safe_tx) -> None:
        """Test a ledger miss followed by a Safe hit."""
        safe.get_multisig_transaction.return_value = make_safe_tx()
        classifier = TransactionClassifier(ledger, safe, settings)

        assert await classifier.classify(SAFE_HASH) == TransactionKind.SAFE
        ledger.find_transaction.assert_called_once_with(SAFE_HASH)
        safe.get_multisig_transaction.assert_called_once_with(SAFE_HASH)

    @pytest.mark.asyncio
    async def test_safe_found_after_retries(self, ledger, safe, settings, make_safe_tx) -> None:
        """Test Safe lookups are retried with backoff until found."""
        safe.get_multisig_transaction.side_effect = [
            SafeNotFoundError("HTTP 404"),
            SafeNetworkError("Timeout"),
            make_safe_tx(),
        ]
        classifier = TransactionClassifier(ledger, safe, settings)

        with patch("safe_tx_watcher.classifier.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            kind = await classifier.classify(SAFE_HASH)

        assert kind == TransactionKind.SAFE
        assert safe.get_multisig_transaction.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_unknown_everywhere_falls_back_to_native(self, ledger, safe, settings) -> None:
        """Test 15 Safe misses resolve to a native verdict."""
        safe.get_multisig_transaction.side_effect = SafeNotFoundError("HTTP 404")
        classifier = TransactionClassifier(ledger, safe, settings)

        with patch("safe_tx_watcher.classifier.asyncio.sleep", new_callable=AsyncMock) as mock_sleep:
            kind = await classifier.classify(UNKNOWN_HASH)

        assert kind == TransactionKind.NATIVE
        assert safe.get_multisig_transaction.call_count == 15

        delays = [c.args[0] for c in mock_sleep.call_args_list]
        assert len(delays) == 14
        assert delays[:4] == [1.0, 2.0, 4.0, 5.0]
        assert all(d == 5.0 for d in delays[3:])
        assert delays == sorted(delays)

    @pytest.mark.asyncio
    async def test_unexpected_safe_errors_still_resolve(self, ledger, safe, settings) -> None:
        """Test any Safe API error counts as a miss rather than escaping."""
        settings.classify_max_attempts = 2
        safe.get_multisig_transaction.side_effect = [
            SafeNetworkError("Network error"),
            SafeNetworkError("Network error"),
        ]
        classifier = TransactionClassifier(ledger, safe, settings)

        with patch("safe_tx_watcher.classifier.asyncio.sleep", new_callable=AsyncMock):
            assert await classifier.classify(UNKNOWN_HASH) == TransactionKind.NATIVE

    @pytest.mark.asyncio
    async def test_ledger_error_routes_to_safe_lookup(
        self, ledger, safe, settings, make_safe_tx
    ) -> None:
        """Test an RPC failure on the ledger lookup is routed like a miss."""
        ledger.find_transaction.return_value = LedgerLookup(
            LookupStatus.TRANSIENT_ERROR, error=ConnectionError("node down")
        )
        safe.get_multisig_transaction.return_value = make_safe_tx()
        classifier = TransactionClassifier(ledger, safe, settings)

        assert await classifier.classify(SAFE_HASH) == TransactionKind.SAFE

    @pytest.mark.asyncio
    async def test_ledger_lookup_is_not_retried(self, ledger, safe, settings, make_safe_tx) -> None:
        """Test the ledger is asked exactly once per classification."""
        safe.get_multisig_transaction.return_value = make_safe_tx()
        classifier = TransactionClassifier(ledger, safe, settings)

        await classifier.classify(SAFE_HASH)

        ledger.find_transaction.assert_called_once()

    @pytest.mark.asyncio
    async def test_verdict_is_recomputed_each_call(
        self, ledger, safe, settings, make_safe_tx
    ) -> None:
        """Test repeated calls query again and agree on unchanged state."""
        safe.get_multisig_transaction.return_value = make_safe_tx()
        classifier = TransactionClassifier(ledger, safe, settings)

        first = await classifier.classify(SAFE_HASH)
        second = await classifier.classify(SAFE_HASH)

        assert first == second == TransactionKind.SAFE
        assert ledger.find_transaction.call_count == 2
        assert safe.get_multisig_transaction.call_count == 2

    @pytest.mark.asyncio
    async def test_normalizes_hash(self, ledger, safe, settings) -> None:
        """Test mixed-case input is normalized before lookups."""
        ledger.find_transaction.return_value = LedgerLookup(LookupStatus.FOUND)
        classifier = TransactionClassifier(ledger, safe, settings)

        await classifier.classify("0x" + "AA" * 32)

        ledger.find_transaction.assert_called_once_with(NATIVE_HASH)


MULTISIG_TX = {
    "safeTxHash": SAFE_HASH,
    "isExecuted": False,
    "confirmationsRequired": 2,
    "confirmations": [{"owner": "0x3333333333333333333333333333333333333333"}],
}


def _response(status: int, json=None, text=None) -> httpx.Response:
    return httpx.Response(status, json=json, text=text, request=httpx.Request("GET", "/"))


class TestClassifierWithServiceClient:
    """Test classification against the real Safe service client."""

    @pytest.mark.asyncio
    async def test_server_errors_use_exactly_the_attempt_budget(self, ledger, settings) -> None:
        """Test persistent 503s produce 15 requests and the capped backoff schedule."""
        async with SafeTransactionServiceClient("https://safe.test", settings) as client:
            with patch.object(
                client._client, "request", new_callable=AsyncMock
            ) as mock_request, patch(
                "safe_tx_watcher.classifier.asyncio.sleep", new_callable=AsyncMock
            ) as mock_sleep:
                mock_request.return_value = _response(503, {"detail": "unavailable"})

                kind = await TransactionClassifier(ledger, client, settings).classify(UNKNOWN_HASH)

        assert kind == TransactionKind.NATIVE
        assert mock_request.call_count == 15
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0, 4.0] + [5.0] * 11

    @pytest.mark.asyncio
    async def test_non_json_body_is_a_miss(self, ledger, settings) -> None:
        """Test an HTML maintenance page is retried and never escapes."""
        async with SafeTransactionServiceClient("https://safe.test", settings) as client:
            with patch.object(
                client._client, "request", new_callable=AsyncMock
            ) as mock_request, patch(
                "safe_tx_watcher.classifier.asyncio.sleep", new_callable=AsyncMock
            ):
                mock_request.return_value = _response(200, text="<html>maintenance</html>")

                kind = await TransactionClassifier(ledger, client, settings).classify(UNKNOWN_HASH)

        assert kind == TransactionKind.NATIVE
        assert mock_request.call_count == 15

    @pytest.mark.asyncio
    async def test_non_object_body_is_a_miss(self, ledger, settings) -> None:
        """Test a JSON list body counts as a miss."""
        settings.classify_max_attempts = 2

        async with SafeTransactionServiceClient("https://safe.test", settings) as client:
            with patch.object(
                client._client, "request", new_callable=AsyncMock
            ) as mock_request, patch(
                "safe_tx_watcher.classifier.asyncio.sleep", new_callable=AsyncMock
            ):
                mock_request.return_value = _response(200, [])

                kind = await TransactionClassifier(ledger, client, settings).classify(UNKNOWN_HASH)

        assert kind == TransactionKind.NATIVE

    @pytest.mark.asyncio
    async def test_not_found_then_found(self, ledger, settings) -> None:
        """Test 404s followed by a record classify as Safe."""
        async with SafeTransactionServiceClient("https://safe.test", settings) as client:
            with patch.object(
                client._client, "request", new_callable=AsyncMock
            ) as mock_request, patch(
                "safe_tx_watcher.classifier.asyncio.sleep", new_callable=AsyncMock
            ) as mock_sleep:
                mock_request.side_effect = [
                    _response(404, {"detail": "Not found."}),
                    _response(404, {"detail": "Not found."}),
                    _response(200, MULTISIG_TX),
                ]

                kind = await TransactionClassifier(ledger, client, settings).classify(SAFE_HASH)

        assert kind == TransactionKind.SAFE
        assert mock_request.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0]
