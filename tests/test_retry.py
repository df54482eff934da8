"""
Tests for the retry layer of the transport pipeline.
"""

import httpx
import pytest

from adapters.transport.retry import RetryTransport, is_retryable_status, retry_after_seconds


class _Sequence:
    """Answers with the queued outcomes in order (responses or exceptions)."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = 0
        self.bodies = []

    def __call__(self, request):
        self.calls += 1
        self.bodies.append(request.content)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _transport(seq, max_retries=3, **kwargs):
    waits = []
    transport = RetryTransport(
        httpx.MockTransport(seq),
        max_retries=max_retries,
        sleep=waits.append,
        **kwargs,
    )
    return transport, waits


class TestRetryPolicy:
    def test_retryable_statuses(self):
        assert is_retryable_status(429)
        assert is_retryable_status(500)
        assert is_retryable_status(503)
        assert not is_retryable_status(501)
        assert not is_retryable_status(404)
        assert not is_retryable_status(200)

    def test_retry_after_only_on_429_and_503(self):
        assert retry_after_seconds(httpx.Response(429, headers={"Retry-After": "2"})) == 2.0
        assert retry_after_seconds(httpx.Response(503, headers={"Retry-After": "0.5"})) == 0.5
        assert retry_after_seconds(httpx.Response(500, headers={"Retry-After": "2"})) is None
        assert retry_after_seconds(httpx.Response(429, headers={"Retry-After": "Wed, 21 Oct 2015"})) is None

    def test_backoff_is_exponential_and_capped(self):
        transport = RetryTransport(httpx.MockTransport(lambda r: httpx.Response(200)), wait_min=1, wait_max=5, jitter=0)

        assert transport.backoff(0) == 1
        assert transport.backoff(1) == 2
        assert transport.backoff(2) == 4
        assert transport.backoff(3) == 5

    def test_negative_retries_rejected(self):
        with pytest.raises(ValueError):
            RetryTransport(httpx.MockTransport(lambda r: httpx.Response(200)), max_retries=-1)


class TestRetryTransport:
    def test_retries_server_errors_until_success(self):
        seq = _Sequence(httpx.Response(502), httpx.Response(503), httpx.Response(200, json={"ok": True}))
        transport, waits = _transport(seq, jitter=0)

        with httpx.Client(transport=transport) as client:
            response = client.post("http://medusa.test/admin/regions", json={"name": "Europe"})

        assert response.status_code == 200
        assert seq.calls == 3
        assert waits == [1.0, 2.0]

    def test_body_is_resent_on_every_attempt(self):
        seq = _Sequence(httpx.Response(500), httpx.Response(200))
        transport, _ = _transport(seq)

        with httpx.Client(transport=transport) as client:
            client.post("http://medusa.test/admin/regions", json={"name": "Europe"})

        assert seq.bodies[0] == seq.bodies[1] != b""

    def test_exhausted_returns_last_response(self):
        """After the last retry the caller sees the real status, not a synthetic error."""
        seq = _Sequence(*(httpx.Response(500, text=f"boom {i}") for i in range(3)))
        transport, waits = _transport(seq, max_retries=2)

        with httpx.Client(transport=transport) as client:
            response = client.get("http://medusa.test/admin/regions/reg_1")

        assert response.status_code == 500
        assert response.text == "boom 2"
        assert len(waits) == 2

    def test_client_errors_are_not_retried(self):
        seq = _Sequence(httpx.Response(404))
        transport, waits = _transport(seq)

        with httpx.Client(transport=transport) as client:
            assert client.get("http://medusa.test/admin/regions/x").status_code == 404

        assert seq.calls == 1
        assert waits == []

    def test_network_errors_are_retried(self):
        seq = _Sequence(httpx.ConnectError("refused"), httpx.ReadTimeout("slow"), httpx.Response(200))
        transport, waits = _transport(seq)

        with httpx.Client(transport=transport) as client:
            assert client.get("http://medusa.test/admin/store").status_code == 200

        assert seq.calls == 3
        assert len(waits) == 2

    def test_last_network_error_is_raised(self):
        seq = _Sequence(httpx.ConnectError("refused"), httpx.ConnectError("still refused"))
        transport, _ = _transport(seq, max_retries=1)

        with httpx.Client(transport=transport) as client:
            with pytest.raises(httpx.ConnectError, match="still refused"):
                client.get("http://medusa.test/admin/store")

    def test_retry_after_header_wins(self):
        seq = _Sequence(httpx.Response(429, headers={"Retry-After": "3"}), httpx.Response(200))
        transport, waits = _transport(seq, jitter=0)

        with httpx.Client(transport=transport) as client:
            client.get("http://medusa.test/admin/store")

        assert waits == [3.0]

    def test_zero_retries_is_a_single_attempt(self):
        seq = _Sequence(httpx.Response(503))
        transport, waits = _transport(seq, max_retries=0)

        with httpx.Client(transport=transport) as client:
            assert client.get("http://medusa.test/admin/store").status_code == 503

        assert waits == []
