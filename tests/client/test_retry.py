from unittest.mock import patch

import httpx

from debtease.client.errors import (
    AuthenticationError,
    NetworkError,
    RateLimitError,
    ServerError,
    classify_error,
)
from debtease.client.retry import RetryPolicy
from debtease.config import settings
from debtease.engine.validation import ValidationError


class TestRetryPolicy:
    def test_exponential_backoff_capped(self):
        policy = RetryPolicy()
        assert [policy.delay_for(a) for a in range(5)] == [1.0, 2.0, 4.0, 5.0, 5.0]

    def test_override_cap(self):
        policy = RetryPolicy()
        assert policy.delay_for(3, max_delay=10.0) == 8.0
        assert policy.delay_for(4, max_delay=10.0) == 10.0

    def test_can_retry(self):
        policy = RetryPolicy(max_attempts=4)
        assert [policy.can_retry(a) for a in range(4)] == [True, True, True, False]

    def test_jitter(self):
        policy = RetryPolicy(jitter=0.5)
        with patch("debtease.client.retry.random.uniform", return_value=0.25) as uniform:
            assert policy.delay_for(1) == 2.25
        uniform.assert_called_once_with(0, 1.0)

    def test_from_settings(self):
        policy = RetryPolicy.from_settings()
        assert policy.max_attempts == settings.retry_max_attempts
        assert policy.base_delay == settings.retry_base_delay
        assert policy.max_delay == settings.retry_max_delay


class TestClassifyError:
    def test_network(self):
        c = classify_error(NetworkError("offline"))
        assert c.kind == "network"
        assert c.can_retry

    def test_raw_transport_error(self):
        assert classify_error(httpx.ConnectError("refused")).kind == "network"

    def test_auth(self):
        c = classify_error(AuthenticationError("expired", 401))
        assert c.kind == "auth"
        assert c.user_message == "Authentication issue. Please log in again."

    def test_validation_not_retryable(self):
        c = classify_error(ValidationError(["Payment amount must be greater than 0"]))
        assert c.kind == "validation"
        assert not c.can_retry
        assert c.user_message == "Payment amount must be greater than 0"

    def test_server(self):
        assert classify_error(ServerError("boom", 503)).kind == "server"
        assert classify_error(RateLimitError("slow down", 429)).kind == "server"

    def test_unknown(self):
        c = classify_error(RuntimeError("??"))
        assert c.kind == "unknown"
        assert c.can_retry
