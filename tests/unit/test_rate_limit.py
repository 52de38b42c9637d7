"""Tests for rate limiting utilities."""

from __future__ import annotations

import time
from unittest.mock import patch

import pytest
from kubernetes.client.exceptions import ApiException

from artemis_operator.utils.rate_limit import handle_rate_limit_error, rate_limit_k8s


class TestRateLimitK8s:
    """Test cases for Kubernetes API rate limiting."""

    def test_rate_limit_k8s_decorator(self):
        """Test that k8s rate limiting decorator works."""
        call_count = 0

        @rate_limit_k8s
        def test_func():
            nonlocal call_count
            call_count += 1
            return "success"

        result = test_func()
        assert result == "success"
        assert call_count == 1

    def test_rate_limit_k8s_with_args(self):
        """Test rate limiting with function arguments."""
        @rate_limit_k8s
        def test_func(a, b, c=None):
            return f"{a}-{b}-{c}"

        result = test_func("x", "y", c="z")
        assert result == "x-y-z"

    @patch("artemis_operator.utils.rate_limit._K8S_RATE_LIMIT_PER_SECOND", 100.0)
    def test_rate_limit_k8s_enforces_rate(self):
        """Test that rate limiting enforces minimum interval."""
        call_times = []

        @rate_limit_k8s
        def test_func():
            call_times.append(time.time())
            return "ok"

        for _ in range(3):
            test_func()

        # With 100 calls/sec, minimum interval is 0.01 seconds
        assert len(call_times) == 3
        assert call_times[1] - call_times[0] >= 0.009
        assert call_times[2] - call_times[1] >= 0.009

    @patch("artemis_operator.utils.rate_limit.time.sleep")
    def test_retries_rate_limited_call(self, mock_sleep):
        """Test that a 429 is retried with backoff."""
        attempts = []

        @rate_limit_k8s
        def test_func():
            attempts.append(1)
            if len(attempts) < 3:
                raise ApiException(status=429)
            return "ok"

        assert test_func() == "ok"
        assert len(attempts) == 3
        mock_sleep.assert_any_call(1)
        mock_sleep.assert_any_call(2)

    @patch("artemis_operator.utils.rate_limit.time.sleep")
    def test_gives_up_after_max_retries(self, mock_sleep):
        attempts = []

        @rate_limit_k8s
        def test_func():
            attempts.append(1)
            raise ApiException(status=429)

        with pytest.raises(ApiException):
            test_func()
        assert len(attempts) == 4

    def test_other_errors_propagate(self):
        """Test that non rate limit errors are not retried."""
        attempts = []

        @rate_limit_k8s
        def test_func():
            attempts.append(1)
            raise ApiException(status=404)

        with pytest.raises(ApiException):
            test_func()
        assert len(attempts) == 1


class TestHandleRateLimitError:
    """Test cases for handle_rate_limit_error function."""

    @patch("artemis_operator.utils.rate_limit.time.sleep")
    def test_429(self, mock_sleep):
        assert handle_rate_limit_error(ApiException(status=429)) is True
        mock_sleep.assert_called_once_with(1)

    @patch("artemis_operator.utils.rate_limit.time.sleep")
    def test_backoff_grows(self, mock_sleep):
        assert handle_rate_limit_error(ApiException(status=429), attempt=2) is True
        mock_sleep.assert_called_once_with(4)

    @patch("artemis_operator.utils.rate_limit.time.sleep")
    def test_503_rate_limit(self, mock_sleep):
        error = ApiException(status=503, reason="Rate limit exceeded")
        assert handle_rate_limit_error(error) is True

    @patch("artemis_operator.utils.rate_limit.time.sleep")
    def test_503_other(self, mock_sleep):
        error = ApiException(status=503, reason="Service Unavailable")
        assert handle_rate_limit_error(error) is False
        mock_sleep.assert_not_called()

    @patch("artemis_operator.utils.rate_limit.time.sleep")
    def test_max_retries(self, mock_sleep):
        assert handle_rate_limit_error(ApiException(status=429), attempt=3) is False
        mock_sleep.assert_not_called()
