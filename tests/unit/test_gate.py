"""Unit tests for caller identification and admission."""

from unittest.mock import MagicMock

import pytest

from api.gate import RequestGate
from utils.errors import AdmissionDenied
from utils.rate_limit import ANONYMOUS_KEY, RateLimiter


def _request(headers=None, host="127.0.0.1"):
    request = MagicMock()
    request.headers = headers or {}
    request.client = MagicMock(host=host) if host else None
    return request


class TestCallerKey:
    """Tests for RequestGate.caller_key."""

    def test_forwarded_for_first_address(self):
        request = _request({"x-forwarded-for": "203.0.113.9, 10.0.0.2", "x-real-ip": "10.0.0.3"})
        assert RequestGate.caller_key(request) == "203.0.113.9"

    def test_real_ip(self):
        assert RequestGate.caller_key(_request({"x-real-ip": " 10.0.0.3 "})) == "10.0.0.3"

    def test_client_host(self):
        assert RequestGate.caller_key(_request()) == "127.0.0.1"

    def test_anonymous(self):
        assert RequestGate.caller_key(_request(host=None)) == ANONYMOUS_KEY


class TestCheck:
    """Tests for RequestGate.check."""

    def test_denied_raises_with_retry_after(self, clock):
        gate = RequestGate(RateLimiter(points=1, duration=60, clock=clock))

        assert gate.check("1.2.3.4").remaining == 0
        clock.advance(15)
        with pytest.raises(AdmissionDenied) as exc_info:
            gate.check("1.2.3.4")

        assert exc_info.value.status_code == 429
        assert exc_info.value.retry_after == 45
        assert exc_info.value.to_dict()["retry_after"] == 45
