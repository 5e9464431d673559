"""Per-caller admission control for pipeline routes."""

import logging

from fastapi import Request

from utils.errors import AdmissionDenied
from utils.rate_limit import ANONYMOUS_KEY, Admission, RateLimiter

logger = logging.getLogger(__name__)


class RequestGate:
    """Derives a caller key from a request and consults the rate limiter."""

    def __init__(self, limiter: RateLimiter):
        self.limiter = limiter

    @staticmethod
    def caller_key(request: Request) -> str:
        """Identify the caller by its originating address.

        Proxy headers win over the socket peer: first address of
        ``X-Forwarded-For``, then ``X-Real-IP``, then the client host.
        """
        forwarded = request.headers.get("x-forwarded-for", "")
        first = forwarded.split(",")[0].strip()
        if first:
            return first

        real_ip = request.headers.get("x-real-ip", "").strip()
        if real_ip:
            return real_ip

        if request.client and request.client.host:
            return request.client.host
        return ANONYMOUS_KEY

    def check(self, key: str) -> Admission:
        """Admit one request for ``key``.

        Raises:
            AdmissionDenied: If the caller's budget for the window is spent
        """
        admission = self.limiter.admit(key)
        if not admission.allowed:
            raise AdmissionDenied(key, admission.retry_after)
        return admission
