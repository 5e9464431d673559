"""Error taxonomy for the resolution and generation pipeline.

Every error is scoped to a single request. The API layer maps each class to
an HTTP status so callers can tell bad input (400) from rate limiting (429)
and transient upstream trouble (502). Paid-tier degradation is not an error
and is reported through the generation result instead.
"""


class PipelineError(Exception):
    """Base class for request-scoped pipeline errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class ValidationFailure(PipelineError):
    """Malformed input, rejected before any pipeline work."""

    status_code = 400

    def __init__(self, message: str, details: list | None = None):
        super().__init__(message)
        self.details = details or []

    def to_dict(self) -> dict:
        payload = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class AdmissionDenied(PipelineError):
    """Caller exhausted its rate limit budget for the current window."""

    status_code = 429

    def __init__(self, key: str, retry_after: float):
        super().__init__("Too many requests")
        self.key = key
        self.retry_after = retry_after

    def to_dict(self) -> dict:
        return {"error": self.message, "retry_after": int(self.retry_after + 0.999)}


class UpstreamExhausted(PipelineError):
    """Every metadata source failed to produce a usable result."""

    status_code = 502

    def __init__(self, video_id: str, attempts: list[dict] | None = None):
        super().__init__(f"All video info extraction methods failed for {video_id}")
        self.video_id = video_id
        self.attempts = attempts or []

    def to_dict(self) -> dict:
        return {
            "error": "failed to fetch video info",
            "detail": self.message,
            "attempts": self.attempts,
            "suggestion": "Please check if the video URL is valid and publicly accessible",
        }


class MetadataSourceError(Exception):
    """A single metadata source could not produce a payload."""

    def __init__(self, source: str, message: str):
        super().__init__(f"[{source}] {message}")
        self.source = source


class AIServiceError(Exception):
    """The paid AI tier failed or returned nothing usable."""
