"""Error hierarchy for content generation.

Every error carries the HTTP status the service answers with; the FastAPI
exception handler renders it as ``{"error": message}``.
"""
from __future__ import annotations


class ContentGeneratorError(Exception):
    """Base class for classified generation failures."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(ContentGeneratorError):
    """Missing or invalid request input."""

    status_code = 400


class ConfigurationError(ContentGeneratorError):
    """Service is missing required configuration, e.g. the API key."""

    status_code = 500


class RateLimited(ContentGeneratorError):
    """Upstream kept answering 429 after every allowed attempt."""

    status_code = 429

    def __init__(
        self,
        message: str = "Too many requests. Please wait 30 seconds and try again.",
        attempts: int = 0,
    ) -> None:
        super().__init__(message)
        self.attempts = attempts


class UpstreamError(ContentGeneratorError):
    """Upstream failed with a non-retryable status or transport error."""

    status_code = 500

    def __init__(self, message: str = "AI generation failed", upstream_status: int | None = None) -> None:
        super().__init__(message)
        self.upstream_status = upstream_status


class MalformedUpstreamResponse(UpstreamError):
    """Upstream succeeded but the body had no usable text."""

    def __init__(self, message: str = "No content generated") -> None:
        super().__init__(message)
