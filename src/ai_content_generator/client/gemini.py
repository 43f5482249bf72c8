"""Async client for the Gemini generateContent API.

Only HTTP 429 is retried, through ``RetryPolicy``. Every other failure is
raised on the first attempt.
"""
from __future__ import annotations
import logging
from typing import Any

import httpx

from ai_content_generator.client.retry import RetryPolicy
from ai_content_generator.common.errors import (
    MalformedUpstreamResponse,
    RateLimited,
    UpstreamError,
)

LOGGER = logging.getLogger("contentgen.client")

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_MAX_TOKENS = 2048
MIN_TOKENS = 64

RATE_LIMITED_STATUS = 429


def token_budget(max_length: int | None, default: int = DEFAULT_MAX_TOKENS) -> int:
    """Output token budget for a character limit; ``default`` when unlimited."""
    if max_length is None:
        return default
    return max(MIN_TOKENS, max_length // 2)


def extract_text(data: Any) -> str:
    """
    Pull generated text out of a generateContent response body.

    Raises:
        MalformedUpstreamResponse: If candidates/content/parts/text is missing.
    """
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise MalformedUpstreamResponse() from e
    if not isinstance(text, str):
        raise MalformedUpstreamResponse()
    return text


class GeminiClient:
    """Generate text from a rendered prompt."""

    def __init__(
        self,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        temperature: float = 0.9,
        default_max_tokens: int = DEFAULT_MAX_TOKENS,
        retry: RetryPolicy | None = None,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.default_max_tokens = default_max_tokens
        self.retry = retry or RetryPolicy()
        self.timeout = timeout
        self.transport = transport

    @property
    def url(self) -> str:
        return f"{self.base_url}/v1beta/models/{self.model}:generateContent"

    def build_payload(self, prompt: str, max_length: int | None = None) -> dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.temperature,
                "maxOutputTokens": token_budget(max_length, self.default_max_tokens),
            },
        }

    async def generate(self, prompt: str, max_length: int | None = None) -> str:
        """
        Generate text for a prompt.

        Args:
            prompt: Fully rendered prompt.
            max_length: Optional character limit used to size the token budget.

        Returns:
            The generated text, untrimmed.

        Raises:
            RateLimited: Upstream answered 429 on every attempt.
            UpstreamError: Any other failure status or a transport error.
            MalformedUpstreamResponse: Success without usable text.
        """
        payload = self.build_payload(prompt, max_length)
        params = {"key": self.api_key or ""}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:

            async def attempt() -> httpx.Response:
                try:
                    return await client.post(self.url, params=params, json=payload)
                except httpx.HTTPError as e:
                    LOGGER.error("Gemini request failed: %s", type(e).__name__)
                    raise UpstreamError() from e

            r, attempts = await self.retry.run(
                attempt, lambda resp: resp.status_code == RATE_LIMITED_STATUS
            )

        if r.status_code == RATE_LIMITED_STATUS:
            LOGGER.warning("Rate limited after %s attempts", attempts)
            raise RateLimited(attempts=attempts)

        if not r.is_success:
            LOGGER.error("AI error: %s", r.status_code)
            LOGGER.error("Error details: %s", r.text)
            raise UpstreamError(upstream_status=r.status_code)

        try:
            data = r.json()
        except ValueError as e:
            LOGGER.error("Malformed response: %s", e)
            raise MalformedUpstreamResponse() from e

        text = extract_text(data)
        if attempts > 1:
            LOGGER.info("Generated after %s attempts", attempts)
        return text
