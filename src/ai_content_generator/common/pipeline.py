"""Request → prompt → generation → finished content."""
from __future__ import annotations
import logging
from typing import Any

import pydantic

from ai_content_generator.client.gemini import GeminiClient
from ai_content_generator.common.errors import (
    ConfigurationError,
    ContentGeneratorError,
    ValidationError,
)
from ai_content_generator.common.finisher import finish_content
from ai_content_generator.common.schema import (
    MAX_BATCH_SIZE,
    BatchGenerateOut,
    BatchItemOut,
    GenerateIn,
    GenerateOut,
)
from ai_content_generator.common.templates import DEFAULT_TONE, Catalog, render_prompt

LOGGER = logging.getLogger("contentgen.pipeline")


def ensure_configured(client: GeminiClient) -> None:
    if not client.api_key:
        raise ConfigurationError("API key not configured")


def resolve_tone(body: GenerateIn) -> str:
    """Tone for a request; the default applies only when tone is absent."""
    return DEFAULT_TONE if body.tone is None else body.tone


def build_prompt(catalog: Catalog, body: GenerateIn) -> tuple[str, int | None]:
    """
    Validate a request and render its prompt.

    Returns:
        The prompt and the content type's max length (None when unlimited).
    """
    if not body.topic or not body.topic.strip():
        raise ValidationError("Topic is required")

    content_type = catalog.content_types.get(body.content_type or "")
    if content_type is None:
        raise ValidationError("Invalid content type")

    template = content_type.prompt
    if body.custom_prompt and body.custom_prompt.strip():
        template = body.custom_prompt

    prompt = render_prompt(template, body.topic, catalog.describe_tone(resolve_tone(body)))
    return prompt, content_type.max_length


async def generate_content(client: GeminiClient, catalog: Catalog, body: GenerateIn) -> GenerateOut:
    """
    Generate content for one request.

    Raises:
        ConfigurationError: API key missing.
        ValidationError: Topic missing or content type unknown.
        RateLimited, UpstreamError: Propagated from the client.
    """
    ensure_configured(client)
    prompt, max_length = build_prompt(catalog, body)

    LOGGER.info("Generating: %s for: %s", body.content_type, body.topic)
    content = (await client.generate(prompt, max_length=max_length)).strip()
    if max_length is not None:
        raw_length = len(content)
        content = finish_content(content, max_length)
        if len(content) != raw_length:
            LOGGER.info("Finished content: %s -> %s characters", raw_length, len(content))

    LOGGER.info("Generated successfully: %s characters", len(content))
    return GenerateOut(
        content=content,
        content_type=body.content_type,
        topic=body.topic,
        tone=resolve_tone(body),
        length=len(content),
    )


def _failed_item(raw: Any, message: str) -> BatchItemOut:
    fields = raw if isinstance(raw, dict) else {}
    return BatchItemOut(
        success=False,
        error=message,
        content_type=fields.get("contentType"),
        topic=fields.get("topic"),
    )


async def generate_batch(client: GeminiClient, catalog: Catalog, requests: list[Any] | None) -> BatchGenerateOut:
    """
    Generate content for up to ``MAX_BATCH_SIZE`` requests, one at a time.

    A failing entry is reported in its own result and does not stop the rest.
    """
    ensure_configured(client)
    if not requests:
        raise ValidationError("Requests array is required")
    if len(requests) > MAX_BATCH_SIZE:
        raise ValidationError(f"Maximum {MAX_BATCH_SIZE} requests per batch")

    results: list[BatchItemOut] = []
    for index, raw in enumerate(requests):
        try:
            body = GenerateIn.model_validate(raw)
        except pydantic.ValidationError:
            results.append(_failed_item(raw, "Invalid request"))
            continue
        try:
            out = await generate_content(client, catalog, body)
        except ContentGeneratorError as e:
            LOGGER.warning("Batch item %s failed: %s", index, e.message)
            results.append(_failed_item(raw, e.message))
            continue
        except Exception as e:
            LOGGER.exception("Batch item %s failed unexpectedly", index)
            results.append(_failed_item(raw, f"Server error: {e}"))
            continue
        results.append(BatchItemOut(**out.model_dump()))

    successful = sum(1 for item in results if item.success)
    return BatchGenerateOut(
        results=results,
        total=len(results),
        successful=successful,
        failed=len(results) - successful,
    )
