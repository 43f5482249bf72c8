"""One-shot content generation from the command line.

Goes through the same validation, retry and finishing as the HTTP service.
"""
from __future__ import annotations
import argparse
import asyncio
import logging
import os
import sys
import time

from ai_content_generator.client.gemini import DEFAULT_BASE_URL, DEFAULT_MODEL, GeminiClient
from ai_content_generator.common.errors import ContentGeneratorError
from ai_content_generator.common.logging_setup import setup_logging
from ai_content_generator.common.pipeline import generate_content
from ai_content_generator.common.schema import GenerateIn, GenerateOut
from ai_content_generator.common.templates import DEFAULT_TONE, load_catalog

LOGGER = logging.getLogger("contentgen.cli")

def run_generate(
    content_type: str,
    topic: str,
    tone: str = DEFAULT_TONE,
    custom_prompt: str | None = None,
    catalog_path: str | None = None,
    client: GeminiClient | None = None,
) -> GenerateOut:
    """
    Generate a single piece of content.

    Args:
        content_type: Catalog id, e.g. "tweet".
        topic: Subject of the content.
        tone: Tone id or free-form description.
        custom_prompt: Optional prompt replacing the template.
    """
    catalog = load_catalog(catalog_path)
    client = client or GeminiClient(
        api_key=os.getenv("API_KEY"),
        model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
        base_url=os.getenv("GEMINI_BASE_URL", DEFAULT_BASE_URL),
    )
    body = GenerateIn(content_type=content_type, topic=topic, tone=tone, custom_prompt=custom_prompt)
    return asyncio.run(generate_content(client, catalog, body))

def main(argv: list[str] | None = None) -> int:
    setup_logging(os.getenv("LOG_LEVEL", "INFO"))
    ap = argparse.ArgumentParser(description="Generate social/marketing content with Gemini")
    ap.add_argument("--type", required=True, dest="content_type", help="Content type id, e.g. tweet")
    ap.add_argument("--topic", required=True, help="Topic to write about")
    ap.add_argument("--tone", default=DEFAULT_TONE, help="Tone id or description")
    ap.add_argument("--prompt", default=None, help="Custom prompt with [TOPIC]/[TONE] placeholders")
    ap.add_argument("--catalog", default=None, help="Alternate content types YAML")
    args = ap.parse_args(argv)

    start = time.time()
    try:
        out = run_generate(args.content_type, args.topic, args.tone, args.prompt, args.catalog)
    except ContentGeneratorError as e:
        LOGGER.error("Generation failed: %s", e.message)
        return 1
    latency_ms = int((time.time() - start) * 1000)
    LOGGER.info("Latency: %sms | length=%s", latency_ms, out.length)
    print(out.content)
    return 0

if __name__ == "__main__":
    sys.exit(main())
