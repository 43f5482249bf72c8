"""Prompt catalog and templating helpers."""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent.parent / "configs" / "content_types.yaml"
DEFAULT_TONE = "professional"

TOPIC_TOKEN = "[TOPIC]"
TONE_TOKEN = "[TONE]"


@dataclass(frozen=True)
class ContentType:
    """A named prompt skeleton with an optional output length budget."""
    id: str
    name: str
    prompt: str
    max_length: int | None = None


@dataclass(frozen=True)
class Catalog:
    """Read-only lookup tables for content types and tones."""
    content_types: Mapping[str, ContentType]
    tones: Mapping[str, str]

    def describe_tone(self, tone: str) -> str:
        """Return the tone description, or the tone itself when unknown."""
        return self.tones.get(tone, tone)


def load_cfg(path: str | Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_catalog(path: str | Path | None = None) -> Catalog:
    """
    Load the content type and tone catalog from YAML.

    Args:
        path: Catalog file; defaults to the one shipped with the package.

    Raises:
        ValueError: If a content type lacks a prompt or has a bad max_length.
    """
    cfg = load_cfg(path or DEFAULT_CATALOG_PATH)

    types: dict[str, ContentType] = {}
    for key, raw in (cfg.get("content_types") or {}).items():
        prompt = raw.get("prompt")
        if not prompt:
            raise ValueError(f"Content type {key!r} has no prompt")
        max_length = raw.get("max_length")
        if max_length is not None:
            max_length = int(max_length)
            if max_length <= 0:
                raise ValueError(f"Content type {key!r} has non-positive max_length")
        types[str(key)] = ContentType(
            id=str(key),
            name=str(raw.get("name", key)),
            prompt=str(prompt),
            max_length=max_length,
        )

    tones = {str(k): str(v) for k, v in (cfg.get("tones") or {}).items()}
    return Catalog(content_types=MappingProxyType(types), tones=MappingProxyType(tones))


def render_prompt(template: str, topic: str, tone: str) -> str:
    """
    Render topic and tone into the template.

    Args:
        template: Template content containing [TOPIC] and [TONE].
        topic: Subject of the content.
        tone: Tone description.

    Returns:
        Rendered prompt.
    """
    # Tone first so a topic containing "[TONE]" is left as the caller wrote it.
    return template.replace(TONE_TOKEN, tone).replace(TOPIC_TOKEN, topic)
