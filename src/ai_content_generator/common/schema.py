"""Pydantic models for request/response types."""
from __future__ import annotations
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

MAX_BATCH_SIZE = 5


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp with milliseconds, e.g. 2026-01-01T00:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class GenerateIn(_CamelModel):
    content_type: str | None = Field(default=None, alias="contentType")
    topic: str | None = None
    tone: str | None = None
    custom_prompt: str | None = Field(default=None, alias="customPrompt")


class GenerateOut(_CamelModel):
    success: bool = True
    content: str
    content_type: str = Field(alias="contentType")
    topic: str
    tone: str
    length: int
    timestamp: str = Field(default_factory=utc_timestamp)


class BatchGenerateIn(BaseModel):
    # Items stay untyped so one bad entry is reported, not the whole batch.
    requests: list[Any] | None = None


class BatchItemOut(_CamelModel):
    success: bool
    content: str | None = None
    content_type: Any = Field(default=None, alias="contentType")
    topic: Any = None
    tone: str | None = None
    length: int | None = None
    timestamp: str | None = None
    error: str | None = None


class BatchGenerateOut(BaseModel):
    success: bool = True
    results: list[BatchItemOut]
    total: int
    successful: int
    failed: int
    timestamp: str = Field(default_factory=utc_timestamp)
