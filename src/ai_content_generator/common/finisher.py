"""Sentence-safe finishing of generated text.

Length-limited formats (tweets, captions) must not end mid-sentence. The
finisher runs two passes: a length-bounded cut on the last terminal mark
inside the budget, then a completeness cut on the last terminal mark anywhere.

Text without any terminal mark (or with one only at index 0) passes through
unchanged, so it can still exceed ``max_length``.
"""
from __future__ import annotations

TERMINAL_MARKS = (".", "!", "?")


def _last_terminal(text: str) -> int:
    return max(text.rfind(mark) for mark in TERMINAL_MARKS)


def _cut_at_last_terminal(text: str, window: str) -> str:
    pos = _last_terminal(window)
    if pos > 0:
        return text[: pos + 1]
    return text


def finish_content(text: str, max_length: int) -> str:
    """
    Trim text to end on a complete sentence within a length budget.

    Args:
        text: Raw generated text.
        max_length: Maximum number of characters.

    Returns:
        Cleaned text.
    """
    content = text.strip()
    if len(content) <= max_length and content.endswith(TERMINAL_MARKS):
        return content

    if len(content) > max_length:
        content = _cut_at_last_terminal(content, content[:max_length])

    if not content.endswith(TERMINAL_MARKS):
        content = _cut_at_last_terminal(content, content)

    return content
