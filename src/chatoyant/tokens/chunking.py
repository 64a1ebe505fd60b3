"""Split long text and message histories into token-sized pieces."""

from __future__ import annotations

import math
import re
from typing import Any, Mapping, Optional, Pattern, Sequence, Union

from .estimate import estimate_tokens
from .messages import estimate_message_tokens

# paragraph breaks, line breaks, then sentence ends
_NATURAL_BOUNDARY = re.compile(r"\n\n+|\n|(?<=[.!?])\s+")


def _overlap_tail(text: str, overlap_tokens: int) -> str:
    """Trailing words of ``text`` worth roughly ``overlap_tokens`` tokens."""

    words = text.split()
    tail: list[str] = []
    tokens = 0
    for word in reversed(words):
        if tokens >= overlap_tokens:
            break
        tail.insert(0, word)
        tokens += estimate_tokens(word)
    return " ".join(tail)


def split_text(
    text: str,
    *,
    max_tokens: int,
    overlap: int = 0,
    separator: Optional[Union[str, Pattern[str]]] = None,
) -> list[str]:
    """Split ``text`` into chunks of about ``max_tokens`` tokens each.

    Splits on paragraph and sentence boundaries (or ``separator``) and only
    falls back to word boundaries for a single oversized segment. With
    ``overlap`` > 0 each chunk starts with the tail of the previous one.
    """

    if not text:
        return []
    if estimate_tokens(text) <= max_tokens:
        return [text]

    if separator is None:
        pattern = _NATURAL_BOUNDARY
    elif isinstance(separator, str):
        pattern = re.compile(separator)
    else:
        pattern = separator
    segments = [s for s in pattern.split(text) if s and s.strip()]

    chunks: list[str] = []
    current = ""
    current_tokens = 0

    for segment in segments:
        segment_tokens = estimate_tokens(segment)

        if segment_tokens > max_tokens:
            if current:
                chunks.append(current.strip())
                current, current_tokens = "", 0

            word_chunk = ""
            word_tokens = 0
            for word in segment.split():
                count = estimate_tokens(f"{word} ")
                if word_tokens + count > max_tokens and word_chunk:
                    chunks.append(word_chunk.strip())
                    word_chunk = f"{_overlap_tail(word_chunk, overlap)} " if overlap > 0 else ""
                    word_tokens = estimate_tokens(word_chunk)
                word_chunk += f"{word} "
                word_tokens += count

            if word_chunk.strip():
                current, current_tokens = word_chunk, word_tokens
            continue

        # +1 for the joining space
        new_tokens = current_tokens + segment_tokens + 1
        if new_tokens > max_tokens and current:
            chunks.append(current.strip())
            if overlap > 0:
                current = f"{_overlap_tail(current, overlap)} {segment}"
                current_tokens = estimate_tokens(current)
            else:
                current, current_tokens = segment, segment_tokens
        else:
            current = f"{current} {segment}" if current else segment
            current_tokens = new_tokens

    if current.strip():
        chunks.append(current.strip())
    return chunks


def paginate_messages(
    messages: Sequence[Mapping[str, Any]],
    tokens_per_page: int,
    provider: str = "openai",
) -> list[list[Mapping[str, Any]]]:
    """Group consecutive messages into pages of at most ``tokens_per_page``.

    A single message larger than a page gets a page of its own.
    """

    pages: list[list[Mapping[str, Any]]] = []
    page: list[Mapping[str, Any]] = []
    used = 0
    for message in messages:
        tokens = estimate_message_tokens(message, provider)
        if used + tokens > tokens_per_page and page:
            pages.append(page)
            page, used = [], 0
        page.append(message)
        used += tokens
    if page:
        pages.append(page)
    return pages


def estimate_chunk_count(text: str, chunk_size: int) -> int:
    if not text or chunk_size <= 0:
        return 0
    return math.ceil(estimate_tokens(text) / chunk_size)
