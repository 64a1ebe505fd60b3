"""Token budgeting for chat message lists.

Messages are mappings with ``role``, ``content`` and an optional ``name``.
Each provider adds a fixed per-message overhead for role markers and a
per-conversation overhead for the trailing assistant primer.
"""

from __future__ import annotations

import math
from typing import Any, Mapping, Optional, Sequence

from .estimate import estimate_tokens

MESSAGE_OVERHEAD: dict[str, int] = {"openai": 4, "anthropic": 3, "xai": 4}
CONVERSATION_OVERHEAD: dict[str, int] = {"openai": 3, "anthropic": 3, "xai": 3}


def _overhead(table: dict[str, int], provider: str) -> int:
    try:
        return table[provider]
    except KeyError as e:
        raise ValueError(f"Unknown provider for token overhead: {provider}") from e


def get_message_overhead(provider: str = "openai") -> dict[str, int]:
    return {
        "per_message": _overhead(MESSAGE_OVERHEAD, provider),
        "conversation": _overhead(CONVERSATION_OVERHEAD, provider),
    }


def estimate_message_tokens(message: Mapping[str, Any], provider: str = "openai") -> int:
    content = message.get("content")
    name = message.get("name")
    content_tokens = estimate_tokens(content) if content else 0
    name_tokens = estimate_tokens(name) + 1 if name else 0
    return _overhead(MESSAGE_OVERHEAD, provider) + content_tokens + name_tokens


def estimate_chat_tokens(
    messages: Sequence[Mapping[str, Any]], provider: str = "openai"
) -> int:
    if not messages:
        return 0
    total = sum(estimate_message_tokens(m, provider) for m in messages)
    return total + _overhead(CONVERSATION_OVERHEAD, provider)


def estimate_system_prompt_tokens(system_prompt: str, provider: str = "openai") -> int:
    return estimate_message_tokens({"role": "system", "content": system_prompt}, provider)


def calculate_available_tokens(
    *,
    context_window: int,
    system_prompt_tokens: int = 0,
    reserve_for_response: int = 0,
    history_tokens: int = 0,
) -> int:
    return max(
        0,
        context_window - system_prompt_tokens - reserve_for_response - history_tokens,
    )


def messages_fit_budget(
    messages: Sequence[Mapping[str, Any]], max_tokens: int, provider: str = "openai"
) -> bool:
    return estimate_chat_tokens(messages, provider) <= max_tokens


def fit_messages(
    messages: Sequence[Mapping[str, Any]],
    *,
    max_tokens: int,
    reserve_for_response: int = 0,
    provider: str = "openai",
) -> list[Mapping[str, Any]]:
    """Drop the oldest messages until the rest fit in the budget.

    A leading system message is always kept. Recent messages win.
    """

    budget = max_tokens - reserve_for_response
    if budget <= 0 or not messages:
        return []
    if estimate_chat_tokens(messages, provider) <= budget:
        return list(messages)

    system: Optional[Mapping[str, Any]] = None
    rest = list(messages)
    if rest[0].get("role") == "system":
        system = rest.pop(0)

    remaining = budget - (estimate_message_tokens(system, provider) if system else 0)
    if remaining <= 0:
        return [system] if system else []

    kept: list[Mapping[str, Any]] = []
    used = 0
    for msg in reversed(rest):
        cost = estimate_message_tokens(msg, provider)
        if used + cost > remaining:
            break
        kept.insert(0, msg)
        used += cost

    return [system, *kept] if system else kept


def truncate_content(content: str, max_tokens: int, ellipsis: str = "...") -> str:
    """Shorten ``content`` to about ``max_tokens``, preferring a word boundary."""

    if not content:
        return content
    tokens = estimate_tokens(content)
    if tokens <= max_tokens:
        return content

    target = math.floor(len(content) * (max_tokens / tokens)) - len(ellipsis)
    if target <= 0:
        return ellipsis

    truncated = content[:target]
    last_space = truncated.rfind(" ")
    if last_space > target * 0.8:
        truncated = truncated[:last_space]
    return truncated.strip() + ellipsis
