"""Request/response shapes shared by OpenAI-compatible chat and image APIs."""

from __future__ import annotations

from typing import Any, Optional

_CHAT_PARAMS = frozenset(
    {
        "temperature",
        "max_tokens",
        "top_p",
        "stop",
        "seed",
        "user",
        "frequency_penalty",
        "presence_penalty",
        "logprobs",
        "top_logprobs",
        "n",
        "reasoning_effort",
        "response_format",
    }
)


def chat_body(
    messages: list[dict[str, Any]],
    model: str,
    params: dict[str, Any],
    extra: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Non-streaming chat completion body; ``None`` params are left out."""

    unknown = set(params) - _CHAT_PARAMS
    if unknown:
        raise TypeError(f"Unexpected chat parameter(s): {', '.join(sorted(unknown))}")
    body: dict[str, Any] = {"model": model, "messages": messages, "stream": False}
    body.update(extra or {})
    for name, value in params.items():
        if value is not None:
            body[name] = value
    return body


def first_message(completion: dict[str, Any]) -> dict[str, Any]:
    choices = completion.get("choices") or []
    if not choices:
        return {}
    return choices[0].get("message") or {}


def message_text(completion: dict[str, Any]) -> str:
    return first_message(completion).get("content") or ""


def tool_outcome(completion: dict[str, Any]) -> dict[str, Any]:
    message = first_message(completion)
    usage = completion.get("usage")
    tool_calls = message.get("tool_calls")
    if tool_calls:
        return {"type": "tool_calls", "tool_calls": tool_calls, "usage": usage}
    return {"type": "content", "content": message.get("content") or "", "usage": usage}


def image_body(prompt: str, **params: Any) -> dict[str, Any]:
    body: dict[str, Any] = {"prompt": prompt}
    body.update({k: v for k, v in params.items() if v is not None})
    return body


def first_image(response: dict[str, Any]) -> dict[str, Any]:
    data = response.get("data") or []
    return data[0] if data else {}
