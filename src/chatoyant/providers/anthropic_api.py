"""Thin wrappers over the Anthropic Messages API."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from chatoyant import config

from .errors import AnthropicError
from .http import RequestOptions, request_json


def _headers(options: RequestOptions, betas: Optional[Sequence[str]] = None) -> dict[str, str]:
    headers = {
        "x-api-key": options.api_key,
        "anthropic-version": config.ANTHROPIC_API_VERSION,
    }
    if betas:
        headers["anthropic-beta"] = ",".join(betas)
    return headers


def create_message(
    messages: list[dict[str, Any]],
    options: RequestOptions,
    *,
    model: str,
    max_tokens: int,
    system: Any = None,
    temperature: Optional[float] = None,
    betas: Optional[Sequence[str]] = None,
    request_options: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """POST /messages (non-streaming) and return the raw response."""

    body: dict[str, Any] = {
        "model": model,
        "messages": messages,
        "max_tokens": max_tokens,
        "stream": False,
    }
    body.update(request_options or {})
    if system is not None:
        body["system"] = system
    if temperature is not None:
        body["temperature"] = temperature
    return request_json(
        "POST",
        "/messages",
        body,
        options,
        default_base_url=config.ANTHROPIC_BASE_URL,
        headers=_headers(options, betas),
        error_cls=AnthropicError,
    )


def extract_text(content: Sequence[dict[str, Any]]) -> str:
    return "".join(block.get("text", "") for block in content if block.get("type") == "text")


def extract_tool_uses(content: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
    return [block for block in content if block.get("type") == "tool_use"]


def message_simple(messages: list[dict[str, Any]], options: RequestOptions, **kwargs: Any) -> str:
    response = create_message(messages, options, **kwargs)
    return extract_text(response.get("content") or [])


def message_with_tools(
    messages: list[dict[str, Any]], options: RequestOptions, **kwargs: Any
) -> dict[str, Any]:
    """Either ``{"type": "tool_use", ...}`` or ``{"type": "text", ...}``."""

    response = create_message(messages, options, **kwargs)
    content = response.get("content") or []
    tool_uses = extract_tool_uses(content)
    if tool_uses:
        return {"type": "tool_use", "tool_uses": tool_uses, "usage": response.get("usage")}
    return {"type": "text", "text": extract_text(content), "usage": response.get("usage")}


def structured_tool(schema: dict[str, Any]) -> dict[str, Any]:
    """Request fields forcing a single tool call whose input is ``schema``."""

    tool: dict[str, Any] = {
        "name": schema["name"],
        "input_schema": {"type": "object", **schema["schema"]},
    }
    if schema.get("description"):
        tool["description"] = schema["description"]
    return {"tools": [tool], "tool_choice": {"type": "tool", "name": schema["name"]}}


def message_structured(
    messages: list[dict[str, Any]],
    schema: dict[str, Any],
    options: RequestOptions,
    **kwargs: Any,
) -> dict[str, Any]:
    """Structured output through a forced tool call; returns the tool input.

    ``schema`` is ``{"name", "schema", "description"?}``.
    """

    request_options = {**(kwargs.pop("request_options", None) or {}), **structured_tool(schema)}
    response = create_message(messages, options, request_options=request_options, **kwargs)
    tool_uses = extract_tool_uses(response.get("content") or [])
    if not tool_uses:
        raise AnthropicError.invalid_response("No tool use in response")
    return tool_uses[0].get("input") or {}


def list_models(options: RequestOptions) -> dict[str, Any]:
    return request_json(
        "GET",
        "/models",
        None,
        options,
        default_base_url=config.ANTHROPIC_BASE_URL,
        headers=_headers(options),
        error_cls=AnthropicError,
    )
