"""Thin wrappers over the xAI REST API (OpenAI-compatible chat and images)."""

from __future__ import annotations

import json
from typing import Any, Optional

from chatoyant import config

from . import _openai_compat as compat
from .errors import XAIError
from .http import RequestOptions, request_json


def _request(method: str, endpoint: str, body: Any, options: RequestOptions) -> Any:
    return request_json(
        method,
        endpoint,
        body,
        options,
        default_base_url=config.XAI_BASE_URL,
        headers={"Authorization": f"Bearer {options.api_key}"},
        error_cls=XAIError,
    )


def chat(
    messages: list[dict[str, Any]],
    options: RequestOptions,
    *,
    model: str,
    request_options: Optional[dict[str, Any]] = None,
    **params: Any,
) -> dict[str, Any]:
    body = compat.chat_body(messages, model, params, request_options)
    return _request("POST", "/chat/completions", body, options)


def chat_simple(
    messages: list[dict[str, Any]], options: RequestOptions, *, model: str, **params: Any
) -> str:
    return compat.message_text(chat(messages, options, model=model, **params))


def chat_with_tools(
    messages: list[dict[str, Any]],
    tools: list[dict[str, Any]],
    options: RequestOptions,
    *,
    model: str,
    tool_choice: Any = None,
    parallel_tool_calls: Optional[bool] = None,
    **params: Any,
) -> dict[str, Any]:
    extra: dict[str, Any] = {"tools": tools}
    if tool_choice is not None:
        extra["tool_choice"] = tool_choice
    if parallel_tool_calls is not None:
        extra["parallel_tool_calls"] = parallel_tool_calls
    completion = chat(messages, options, model=model, request_options=extra, **params)
    return compat.tool_outcome(completion)


def chat_with_web_search(
    messages: list[dict[str, Any]],
    options: RequestOptions,
    *,
    model: str,
    request_options: Optional[dict[str, Any]] = None,
    **params: Any,
) -> dict[str, Any]:
    extra = dict(request_options or {})
    extra["tools"] = [{"type": "web_search"}, *(extra.get("tools") or [])]
    return chat(messages, options, model=model, request_options=extra, **params)


def chat_structured(
    messages: list[dict[str, Any]],
    schema: dict[str, Any],
    options: RequestOptions,
    *,
    model: str,
    **params: Any,
) -> dict[str, Any]:
    params["response_format"] = {"type": "json_schema", "json_schema": schema}
    content = compat.message_text(chat(messages, options, model=model, **params))
    if not content:
        raise XAIError.invalid_response("No content in response")
    try:
        return json.loads(content)
    except ValueError as e:
        raise XAIError.invalid_response(f"Structured output is not JSON: {e}") from e


# --- Images ---


def generate_image(
    prompt: str,
    options: RequestOptions,
    *,
    model: Optional[str] = None,
    n: Optional[int] = None,
    size: Optional[str] = None,
    quality: Optional[str] = None,
    style: Optional[str] = None,
    response_format: Optional[str] = None,
    user: Optional[str] = None,
) -> dict[str, Any]:
    body = compat.image_body(
        prompt,
        model=model,
        n=n,
        size=size,
        quality=quality,
        style=style,
        response_format=response_format,
        user=user,
    )
    return _request("POST", "/images/generations", body, options)


def generate_image_url(prompt: str, options: RequestOptions, **kwargs: Any) -> str:
    kwargs.update(n=1, response_format="url")
    url = compat.first_image(generate_image(prompt, options, **kwargs)).get("url")
    if not url:
        raise XAIError.invalid_response("No URL in response")
    return url


def generate_image_base64(prompt: str, options: RequestOptions, **kwargs: Any) -> str:
    kwargs.update(n=1, response_format="b64_json")
    data = compat.first_image(generate_image(prompt, options, **kwargs)).get("b64_json")
    if not data:
        raise XAIError.invalid_response("No base64 data in response")
    return data


def generate_images(
    prompt: str, count: int, options: RequestOptions, **kwargs: Any
) -> list[dict[str, Any]]:
    kwargs["n"] = count
    return generate_image(prompt, options, **kwargs).get("data") or []


# --- Models ---


def list_models(options: RequestOptions) -> dict[str, Any]:
    return _request("GET", "/models", None, options)


def get_model(model_id: str, options: RequestOptions) -> dict[str, Any]:
    return _request("GET", f"/models/{model_id}", None, options)


def model_exists(model_id: str, options: RequestOptions) -> bool:
    try:
        get_model(model_id, options)
    except XAIError:
        return False
    return True


def list_language_models(options: RequestOptions) -> list[dict[str, Any]]:
    return _request("GET", "/language-models", None, options).get("models") or []


def list_image_generation_models(options: RequestOptions) -> list[dict[str, Any]]:
    return _request("GET", "/image-generation-models", None, options).get("models") or []
