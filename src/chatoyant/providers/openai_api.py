"""Thin wrappers over the OpenAI REST API (chat, embeddings, images, models)."""

from __future__ import annotations

import json
import math
from typing import Any, Optional, Sequence, Union
from urllib.parse import quote

from chatoyant import config

from . import _openai_compat as compat
from .errors import OpenAIError
from .http import RequestOptions, request_json


def _headers(options: RequestOptions) -> dict[str, str]:
    return {"Authorization": f"Bearer {options.api_key}"}


def _post(endpoint: str, body: Any, options: RequestOptions) -> Any:
    return request_json(
        "POST",
        endpoint,
        body,
        options,
        default_base_url=config.OPENAI_BASE_URL,
        headers=_headers(options),
        error_cls=OpenAIError,
    )


def _get(endpoint: str, options: RequestOptions) -> Any:
    return request_json(
        "GET",
        endpoint,
        None,
        options,
        default_base_url=config.OPENAI_BASE_URL,
        headers=_headers(options),
        error_cls=OpenAIError,
    )


# --- Chat completions ---


def chat(
    messages: list[dict[str, Any]],
    options: RequestOptions,
    *,
    model: str,
    request_options: Optional[dict[str, Any]] = None,
    **params: Any,
) -> dict[str, Any]:
    """POST /chat/completions and return the raw completion.

    ``params`` accepts the usual sampling knobs (``temperature``,
    ``max_tokens``, ``top_p``, ``stop``, ``seed``, ``reasoning_effort``, ...);
    ``request_options`` is merged into the body verbatim.
    """

    body = compat.chat_body(messages, model, params, request_options)
    return _post("/chat/completions", body, options)


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
    """Either ``{"type": "tool_calls", ...}`` or ``{"type": "content", ...}``."""

    extra: dict[str, Any] = {"tools": tools}
    if tool_choice is not None:
        extra["tool_choice"] = tool_choice
    if parallel_tool_calls is not None:
        extra["parallel_tool_calls"] = parallel_tool_calls
    completion = chat(messages, options, model=model, request_options=extra, **params)
    return compat.tool_outcome(completion)


def chat_structured(
    messages: list[dict[str, Any]],
    schema: dict[str, Any],
    options: RequestOptions,
    *,
    model: str,
    **params: Any,
) -> dict[str, Any]:
    """Chat with a ``json_schema`` response format and return the decoded object.

    ``schema`` is ``{"name", "schema", "description"?, "strict"?}``.
    """

    extra = {"response_format": {"type": "json_schema", "json_schema": schema}}
    completion = chat(messages, options, model=model, request_options=extra, **params)
    content = compat.message_text(completion)
    if not content:
        raise OpenAIError.invalid_response("No content in response")
    try:
        return json.loads(content)
    except ValueError as e:
        raise OpenAIError.invalid_response(f"Structured output is not JSON: {e}") from e


# --- Embeddings ---


def create_embedding(
    input: Union[str, Sequence[str]],
    options: RequestOptions,
    *,
    model: str,
    dimensions: Optional[int] = None,
    encoding_format: Optional[str] = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {"model": model, "input": input if isinstance(input, str) else list(input)}
    if dimensions is not None:
        body["dimensions"] = dimensions
    if encoding_format:
        body["encoding_format"] = encoding_format
    return _post("/embeddings", body, options)


def embed(text: str, options: RequestOptions, *, model: str, **kwargs: Any) -> list[float]:
    response = create_embedding(text, options, model=model, **kwargs)
    return response["data"][0]["embedding"]


def embed_many(
    texts: Sequence[str], options: RequestOptions, *, model: str, **kwargs: Any
) -> list[list[float]]:
    """Embeddings in input order."""

    response = create_embedding(texts, options, model=model, **kwargs)
    return [e["embedding"] for e in sorted(response["data"], key=lambda e: e["index"])]


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    if len(a) != len(b):
        raise ValueError("Vectors must have the same length")
    dot = sum(x * y for x, y in zip(a, b))
    magnitude = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    return dot / magnitude if magnitude else 0.0


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
) -> dict[str, Any]:
    body = compat.image_body(
        prompt,
        model=model,
        n=n,
        size=size,
        quality=quality,
        style=style,
        response_format=response_format,
    )
    return _post("/images/generations", body, options)


def generate_image_url(prompt: str, options: RequestOptions, **kwargs: Any) -> str:
    kwargs.update(n=1, response_format="url")
    url = compat.first_image(generate_image(prompt, options, **kwargs)).get("url")
    if not url:
        raise OpenAIError.invalid_response("No URL in response")
    return url


def generate_image_base64(prompt: str, options: RequestOptions, **kwargs: Any) -> str:
    kwargs.update(n=1, response_format="b64_json")
    data = compat.first_image(generate_image(prompt, options, **kwargs)).get("b64_json")
    if not data:
        raise OpenAIError.invalid_response("No base64 data in response")
    return data


def generate_images(
    prompt: str, count: int, options: RequestOptions, **kwargs: Any
) -> list[dict[str, Any]]:
    kwargs["n"] = count
    return generate_image(prompt, options, **kwargs).get("data") or []


def generate_image_with_prompt(
    prompt: str, options: RequestOptions, **kwargs: Any
) -> dict[str, str]:
    """Image URL plus the prompt the model actually used."""

    kwargs.update(n=1, response_format="url")
    image = compat.first_image(generate_image(prompt, options, **kwargs))
    if not image.get("url"):
        raise OpenAIError.invalid_response("No URL in response")
    return {"url": image["url"], "revised_prompt": image.get("revised_prompt") or prompt}


# --- Models ---


def list_models(options: RequestOptions) -> dict[str, Any]:
    return _get("/models", options)


def get_model(model_id: str, options: RequestOptions) -> dict[str, Any]:
    return _get(f"/models/{quote(model_id, safe='')}", options)


def list_model_ids(options: RequestOptions) -> list[str]:
    return [m["id"] for m in list_models(options).get("data") or []]


def model_exists(model_id: str, options: RequestOptions) -> bool:
    try:
        get_model(model_id, options)
    except OpenAIError:
        return False
    return True
