from __future__ import annotations

from typing import Optional

from chatoyant import config
from chatoyant.providers.registry import PROVIDERS, detect_provider_by_model

from .base import LLMClient, LLMConfig
from .clients import AnthropicLLM, OpenAILLM, XAILLM
from .errors import LLMError
from .presets import (
    adjust_xai_model_for_reasoning,
    get_reasoning_config,
    resolve_creativity,
    resolve_model,
)

_CLIENTS = {
    "openai": OpenAILLM,
    "anthropic": AnthropicLLM,
    "xai": XAILLM,
}


def build_llm(
    model: Optional[str] = None,
    provider: Optional[str] = None,
    *,
    timeout_s: Optional[float] = None,
    creativity: Optional[str] = None,
    reasoning: Optional[str] = None,
) -> LLMClient:
    """Factory for provider clients.

    Providers:
    - openai
    - anthropic
    - xai

    ``model`` may be a concrete id or a preset (``fast``, ``cheap``, ``best``,
    ``balanced``, ``reasoning``); presets resolve for ``provider``, OpenAI by
    default. When ``provider`` is omitted it is detected from the model name.
    ``creativity`` sets the default temperature and ``reasoning``
    (``off``/``low``/``medium``/``high``) the default reasoning depth.
    """

    hint = (provider or "").lower().strip()
    if hint and hint not in _CLIENTS:
        raise LLMError(f"Unknown LLM provider: {provider}")

    model = resolve_model(model or config.DEFAULT_MODEL, hint or None)
    p = hint or (detect_provider_by_model(model) or "")
    if p not in _CLIENTS:
        raise LLMError(f"Unknown LLM provider: {provider or model}")

    if reasoning is not None:
        reasoning_cfg = get_reasoning_config(reasoning, p)
        if p == "xai":
            model = adjust_xai_model_for_reasoning(model, reasoning_cfg["prefer_reasoning_model"])

    return _CLIENTS[p](
        LLMConfig(
            provider=p,
            model=model,
            api_key_env=PROVIDERS[p].env_key,
            timeout_s=timeout_s if timeout_s is not None else config.DEFAULT_TIMEOUT_S,
            temperature=resolve_creativity(creativity) if creativity is not None else None,
            reasoning=reasoning,
        )
    )
