"""Intent-level aliases for models, creativity and reasoning depth.

``fast``/``cheap``/``best``/``balanced``/``reasoning`` pick a concrete model
per provider; creativity levels map to temperatures; reasoning levels map to
``reasoning_effort`` (OpenAI), a thinking budget (Anthropic) or a
reasoning/non-reasoning model variant (xAI).
"""

from __future__ import annotations

from typing import Any, Optional

DEFAULT_PRESET_PROVIDER = "openai"

MODEL_PRESETS: dict[str, dict[str, str]] = {
    "fast": {
        "openai": "gpt-4o-mini",
        "anthropic": "claude-3-5-haiku-20241022",
        "xai": "grok-4-1-fast-non-reasoning",
    },
    "cheap": {
        "openai": "gpt-4o-mini",
        "anthropic": "claude-3-5-haiku-20241022",
        "xai": "grok-3-mini",
    },
    "best": {
        "openai": "gpt-5.1",
        "anthropic": "claude-sonnet-4-20250514",
        "xai": "grok-4-0709",
    },
    "balanced": {
        "openai": "gpt-4o",
        "anthropic": "claude-sonnet-4-20250514",
        "xai": "grok-3",
    },
    "reasoning": {
        "openai": "gpt-5.1",
        "anthropic": "claude-sonnet-4-20250514",
        "xai": "grok-4-1-fast-reasoning",
    },
}

CREATIVITY_PRESETS: dict[str, float] = {
    "precise": 0.0,
    "balanced": 0.7,
    "creative": 1.0,
    "wild": 1.5,
}

REASONING_PRESETS: dict[str, dict[str, dict[str, Any]]] = {
    "off": {
        "openai": {"reasoning_effort": "none"},
        "anthropic": {},
        "xai": {"prefer_reasoning_model": False},
    },
    "low": {
        "openai": {"reasoning_effort": "low"},
        "anthropic": {"thinking": {"type": "enabled", "budget_tokens": 2048}},
        "xai": {"prefer_reasoning_model": False},
    },
    "medium": {
        "openai": {"reasoning_effort": "medium"},
        "anthropic": {"thinking": {"type": "enabled", "budget_tokens": 8192}},
        "xai": {"prefer_reasoning_model": True},
    },
    "high": {
        "openai": {"reasoning_effort": "high"},
        "anthropic": {"thinking": {"type": "enabled", "budget_tokens": 32768}},
        "xai": {"prefer_reasoning_model": True},
    },
}

# reasoning <-> non-reasoning twins of the fast Grok models
_XAI_REASONING_TWINS = {
    "grok-4-1-fast-non-reasoning": "grok-4-1-fast-reasoning",
    "grok-4-fast-non-reasoning": "grok-4-fast-reasoning",
}


def is_model_preset(model: Optional[str]) -> bool:
    return model in MODEL_PRESETS


def resolve_model_preset(preset: str, provider: str = DEFAULT_PRESET_PROVIDER) -> str:
    try:
        return MODEL_PRESETS[preset][provider]
    except KeyError as e:
        raise ValueError(f"No {preset!r} preset for provider {provider!r}") from e


def resolve_model(model: str, provider: Optional[str] = None) -> str:
    """Concrete model id for ``model``; non-preset names pass through."""

    if is_model_preset(model):
        return resolve_model_preset(model, provider or DEFAULT_PRESET_PROVIDER)
    return model


def resolve_creativity(level: str) -> float:
    try:
        return CREATIVITY_PRESETS[level]
    except KeyError as e:
        raise ValueError(
            f"Unknown creativity level {level!r}; expected one of {sorted(CREATIVITY_PRESETS)}"
        ) from e


def get_reasoning_config(level: str, provider: str) -> dict[str, Any]:
    try:
        return REASONING_PRESETS[level][provider]
    except KeyError as e:
        raise ValueError(f"Unknown reasoning level {level!r} for provider {provider!r}") from e


def supports_reasoning(model: str) -> bool:
    """Whether ``model`` takes reasoning parameters (xAI switches models instead)."""

    if model.startswith(("gpt-5", "o1", "o3", "o4")):
        return True
    return "claude" in model


def adjust_xai_model_for_reasoning(model: str, prefer_reasoning: bool) -> str:
    if prefer_reasoning:
        return _XAI_REASONING_TWINS.get(model, model)
    for plain, reasoning in _XAI_REASONING_TWINS.items():
        if model == reasoning:
            return plain
    return model
