import pytest

from chatoyant.llm import (
    adjust_xai_model_for_reasoning,
    get_reasoning_config,
    is_model_preset,
    resolve_creativity,
    resolve_model,
    supports_reasoning,
)


def test_model_presets_resolve_per_provider():
    assert is_model_preset("fast")
    assert not is_model_preset("gpt-4o")
    assert resolve_model("fast") == "gpt-4o-mini"
    assert resolve_model("best", "anthropic") == "claude-sonnet-4-20250514"
    assert resolve_model("cheap", "xai") == "grok-3-mini"
    assert resolve_model("gpt-4o", "anthropic") == "gpt-4o"


def test_unknown_preset_provider():
    with pytest.raises(ValueError):
        resolve_model("fast", "gemini")


def test_creativity_levels():
    assert resolve_creativity("precise") == 0.0
    assert resolve_creativity("balanced") == 0.7
    assert resolve_creativity("wild") == 1.5
    with pytest.raises(ValueError):
        resolve_creativity("loud")


def test_reasoning_configs():
    assert get_reasoning_config("high", "openai") == {"reasoning_effort": "high"}
    assert get_reasoning_config("medium", "anthropic")["thinking"]["budget_tokens"] == 8192
    assert get_reasoning_config("off", "anthropic") == {}
    with pytest.raises(ValueError):
        get_reasoning_config("extreme", "openai")


def test_supports_reasoning():
    assert supports_reasoning("o3-mini")
    assert supports_reasoning("gpt-5.1")
    assert supports_reasoning("claude-3-haiku")
    assert not supports_reasoning("gpt-4o")
    assert not supports_reasoning("grok-4")


def test_xai_reasoning_model_swap():
    assert adjust_xai_model_for_reasoning("grok-4-1-fast-reasoning", False) == (
        "grok-4-1-fast-non-reasoning"
    )
    assert adjust_xai_model_for_reasoning("grok-4-fast-non-reasoning", True) == (
        "grok-4-fast-reasoning"
    )
    assert adjust_xai_model_for_reasoning("grok-4-fast-reasoning", True) == "grok-4-fast-reasoning"
    assert adjust_xai_model_for_reasoning("grok-3", True) == "grok-3"
