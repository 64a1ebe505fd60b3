from chatoyant.tokens import (
    CONTEXT_WINDOWS,
    PRICING,
    get_context_window,
    get_pricing,
    has_context_window,
    has_pricing,
)


def test_context_window_lookup_by_exact_key():
    assert get_context_window("gpt-4o") == 128_000
    assert get_context_window("gpt-4.1") == 1_047_576
    assert get_context_window("claude-3-5-sonnet-20241022") == 200_000
    assert get_context_window("grok-4-1-fast-reasoning") == 2_000_000
    assert get_context_window("grok-2-vision") == 32_768


def test_context_window_fallback():
    assert get_context_window("GPT-4O") is None
    assert get_context_window("unknown-model", 4096) == 4096
    assert has_context_window("o3")
    assert not has_context_window("o3-nonexistent")
    assert has_context_window("") is False


def test_pricing_lookup():
    pricing = get_pricing("gpt-4o")

    assert (pricing.input, pricing.output, pricing.cached) == (2.50, 10.00, 1.25)
    assert get_pricing("grok-3").cached is None
    assert get_pricing("nope") is None
    assert has_pricing("text-embedding-3-small")


def test_every_priced_chat_model_has_a_context_window():
    chat_models = [m for m in PRICING if "embedding" not in m]
    assert [m for m in chat_models if m not in CONTEXT_WINDOWS] == []
