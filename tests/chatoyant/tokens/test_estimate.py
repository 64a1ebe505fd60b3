import math

from chatoyant.tokens import (
    TOKEN_RATIOS,
    estimate_prompt_tokens,
    estimate_tokens,
    estimate_tokens_many,
    estimate_tokens_with_ratio,
)


def test_empty_text_is_zero():
    assert estimate_tokens("") == 0
    assert estimate_tokens(None) == 0


def test_english_uses_four_chars_per_token():
    assert TOKEN_RATIOS["english"] == 4.0
    assert estimate_tokens("Hello, world!") == 4  # ceil(13 / 4)
    assert estimate_tokens("abcd" * 10) == 10


def test_code_needs_two_indicators():
    code = "function add(a, b) {\n  return a + b;\n}"
    assert estimate_tokens(code) == math.ceil(len(code) / 3.5)

    # brackets alone are one indicator, so this is prose
    prose = "see (above)"
    assert estimate_tokens(prose) == 3


def test_cjk_blends_ratios():
    text = "你好世界"
    assert estimate_tokens(text) == 3  # ceil(4 / 1.5)

    mixed = "ab你好"
    ratio = 1.5 * 0.5 + 3.8 * 0.5
    assert estimate_tokens(mixed) == math.ceil(4 / ratio)


def test_helpers():
    assert estimate_prompt_tokens("abcd" * 2, "abcd") == {"input": 2, "output": 1, "total": 3}
    assert estimate_prompt_tokens("abcd") == {"input": 1, "output": 0, "total": 1}
    assert estimate_tokens_many(["abcd", "abcdabcd"]) == 3
    assert estimate_tokens_with_ratio("abcdef", 3.0) == 2
    assert estimate_tokens_with_ratio("abc", 0) == 0
