"""Heuristic token estimation.

Character-ratio approximations, no tokenizer required. Typically within
10-15% for English prose, looser for code and non-Latin scripts.
"""

from __future__ import annotations

import math
import re
from typing import Iterable, Optional

TOKEN_RATIOS: dict[str, float] = {
    "english": 4.0,
    "code": 3.5,
    "cjk": 1.5,
    "mixed": 3.8,
}

_CJK = re.compile("[\u4e00-\u9fff\u3400-\u4dbf\u3040-\u309f\u30a0-\u30ff\uac00-\ud7af]")

_CODE_INDICATORS = (
    re.compile(r"[{}\[\]();]"),
    re.compile(r"^\s*(function|const|let|var|class|import|export|def|fn|pub)\s", re.M),
    re.compile(r"[=!<>]{2,}"),
    re.compile(r"\s{2,}[a-zA-Z_]\w*\s*[=(]"),
)


def _looks_like_code(text: str) -> bool:
    return sum(1 for p in _CODE_INDICATORS if p.search(text)) >= 2


def _chars_per_token(text: str) -> float:
    cjk_count = len(_CJK.findall(text))
    if cjk_count:
        share = cjk_count / len(text)
        return TOKEN_RATIOS["cjk"] * share + TOKEN_RATIOS["mixed"] * (1 - share)
    if _looks_like_code(text):
        return TOKEN_RATIOS["code"]
    return TOKEN_RATIOS["english"]


def estimate_tokens(text: Optional[str]) -> int:
    """Estimated token count of ``text``; 0 for empty input."""

    if not text:
        return 0
    return math.ceil(len(text) / _chars_per_token(text))


def estimate_prompt_tokens(prompt: str, response: Optional[str] = None) -> dict[str, int]:
    input_tokens = estimate_tokens(prompt)
    output_tokens = estimate_tokens(response) if response else 0
    return {
        "input": input_tokens,
        "output": output_tokens,
        "total": input_tokens + output_tokens,
    }


def estimate_tokens_many(texts: Iterable[str]) -> int:
    return sum(estimate_tokens(t) for t in texts)


def estimate_tokens_with_ratio(text: Optional[str], chars_per_token: float) -> int:
    if not text or chars_per_token <= 0:
        return 0
    return math.ceil(len(text) / chars_per_token)
