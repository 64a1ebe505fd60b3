from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from .pricing import ModelPricing, get_pricing

_PER_MILLION = 1_000_000


@dataclass(frozen=True)
class CostResult:
    """USD cost breakdown of one or more requests."""

    input: float
    output: float
    cached: float
    total: float


ZERO_COST = CostResult(input=0.0, output=0.0, cached=0.0, total=0.0)


def calculate_cost_custom(
    *,
    input_tokens: int,
    output_tokens: int,
    pricing: ModelPricing,
    cached_tokens: int = 0,
) -> CostResult:
    """Cost under explicit pricing.

    Cached tokens are part of ``input_tokens`` but billed at the cached rate,
    so they are removed from the billable input first.
    """

    billable_input = max(0, input_tokens - cached_tokens)
    input_cost = billable_input / _PER_MILLION * pricing.input
    output_cost = output_tokens / _PER_MILLION * pricing.output
    cached_cost = cached_tokens / _PER_MILLION * pricing.cached if pricing.cached else 0.0
    return CostResult(
        input=input_cost,
        output=output_cost,
        cached=cached_cost,
        total=input_cost + output_cost + cached_cost,
    )


def calculate_cost(
    *,
    model: str,
    input_tokens: int,
    output_tokens: int,
    cached_tokens: int = 0,
) -> CostResult:
    """Cost for a known model; unknown models cost nothing."""

    pricing = get_pricing(model)
    if pricing is None:
        return ZERO_COST
    return calculate_cost_custom(
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        cached_tokens=cached_tokens,
        pricing=pricing,
    )


def estimate_cost(
    *,
    model: str,
    expected_output_tokens: int,
    input_tokens: Optional[int] = None,
    input_text: Optional[str] = None,
) -> CostResult:
    estimated_input = input_tokens or 0
    if input_text and not input_tokens:
        estimated_input = math.ceil(len(input_text) / 4)
    return calculate_cost(
        model=model,
        input_tokens=estimated_input,
        output_tokens=expected_output_tokens,
    )


def get_cost_per_token(model: str) -> Optional[dict[str, float]]:
    pricing = get_pricing(model)
    if pricing is None:
        return None
    return {
        "input": pricing.input / _PER_MILLION,
        "output": pricing.output / _PER_MILLION,
        "cached": (pricing.cached or 0) / _PER_MILLION,
    }


def calculate_batch_cost(requests: Iterable[Mapping[str, int]], model: str) -> CostResult:
    """Sum ``input_tokens``/``output_tokens``/``cached_tokens`` then price once."""

    input_tokens = output_tokens = cached_tokens = 0
    for req in requests:
        input_tokens += req["input_tokens"]
        output_tokens += req["output_tokens"]
        cached_tokens += req.get("cached_tokens", 0)
    return calculate_cost(
        model=model,
        input_tokens=input_tokens,
        output_tokens=output_tokens,
        cached_tokens=cached_tokens,
    )
