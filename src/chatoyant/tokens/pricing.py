from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ModelPricing:
    """USD per 1M tokens."""

    input: float
    output: float
    cached: Optional[float] = None


def _p(input: float, output: float, cached: Optional[float] = None) -> ModelPricing:
    return ModelPricing(input=input, output=output, cached=cached)


PRICING: dict[str, ModelPricing] = {
    # OpenAI
    "gpt-5.2": _p(1.75, 14.00, 0.175),
    "gpt-4o": _p(2.50, 10.00, 1.25),
    "gpt-4o-2024-11-20": _p(2.50, 10.00, 1.25),
    "gpt-4o-2024-08-06": _p(2.50, 10.00, 1.25),
    "gpt-4o-2024-05-13": _p(5.00, 15.00),
    "gpt-4o-mini": _p(0.15, 0.60, 0.075),
    "gpt-4o-mini-2024-07-18": _p(0.15, 0.60, 0.075),
    "gpt-4.1": _p(2.00, 8.00, 0.50),
    "gpt-4.1-mini": _p(0.40, 1.60, 0.10),
    "gpt-4.1-nano": _p(0.10, 0.40, 0.025),
    "gpt-4-turbo": _p(10.00, 30.00),
    "gpt-4-turbo-2024-04-09": _p(10.00, 30.00),
    "gpt-4-turbo-preview": _p(10.00, 30.00),
    "gpt-4-1106-preview": _p(10.00, 30.00),
    "gpt-4-0125-preview": _p(10.00, 30.00),
    "gpt-4": _p(30.00, 60.00),
    "gpt-4-0613": _p(30.00, 60.00),
    "gpt-4-32k": _p(60.00, 120.00),
    "gpt-4-32k-0613": _p(60.00, 120.00),
    "gpt-3.5-turbo": _p(0.50, 1.50),
    "gpt-3.5-turbo-0125": _p(0.50, 1.50),
    "gpt-3.5-turbo-1106": _p(1.00, 2.00),
    "gpt-3.5-turbo-16k": _p(3.00, 4.00),
    "o1": _p(15.00, 60.00),
    "o1-2024-12-17": _p(15.00, 60.00),
    "o1-preview": _p(15.00, 60.00),
    "o1-preview-2024-09-12": _p(15.00, 60.00),
    "o1-mini": _p(3.00, 12.00),
    "o1-mini-2024-09-12": _p(3.00, 12.00),
    "o1-pro": _p(150.00, 600.00),
    "o1-pro-2025-03-19": _p(150.00, 600.00),
    "o3": _p(10.00, 40.00),
    "o3-2025-04-16": _p(10.00, 40.00),
    "o3-mini": _p(1.10, 4.40),
    "o3-mini-2025-01-31": _p(1.10, 4.40),
    "o4-mini": _p(1.10, 4.40),
    "text-embedding-3-small": _p(0.02, 0),
    "text-embedding-3-large": _p(0.13, 0),
    "text-embedding-ada-002": _p(0.10, 0),
    # Anthropic
    "claude-4.5-sonnet": _p(3.00, 15.00, 0.30),
    "claude-4.5-haiku": _p(0.80, 4.00, 0.08),
    "claude-sonnet-4-20250514": _p(3.00, 15.00, 0.30),
    "claude-sonnet-4": _p(3.00, 15.00, 0.30),
    "claude-3-5-sonnet-20241022": _p(3.00, 15.00, 0.30),
    "claude-3-5-sonnet-20240620": _p(3.00, 15.00, 0.30),
    "claude-3-5-haiku-20241022": _p(0.80, 4.00, 0.08),
    "claude-3.5-sonnet": _p(3.00, 15.00, 0.30),
    "claude-3.5-haiku": _p(0.80, 4.00, 0.08),
    "claude-3-opus-20240229": _p(15.00, 75.00, 1.50),
    "claude-3-sonnet-20240229": _p(3.00, 15.00, 0.30),
    "claude-3-haiku-20240307": _p(0.25, 1.25, 0.03),
    "claude-3-opus": _p(15.00, 75.00, 1.50),
    "claude-3-sonnet": _p(3.00, 15.00, 0.30),
    "claude-3-haiku": _p(0.25, 1.25, 0.03),
    # xAI
    "grok-4-1-fast-reasoning": _p(0.20, 0.50),
    "grok-4-1-fast-non-reasoning": _p(0.20, 0.50),
    "grok-4.1-fast": _p(0.20, 0.50),
    "grok-4-fast-reasoning": _p(0.20, 0.50),
    "grok-4-fast-non-reasoning": _p(0.20, 0.50),
    "grok-4-0709": _p(3.00, 15.00),
    "grok-4": _p(3.00, 15.00),
    "grok-code-fast-1": _p(0.20, 1.50),
    "grok-3": _p(3.00, 15.00),
    "grok-3-fast": _p(5.00, 25.00),
    "grok-3-mini": _p(0.30, 0.50),
    "grok-3-mini-fast": _p(0.60, 4.00),
    "grok-2": _p(2.00, 10.00),
    "grok-2-1212": _p(2.00, 10.00),
    "grok-2-vision": _p(2.00, 10.00),
    "grok-2-vision-1212": _p(2.00, 10.00),
    "grok-embedding-1": _p(0.00, 0),  # free during beta
}


def get_pricing(
    model: str, fallback: Optional[ModelPricing] = None
) -> Optional[ModelPricing]:
    return PRICING.get(model, fallback)


def has_pricing(model: str) -> bool:
    return model in PRICING
