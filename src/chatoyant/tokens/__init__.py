"""Token estimation, context windows and cost accounting."""

from .chunking import estimate_chunk_count, paginate_messages, split_text
from .context_windows import CONTEXT_WINDOWS, get_context_window, has_context_window
from .cost import (
    CostResult,
    calculate_batch_cost,
    calculate_cost,
    calculate_cost_custom,
    estimate_cost,
    get_cost_per_token,
)
from .estimate import (
    TOKEN_RATIOS,
    estimate_prompt_tokens,
    estimate_tokens,
    estimate_tokens_many,
    estimate_tokens_with_ratio,
)
from .messages import (
    calculate_available_tokens,
    estimate_chat_tokens,
    estimate_message_tokens,
    estimate_system_prompt_tokens,
    fit_messages,
    get_message_overhead,
    messages_fit_budget,
    truncate_content,
)
from .pricing import PRICING, ModelPricing, get_pricing, has_pricing

__all__ = [
    "CONTEXT_WINDOWS",
    "PRICING",
    "TOKEN_RATIOS",
    "CostResult",
    "ModelPricing",
    "calculate_available_tokens",
    "calculate_batch_cost",
    "calculate_cost",
    "calculate_cost_custom",
    "estimate_chat_tokens",
    "estimate_chunk_count",
    "estimate_cost",
    "estimate_message_tokens",
    "estimate_prompt_tokens",
    "estimate_system_prompt_tokens",
    "estimate_tokens",
    "estimate_tokens_many",
    "estimate_tokens_with_ratio",
    "fit_messages",
    "get_context_window",
    "get_cost_per_token",
    "get_message_overhead",
    "get_pricing",
    "has_context_window",
    "has_pricing",
    "messages_fit_budget",
    "paginate_messages",
    "split_text",
    "truncate_content",
]
