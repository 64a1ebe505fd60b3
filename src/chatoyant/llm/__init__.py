"""Provider-neutral LLM clients (OpenAI / Anthropic / xAI).

Design goals:
- Keep provider-specific request shapes isolated in ``chatoyant.providers``.
- Provide a small, stable interface for "generate text" and "generate structured JSON".
- Validate output against a JSON Schema for deterministic downstream use.
- Offer a stateful ``Chat`` with schema-typed ``Tool`` calling on top.
"""

from .base import LLMClient, LLMConfig
from .chat import Chat
from .errors import LLMError, LLMValidationError
from .factory import build_llm
from .presets import (
    CREATIVITY_PRESETS,
    MODEL_PRESETS,
    REASONING_PRESETS,
    adjust_xai_model_for_reasoning,
    get_reasoning_config,
    is_model_preset,
    resolve_creativity,
    resolve_model,
    resolve_model_preset,
    supports_reasoning,
)
from .shortcuts import fill_schema, gen_data, gen_text
from .tool import Tool, ToolContext, create_tool
from .types import LLMMessage, LLMResult, TokenUsage, ToolCall, ToolResult

__all__ = [
    "CREATIVITY_PRESETS",
    "Chat",
    "LLMClient",
    "LLMConfig",
    "LLMError",
    "LLMMessage",
    "LLMResult",
    "LLMValidationError",
    "MODEL_PRESETS",
    "REASONING_PRESETS",
    "TokenUsage",
    "Tool",
    "ToolCall",
    "ToolContext",
    "ToolResult",
    "adjust_xai_model_for_reasoning",
    "build_llm",
    "create_tool",
    "fill_schema",
    "gen_data",
    "gen_text",
    "get_reasoning_config",
    "is_model_preset",
    "resolve_creativity",
    "resolve_model",
    "resolve_model_preset",
    "supports_reasoning",
]
