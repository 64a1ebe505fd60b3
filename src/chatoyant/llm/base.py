from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Protocol, Sequence

from chatoyant import config

from .types import LLMMessage, LLMResult


@dataclass(frozen=True)
class LLMConfig:
    provider: str
    model: str
    api_key_env: str
    timeout_s: float = config.DEFAULT_TIMEOUT_S
    # defaults applied when a call does not pass its own
    temperature: Optional[float] = None
    reasoning: Optional[str] = None


class LLMClient(Protocol):
    """Small interface for "messages -> text" and "messages -> structured JSON" tasks."""

    def generate_text(
        self,
        *,
        messages: list[LLMMessage],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResult:
        raise NotImplementedError

    def generate_json(
        self,
        *,
        messages: list[LLMMessage],
        json_schema: dict[str, Any],
        schema_name: str = "output",
    ) -> LLMResult:
        raise NotImplementedError

    def generate_with_tools(
        self,
        *,
        messages: list[LLMMessage],
        tools: Sequence[Mapping[str, Any]],
        tool_choice: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResult:
        """One model turn with ``tools`` available.

        ``tools`` are ``{"name", "description", "parameters"}`` mappings and
        ``tool_choice`` is ``"auto"``, ``"none"`` or ``"required"``. Requested
        calls come back in ``LLMResult.tool_calls``.
        """
        raise NotImplementedError
