from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Literal, Mapping, Optional

from chatoyant.tokens.cost import ZERO_COST, CostResult

Role = Literal["system", "user", "assistant", "tool"]
ROLES = ("system", "user", "assistant", "tool")


@dataclass(frozen=True)
class ToolCall:
    """A tool invocation requested by the model."""

    id: str
    name: str
    args: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": json.dumps(self.args)},
        }


@dataclass(frozen=True)
class ToolResult:
    id: str
    result: Any = None
    success: bool = True
    error: Optional[str] = None

    @property
    def content(self) -> str:
        """What the model gets back: the JSON result, or the error text."""

        if self.success:
            return json.dumps(self.result, ensure_ascii=False, default=str)
        return self.error or "Tool call failed"


@dataclass(frozen=True)
class LLMMessage:
    role: Role
    content: str
    name: Optional[str] = None
    tool_call_id: Optional[str] = None
    tool_calls: tuple[ToolCall, ...] = ()
    metadata: Optional[dict[str, Any]] = None

    def __post_init__(self) -> None:
        if self.role not in ROLES:
            raise TypeError(f"Invalid role {self.role!r}; expected one of {ROLES}")
        if not isinstance(self.content, str):
            raise TypeError("Message content must be a string")

    def to_dict(self) -> dict[str, Any]:
        """OpenAI-style chat message (also accepted by xAI)."""

        out: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.name:
            out["name"] = self.name
        if self.tool_call_id:
            out["tool_call_id"] = self.tool_call_id
        if self.tool_calls:
            out["content"] = self.content or None
            out["tool_calls"] = [call.to_dict() for call in self.tool_calls]
        return out

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {"role": self.role, "content": self.content}
        if self.name is not None:
            out["name"] = self.name
        if self.tool_call_id is not None:
            out["tool_call_id"] = self.tool_call_id
        if self.tool_calls:
            out["tool_calls"] = [
                {"id": c.id, "name": c.name, "args": c.args} for c in self.tool_calls
            ]
        if self.metadata is not None:
            out["metadata"] = self.metadata
        return out

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "LLMMessage":
        if not isinstance(data, Mapping):
            raise TypeError("Invalid message JSON: must be an object")
        if not isinstance(data.get("role"), str) or not isinstance(data.get("content"), str):
            raise TypeError("Invalid message JSON: missing role or content")
        calls = tuple(
            ToolCall(id=c["id"], name=c["name"], args=dict(c.get("args") or {}))
            for c in data.get("tool_calls") or ()
        )
        metadata = data.get("metadata")
        return cls(
            role=data["role"],
            content=data["content"],
            name=data.get("name"),
            tool_call_id=data.get("tool_call_id"),
            tool_calls=calls,
            metadata=dict(metadata) if isinstance(metadata, Mapping) else None,
        )


@dataclass(frozen=True)
class TokenUsage:
    input_tokens: int = 0
    output_tokens: int = 0
    cached_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


@dataclass(frozen=True)
class LLMResult:
    """Provider-neutral result container."""

    provider: str
    model: str
    text: str
    output_json: Optional[dict[str, Any]] = None
    usage: TokenUsage = field(default_factory=TokenUsage)
    cost: CostResult = ZERO_COST
    tool_calls: tuple[ToolCall, ...] = ()
