"""Multi-turn conversations with history, tool calling and persistence."""

from __future__ import annotations

import dataclasses
import json
from typing import Any, Iterable, Mapping, Optional, Union

from chatoyant import config
from chatoyant import logger as logger_mod
from chatoyant.schema import SchemaView

from .base import LLMClient
from .errors import LLMError
from .factory import build_llm
from .presets import resolve_model
from .shortcuts import fill_schema
from .tool import Tool, ToolContext, unknown_tool_result
from .types import LLMMessage, LLMResult, ToolCall, ToolResult

log = logger_mod.get_logger()

DEFAULT_MAX_TOOL_ITERATIONS = 5
TOOL_ERROR_MODES = ("respond", "raise")
_DEFAULT_KEYS = ("provider", "creativity", "reasoning", "timeout_s")


class Chat:
    """A conversation that remembers its messages.

    Builder methods (``system``, ``user``, ``assistant``, ``add_tool`` ...)
    return the chat so calls can be chained. Every ``generate*`` call sends
    the whole history and appends the assistant's answer to it.

    With tools registered, ``generate`` runs a tool loop: each model turn
    may request calls, which are executed and answered, until the model
    replies with text or ``max_tool_iterations`` turns have been spent.
    Intermediate tool traffic is not kept in the history.

    ``model`` accepts presets (``fast``, ``best`` ...). ``provider``,
    ``creativity``, ``reasoning`` and ``timeout_s`` are defaults passed to
    ``build_llm`` on every call.
    """

    def __init__(
        self,
        model: Optional[str] = None,
        *,
        provider: Optional[str] = None,
        creativity: Optional[str] = None,
        reasoning: Optional[str] = None,
        timeout_s: Optional[float] = None,
        max_tool_iterations: int = DEFAULT_MAX_TOOL_ITERATIONS,
        on_tool_error: str = "respond",
    ):
        if on_tool_error not in TOOL_ERROR_MODES:
            raise ValueError(f"on_tool_error must be one of {TOOL_ERROR_MODES}")
        if max_tool_iterations < 1:
            raise ValueError("max_tool_iterations must be at least 1")

        self.defaults: dict[str, Any] = {
            key: value
            for key, value in (
                ("provider", provider),
                ("creativity", creativity),
                ("reasoning", reasoning),
                ("timeout_s", timeout_s),
            )
            if value is not None
        }
        hint = (provider or "").lower().strip() or None
        self.model: str = resolve_model(model or config.DEFAULT_MODEL, hint)
        self.max_tool_iterations = max_tool_iterations
        self.on_tool_error = on_tool_error
        self.messages: list[LLMMessage] = []
        self.tools: list[Tool] = []

    def __repr__(self) -> str:
        return f"Chat(model={self.model!r}, messages={len(self.messages)}, tools={len(self.tools)})"

    # Messages

    def system(self, content: str, metadata: Optional[dict[str, Any]] = None) -> "Chat":
        return self.add_message(LLMMessage(role="system", content=content, metadata=metadata))

    def user(self, content: str, metadata: Optional[dict[str, Any]] = None) -> "Chat":
        return self.add_message(LLMMessage(role="user", content=content, metadata=metadata))

    def assistant(self, content: str, metadata: Optional[dict[str, Any]] = None) -> "Chat":
        return self.add_message(LLMMessage(role="assistant", content=content, metadata=metadata))

    def add_message(self, message: LLMMessage) -> "Chat":
        self.messages.append(message)
        return self

    def add_messages(self, messages: Iterable[LLMMessage]) -> "Chat":
        self.messages.extend(messages)
        return self

    def clear_messages(self) -> "Chat":
        self.messages = []
        return self

    # Tools

    def add_tool(self, tool: Tool) -> "Chat":
        self.tools.append(tool)
        return self

    def add_tools(self, tools: Iterable[Tool]) -> "Chat":
        self.tools.extend(tools)
        return self

    def clear_tools(self) -> "Chat":
        self.tools = []
        return self

    # Generation

    def _client(self) -> LLMClient:
        return build_llm(self.model, **self.defaults)

    def generate(
        self, *, temperature: Optional[float] = None, max_tokens: Optional[int] = None
    ) -> str:
        """Next assistant reply as text; runs the tool loop when tools are registered."""

        if self.tools:
            return self._generate_with_tool_loop(temperature=temperature, max_tokens=max_tokens)
        return self.generate_with_result(temperature=temperature, max_tokens=max_tokens).text

    def generate_with_result(
        self, *, temperature: Optional[float] = None, max_tokens: Optional[int] = None
    ) -> LLMResult:
        """Like ``generate`` without tools, returning usage and cost as well."""

        result = self._client().generate_text(
            messages=list(self.messages), temperature=temperature, max_tokens=max_tokens
        )
        self.assistant(result.text)
        return result

    def generate_data(self, schema: Any) -> SchemaView:
        """Structured reply parsed into ``schema`` (class or instance).

        The answer is stored in the history as its JSON text.
        """

        instance, result = fill_schema(self._client(), list(self.messages), schema)
        self.assistant(json.dumps(result.output_json, ensure_ascii=False))
        return instance

    def _execute_tool_calls(
        self, calls: Iterable[ToolCall], ctx: ToolContext
    ) -> list[ToolResult]:
        by_name = {tool.name: tool for tool in self.tools}
        results = []
        for call in calls:
            tool = by_name.get(call.name)
            result = tool.execute_call(call, ctx) if tool else unknown_tool_result(call)
            if not result.success and self.on_tool_error == "raise":
                raise LLMError(result.error or f"Tool {call.name} failed")
            results.append(result)
        return results

    def _generate_with_tool_loop(self, **params: Any) -> str:
        llm = self._client()
        specs = [tool.spec() for tool in self.tools]
        local = list(self.messages)

        for iteration in range(1, self.max_tool_iterations + 1):
            result = llm.generate_with_tools(messages=local, tools=specs, **params)
            if not result.tool_calls:
                self.assistant(result.text)
                return result.text

            log.debug(f"Tool loop iteration {iteration}: {[c.name for c in result.tool_calls]}")
            ctx = ToolContext(model=result.model, provider=result.provider)
            outcomes = self._execute_tool_calls(result.tool_calls, ctx)
            local.append(
                LLMMessage(role="assistant", content=result.text, tool_calls=result.tool_calls)
            )
            local.extend(
                LLMMessage(role="tool", content=outcome.content, tool_call_id=outcome.id)
                for outcome in outcomes
            )

        log.warning(
            f"Tool loop stopped after {self.max_tool_iterations} iterations; "
            "asking for a final answer"
        )
        final = llm.generate_with_tools(messages=local, tools=specs, tool_choice="none", **params)
        self.assistant(final.text)
        return final.text

    # Serialization

    def to_json(self) -> dict[str, Any]:
        document: dict[str, Any] = {
            "model": self.model,
            "messages": [m.to_json() for m in self.messages],
        }
        if self.defaults:
            document["config"] = {"defaults": dict(self.defaults)}
        return document

    def stringify(self, pretty: bool = False) -> str:
        return json.dumps(self.to_json(), indent=2 if pretty else None, ensure_ascii=False)

    @classmethod
    def from_json(cls, data: Union[str, Mapping[str, Any]]) -> "Chat":
        """Rebuild a chat from ``to_json`` output (or its string form). Tools are not restored."""

        if isinstance(data, str):
            data = json.loads(data)
        if not isinstance(data, Mapping):
            raise TypeError("Invalid chat JSON")

        defaults = ((data.get("config") or {}).get("defaults")) or {}
        chat = cls(
            data.get("model") if isinstance(data.get("model"), str) else None,
            **{k: v for k, v in defaults.items() if k in _DEFAULT_KEYS},
        )
        messages = data.get("messages")
        if isinstance(messages, list):
            chat.messages = [LLMMessage.from_json(m) for m in messages]
        return chat

    def clone(self) -> "Chat":
        """Independent copy sharing only the (stateless) tool objects."""

        twin = Chat(
            self.model,
            max_tool_iterations=self.max_tool_iterations,
            on_tool_error=self.on_tool_error,
            **self.defaults,
        )
        twin.messages = [
            dataclasses.replace(m, metadata=dict(m.metadata)) if m.metadata else m
            for m in self.messages
        ]
        twin.tools = list(self.tools)
        return twin

    fork = clone
