from __future__ import annotations

import json
import os
from typing import Any, Mapping, Optional, Sequence

from chatoyant import logger as logger_mod
from chatoyant.providers import anthropic_api, openai_api, xai_api
from chatoyant.providers.errors import ProviderAPIError, ProviderError
from chatoyant.providers.http import RequestOptions
from chatoyant.providers.registry import get_base_url
from chatoyant.providers.schema_utils import make_openai_strict, strip_strict_nulls
from chatoyant.tokens.cost import calculate_cost

from ._json import parse_json, validate_json
from .base import LLMClient, LLMConfig
from .errors import LLMError, LLMValidationError
from .presets import get_reasoning_config, supports_reasoning
from .types import LLMMessage, LLMResult, TokenUsage, ToolCall

log = logger_mod.get_logger()

JSON_ONLY_INSTRUCTION = (
    "Return ONLY valid JSON matching the requested schema. No markdown, no prose."
)
DEFAULT_ANTHROPIC_MAX_TOKENS = 4096
# room left for the visible answer when a thinking budget is set
THINKING_HEADROOM_TOKENS = 4096


def _request_options(config: LLMConfig) -> RequestOptions:
    api_key = os.getenv(config.api_key_env)
    if not api_key:
        raise ProviderError.missing_api_key(config.provider)
    return RequestOptions(
        api_key=api_key,
        base_url=get_base_url(config.provider),
        timeout_s=config.timeout_s,
    )


def _result(
    config: LLMConfig,
    text: str,
    usage: TokenUsage,
    output_json: Optional[dict[str, Any]] = None,
    tool_calls: tuple[ToolCall, ...] = (),
) -> LLMResult:
    cost = calculate_cost(
        model=config.model,
        input_tokens=usage.input_tokens,
        output_tokens=usage.output_tokens,
        cached_tokens=usage.cached_tokens,
    )
    return LLMResult(
        provider=config.provider,
        model=config.model,
        text=text,
        output_json=output_json,
        usage=usage,
        cost=cost,
        tool_calls=tool_calls,
    )


def _parse_tool_arguments(name: str, raw: Any) -> dict[str, Any]:
    if isinstance(raw, Mapping):
        return dict(raw)
    try:
        args = json.loads(raw or "{}")
    except ValueError as e:
        raise LLMValidationError(f"Tool call {name} has non-JSON arguments: {e}") from e
    if not isinstance(args, dict):
        raise LLMValidationError(f"Tool call {name} arguments must be a JSON object")
    return args


class _ChatCompletionsLLM(LLMClient):
    """Shared implementation for OpenAI-compatible chat completion APIs.

    Supports two modes for structured output:
    - Structured Outputs (preferred) via a strict ``json_schema`` response format
    - Fallback to JSON-only text output (still validated)
    """

    _api: Any = None
    _label = ""
    # xAI selects reasoning through the model name instead
    _reasoning_param = False

    def __init__(self, config: LLMConfig):
        self._cfg = config
        self._options = _request_options(config)

    @staticmethod
    def _usage(completion: dict[str, Any]) -> TokenUsage:
        usage = completion.get("usage") or {}
        details = usage.get("prompt_tokens_details") or {}
        return TokenUsage(
            input_tokens=usage.get("prompt_tokens") or 0,
            output_tokens=usage.get("completion_tokens") or 0,
            cached_tokens=details.get("cached_tokens") or 0,
        )

    @staticmethod
    def _text(completion: dict[str, Any]) -> str:
        choices = completion.get("choices") or []
        if not choices:
            raise LLMError("Response contained no choices")
        return ((choices[0].get("message") or {}).get("content") or "").strip()

    def _params(self, temperature: Optional[float], max_tokens: Optional[int]) -> dict[str, Any]:
        params: dict[str, Any] = {
            "temperature": temperature if temperature is not None else self._cfg.temperature,
            "max_tokens": max_tokens,
        }
        if self._reasoning_param and self._cfg.reasoning and supports_reasoning(self._cfg.model):
            effort = get_reasoning_config(self._cfg.reasoning, self._cfg.provider)
            params["reasoning_effort"] = effort["reasoning_effort"]
        return params

    def _chat(self, messages: list[dict[str, Any]], **params: Any) -> dict[str, Any]:
        return self._api.chat(messages, self._options, model=self._cfg.model, **params)

    def generate_text(
        self,
        *,
        messages: list[LLMMessage],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResult:
        completion = self._chat(
            [m.to_dict() for m in messages], **self._params(temperature, max_tokens)
        )
        return _result(self._cfg, self._text(completion), self._usage(completion))

    def generate_json(
        self,
        *,
        messages: list[LLMMessage],
        json_schema: dict[str, Any],
        schema_name: str = "output",
    ) -> LLMResult:
        payload = [m.to_dict() for m in messages]

        # Prefer strict Structured Outputs
        try:
            completion = self._chat(
                payload,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": schema_name,
                        "schema": make_openai_strict(json_schema),
                        "strict": True,
                    },
                },
            )
            raw = self._text(completion)
            data = strip_strict_nulls(parse_json(raw), json_schema)
            validate_json(data, json_schema)
            return _result(self._cfg, raw, self._usage(completion), data)
        except ProviderAPIError as e:
            if e.is_auth_error:
                raise
            log.warning(
                f"{self._label} structured output failed; falling back to JSON-only. err={e}"
            )
        except LLMError as e:
            log.warning(
                f"{self._label} structured output failed; falling back to JSON-only. err={e}"
            )

        # Fallback: JSON-only response
        instruction = f"{JSON_ONLY_INSTRUCTION}\nJSON Schema:\n{json.dumps(json_schema)}"
        completion = self._chat(
            payload + [{"role": "system", "content": instruction}],
            temperature=0.2,
        )
        raw = self._text(completion)
        data = parse_json(raw)
        validate_json(data, json_schema)
        return _result(self._cfg, raw, self._usage(completion), data)

    def generate_with_tools(
        self,
        *,
        messages: list[LLMMessage],
        tools: Sequence[Mapping[str, Any]],
        tool_choice: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResult:
        outcome = self._api.chat_with_tools(
            [m.to_dict() for m in messages],
            [{"type": "function", "function": dict(spec)} for spec in tools],
            self._options,
            model=self._cfg.model,
            tool_choice=tool_choice,
            **self._params(temperature, max_tokens),
        )
        usage = self._usage(outcome)
        if outcome["type"] != "tool_calls":
            return _result(self._cfg, outcome["content"].strip(), usage)

        calls = []
        for raw in outcome["tool_calls"]:
            fn = raw.get("function") or {}
            name = fn.get("name") or ""
            calls.append(
                ToolCall(
                    id=raw.get("id") or "",
                    name=name,
                    args=_parse_tool_arguments(name, fn.get("arguments")),
                )
            )
        log.debug(f"{self._label} requested tools: {[c.name for c in calls]}")
        return _result(self._cfg, "", usage, tool_calls=tuple(calls))


class OpenAILLM(_ChatCompletionsLLM):
    _api = openai_api
    _label = "OpenAI"
    _reasoning_param = True


class XAILLM(_ChatCompletionsLLM):
    _api = xai_api
    _label = "xAI"


_ANTHROPIC_TOOL_CHOICE = {"auto": "auto", "none": "none", "required": "any"}


class AnthropicLLM(LLMClient):
    """Anthropic client; structured output goes through a forced tool call."""

    def __init__(self, config: LLMConfig, max_tokens: int = DEFAULT_ANTHROPIC_MAX_TOKENS):
        self._cfg = config
        self._options = _request_options(config)
        self._max_tokens = max_tokens

    @staticmethod
    def _split(messages: list[LLMMessage]) -> tuple[Optional[str], list[dict[str, Any]]]:
        """Pull system prompts out and convert tool traffic to content blocks.

        Consecutive tool results are merged into one user turn.
        """

        system = [m.content for m in messages if m.role == "system"]
        rest: list[dict[str, Any]] = []
        for m in messages:
            if m.role == "system":
                continue
            if m.role == "tool":
                block = {
                    "type": "tool_result",
                    "tool_use_id": m.tool_call_id,
                    "content": m.content,
                }
                last = rest[-1] if rest else None
                if last and last["role"] == "user" and isinstance(last["content"], list):
                    last["content"].append(block)
                else:
                    rest.append({"role": "user", "content": [block]})
            elif m.tool_calls:
                blocks: list[dict[str, Any]] = []
                if m.content:
                    blocks.append({"type": "text", "text": m.content})
                blocks.extend(
                    {"type": "tool_use", "id": c.id, "name": c.name, "input": c.args}
                    for c in m.tool_calls
                )
                rest.append({"role": "assistant", "content": blocks})
            else:
                rest.append({"role": m.role, "content": m.content})
        return ("\n\n".join(system) if system else None), rest

    @staticmethod
    def _usage(response: dict[str, Any]) -> TokenUsage:
        usage = response.get("usage") or {}
        cached = usage.get("cache_read_input_tokens") or 0
        return TokenUsage(
            input_tokens=(usage.get("input_tokens") or 0) + cached,
            output_tokens=usage.get("output_tokens") or 0,
            cached_tokens=cached,
        )

    def _params(
        self, temperature: Optional[float], max_tokens: Optional[int]
    ) -> tuple[dict[str, Any], dict[str, Any]]:
        """Keyword arguments and extra body fields for ``create_message``."""

        limit = max_tokens or self._max_tokens
        extra: dict[str, Any] = {}
        if self._cfg.reasoning:
            thinking = get_reasoning_config(self._cfg.reasoning, "anthropic").get("thinking")
            if thinking:
                extra["thinking"] = dict(thinking)
                # max_tokens must exceed the thinking budget
                if limit <= thinking["budget_tokens"]:
                    limit = thinking["budget_tokens"] + THINKING_HEADROOM_TOKENS
        kwargs = {
            "model": self._cfg.model,
            "max_tokens": limit,
            "temperature": temperature if temperature is not None else self._cfg.temperature,
        }
        return kwargs, extra

    def generate_text(
        self,
        *,
        messages: list[LLMMessage],
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResult:
        system, rest = self._split(messages)
        kwargs, extra = self._params(temperature, max_tokens)
        response = anthropic_api.create_message(
            rest, self._options, system=system, request_options=extra or None, **kwargs
        )
        text = anthropic_api.extract_text(response.get("content") or []).strip()
        return _result(self._cfg, text, self._usage(response))

    def generate_json(
        self,
        *,
        messages: list[LLMMessage],
        json_schema: dict[str, Any],
        schema_name: str = "output",
    ) -> LLMResult:
        system, rest = self._split(messages)
        response = anthropic_api.create_message(
            rest,
            self._options,
            model=self._cfg.model,
            max_tokens=self._max_tokens,
            system=system,
            request_options=anthropic_api.structured_tool(
                {"name": schema_name, "schema": json_schema}
            ),
        )
        tool_uses = anthropic_api.extract_tool_uses(response.get("content") or [])
        if not tool_uses:
            raise LLMValidationError("Anthropic response contained no tool call")
        data = tool_uses[0].get("input") or {}
        validate_json(data, json_schema)
        return _result(self._cfg, json.dumps(data), self._usage(response), data)

    def generate_with_tools(
        self,
        *,
        messages: list[LLMMessage],
        tools: Sequence[Mapping[str, Any]],
        tool_choice: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> LLMResult:
        system, rest = self._split(messages)
        kwargs, extra = self._params(temperature, max_tokens)
        extra["tools"] = [
            {
                "name": spec["name"],
                "description": spec.get("description") or "",
                "input_schema": spec["parameters"],
            }
            for spec in tools
        ]
        if tool_choice is not None:
            extra["tool_choice"] = {"type": _ANTHROPIC_TOOL_CHOICE[tool_choice]}
        outcome = anthropic_api.message_with_tools(
            rest, self._options, system=system, request_options=extra, **kwargs
        )
        usage = self._usage(outcome)
        if outcome["type"] != "tool_use":
            return _result(self._cfg, outcome["text"].strip(), usage)

        calls = tuple(
            ToolCall(
                id=use.get("id") or "",
                name=use.get("name") or "",
                args=_parse_tool_arguments(use.get("name") or "", use.get("input") or {}),
            )
            for use in outcome["tool_uses"]
        )
        log.debug(f"Anthropic requested tools: {[c.name for c in calls]}")
        return _result(self._cfg, "", usage, tool_calls=calls)
