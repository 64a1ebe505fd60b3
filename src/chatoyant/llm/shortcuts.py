"""One-call helpers: prompt in, text or populated schema out."""

from __future__ import annotations

import re
from typing import Any, Optional

from chatoyant import logger as logger_mod
from chatoyant.schema import SchemaView, create, parse, to_json, unwrap, wrap

from .base import LLMClient
from .factory import build_llm
from .types import LLMMessage, LLMResult

log = logger_mod.get_logger()


def _messages(prompt: str, system: Optional[str]) -> list[LLMMessage]:
    messages = [LLMMessage(role="system", content=system)] if system else []
    messages.append(LLMMessage(role="user", content=prompt))
    return messages


def fill_schema(
    llm: LLMClient, messages: list[LLMMessage], schema: Any
) -> tuple[SchemaView, LLMResult]:
    """Ask ``llm`` for data shaped like ``schema`` and parse it into an instance.

    ``schema`` is a schema class (a fresh instance is created) or an existing
    instance (populated in place).
    """

    instance = create(schema) if isinstance(schema, type) else wrap(schema)
    document = to_json(instance)
    document.pop("$schema", None)
    name = re.sub(r"[^a-zA-Z0-9_-]", "_", type(unwrap(instance)).__name__)

    result = llm.generate_json(messages=messages, json_schema=document, schema_name=name)
    log.debug(f"fill_schema {name}: {result.usage.total_tokens} tokens, ${result.cost.total:.6f}")
    parse(instance, result.output_json)
    return instance, result


def gen_text(
    prompt: str, model: Optional[str] = None, system: Optional[str] = None, **kw: Any
) -> str:
    """Generate a plain-text answer. ``kw`` goes to ``generate_text``."""

    llm = build_llm(model)
    return llm.generate_text(messages=_messages(prompt, system), **kw).text


def gen_data(
    prompt: str,
    schema: Any,
    model: Optional[str] = None,
    system: Optional[str] = None,
    **kw: Any,
) -> SchemaView:
    """Generate structured data and return it as a populated schema instance.

    ``schema`` is a schema class (a fresh instance is created) or an existing
    instance (populated in place). ``kw`` goes to ``build_llm``.
    """

    instance, _ = fill_schema(build_llm(model, **kw), _messages(prompt, system), schema)
    return instance
