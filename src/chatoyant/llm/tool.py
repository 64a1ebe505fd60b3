"""Callable tools whose arguments are declared with ``Schema``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional

from chatoyant import logger as logger_mod
from chatoyant.schema import (
    SchemaError,
    SchemaView,
    clone,
    create,
    parse,
    to_json,
    to_object,
    validate,
    wrap,
)

from .types import ToolCall, ToolResult

log = logger_mod.get_logger()


@dataclass(frozen=True)
class ToolContext:
    model: str
    provider: str


def _as_view(schema: Any) -> SchemaView:
    return create(schema) if isinstance(schema, type) else wrap(schema)


class Tool:
    """A function the model may call.

    ``parameters`` (a schema class or instance) describes the arguments the
    model must send; ``execute(args, ctx)`` receives them as a plain dict
    after validation. An optional ``result_schema`` checks what ``execute``
    returns.

    Example:
        class WeatherParams(Schema):
            city = Schema.String(description="City name")

        weather = Tool(
            name="get_weather",
            description="Current weather for a city",
            parameters=WeatherParams,
            execute=lambda args, ctx: {"temp_c": 21, "city": args["city"]},
        )
    """

    def __init__(
        self,
        *,
        name: str,
        description: str,
        parameters: Any,
        execute: Callable[[dict[str, Any], ToolContext], Any],
        result_schema: Any = None,
    ):
        if not name or not isinstance(name, str):
            raise TypeError("Tool name is required and must be a string")
        if not description or not isinstance(description, str):
            raise TypeError("Tool description is required and must be a string")
        if parameters is None:
            raise TypeError("Tool parameters schema is required")
        if not callable(execute):
            raise TypeError("Tool execute function is required")

        self.name = name
        self.description = description
        self.parameters = _as_view(parameters)
        self.result_schema: Optional[SchemaView] = (
            _as_view(result_schema) if result_schema is not None else None
        )
        self._execute = execute

    def __repr__(self) -> str:
        return f"Tool(name={self.name!r})"

    def parameters_schema(self) -> dict[str, Any]:
        document = to_json(self.parameters)
        document.pop("$schema", None)
        return document

    def spec(self) -> dict[str, Any]:
        """Provider-neutral definition handed to ``generate_with_tools``."""

        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameters_schema(),
        }

    def validate_args(self, args: Any) -> bool:
        return validate(self.parameters, args).valid

    def parse_args(self, args: Any) -> dict[str, Any]:
        """Validated arguments with defaults filled in. Raises ``SchemaError``."""

        instance = clone(self.parameters)
        parse(instance, args)
        return to_object(instance)

    def validate_result(self, result: Any) -> bool:
        if self.result_schema is None:
            return True
        return validate(self.result_schema, result).valid

    def execute(self, args: dict[str, Any], ctx: ToolContext) -> Any:
        return self._execute(args, ctx)

    def execute_call(self, call: ToolCall, ctx: ToolContext) -> ToolResult:
        """Validate, run and check one call.

        Failures become an unsuccessful ``ToolResult`` whose error text is
        sent back to the model.
        """

        try:
            args = self.parse_args(call.args)
        except SchemaError as e:
            error = f"Invalid arguments for tool {self.name}: {e}"
            log.warning(error)
            return ToolResult(call.id, success=False, error=error)

        try:
            result = self.execute(args, ctx)
        except Exception as e:  # reported back to the model
            log.warning(f"Tool {self.name} raised {type(e).__name__}: {e}")
            return ToolResult(call.id, success=False, error=str(e) or type(e).__name__)

        if not self.validate_result(result):
            error = f"Invalid result from tool {self.name}"
            return ToolResult(call.id, success=False, error=error)
        return ToolResult(call.id, result=result)


def create_tool(
    name: str,
    description: str,
    parameters: Any,
    execute: Callable[[dict[str, Any], ToolContext], Any],
    result_schema: Optional[Any] = None,
) -> Tool:
    return Tool(
        name=name,
        description=description,
        parameters=parameters,
        execute=execute,
        result_schema=result_schema,
    )


def unknown_tool_result(call: ToolCall) -> ToolResult:
    error = f"Unknown tool: {call.name}"
    return ToolResult(call.id, result={"error": error}, success=False, error=error)
