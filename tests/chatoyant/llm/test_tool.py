import json

import pytest

from chatoyant.llm import Tool, ToolCall, ToolContext, create_tool
from chatoyant.schema import Schema

CTX = ToolContext(model="gpt-4o", provider="openai")


class WeatherArgs(Schema):
    city = Schema.String(min_length=1)
    unit = Schema.Enum(["celsius", "fahrenheit"], default="celsius")


class WeatherReport(Schema):
    temp = Schema.Number()


def _weather_tool(execute=None):
    return Tool(
        name="get_weather",
        description="Current weather for a city",
        parameters=WeatherArgs,
        execute=execute or (lambda args, ctx: {"temp": 21.5}),
        result_schema=WeatherReport,
    )


def test_definition_describes_parameters_as_json_schema():
    spec = _weather_tool().spec()

    assert spec["name"] == "get_weather"
    assert spec["description"] == "Current weather for a city"
    assert spec["parameters"] == {
        "type": "object",
        "properties": {
            "city": {"type": "string", "minLength": 1},
            "unit": {"default": "celsius", "enum": ["celsius", "fahrenheit"]},
        },
        "required": ["city"],
    }


def test_parse_args_fills_defaults_without_touching_the_template():
    tool = _weather_tool()

    assert tool.parse_args({"city": "Paris"}) == {"city": "Paris", "unit": "celsius"}
    assert tool.parameters.city == ""
    assert tool.validate_args({"city": "Oslo", "unit": "fahrenheit"})
    assert not tool.validate_args({"city": ""})


def test_execute_call_success_receives_args_and_context():
    seen = {}

    def execute(args, ctx):
        seen.update(args=args, ctx=ctx)
        return {"temp": 21.5}

    call = ToolCall("c1", "get_weather", {"city": "Paris"})
    result = _weather_tool(execute).execute_call(call, CTX)

    assert result.success
    assert result.id == "c1"
    assert json.loads(result.content) == {"temp": 21.5}
    assert seen == {"args": {"city": "Paris", "unit": "celsius"}, "ctx": CTX}


def test_execute_call_failures_are_reported_not_raised():
    def boom(args, ctx):
        raise RuntimeError("boom")

    bad_args = _weather_tool().execute_call(ToolCall("c1", "get_weather", {"city": 3}), CTX)
    raised = _weather_tool(boom).execute_call(ToolCall("c2", "get_weather", {"city": "x"}), CTX)
    bad_result = _weather_tool(lambda a, c: {"temp": "hot"}).execute_call(
        ToolCall("c3", "get_weather", {"city": "x"}), CTX
    )

    assert not bad_args.success
    assert bad_args.error.startswith("Invalid arguments for tool get_weather")
    assert (raised.success, raised.error, raised.content) == (False, "boom", "boom")
    assert bad_result.error == "Invalid result from tool get_weather"


def test_tool_requires_a_complete_definition():
    with pytest.raises(TypeError):
        Tool(name="", description="d", parameters=WeatherArgs, execute=lambda a, c: None)
    with pytest.raises(TypeError):
        Tool(name="t", description="d", parameters=WeatherArgs, execute="not callable")
    with pytest.raises(TypeError):
        Tool(name="t", description="d", parameters=None, execute=lambda a, c: None)


def test_create_tool_accepts_instances():
    from chatoyant.schema import create

    tool = create_tool("echo", "Echo the city", create(WeatherArgs), lambda a, c: a)

    assert isinstance(tool, Tool)
    assert tool.result_schema is None
    assert tool.validate_result("anything")
