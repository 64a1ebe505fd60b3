import json

import pytest

from chatoyant.llm import Chat, LLMError, Tool
from chatoyant.schema import Schema


class WeatherArgs(Schema):
    city = Schema.String()


class Recipe(Schema):
    title = Schema.String()
    minutes = Schema.Integer()


def _completion(content):
    return {
        "choices": [{"message": {"role": "assistant", "content": content}}],
        "usage": {"prompt_tokens": 10, "completion_tokens": 5},
    }


def _tool_call_completion(name="get_weather", arguments='{"city": "Paris"}', call_id="call_1"):
    call = {"id": call_id, "type": "function", "function": {"name": name, "arguments": arguments}}
    return {
        "choices": [{"message": {"role": "assistant", "content": None, "tool_calls": [call]}}],
        "usage": {},
    }


def _weather_tool(calls=None, execute=None):
    def record(args, ctx):
        if calls is not None:
            calls.append((args, ctx))
        return {"temp": 21.5}

    return Tool(
        name="get_weather",
        description="Current weather for a city",
        parameters=WeatherArgs,
        execute=execute or record,
    )


def test_generate_sends_history_and_remembers_replies(fake_http, api_keys):
    fake_http.reply(_completion("Hello!"))
    fake_http.reply(_completion("Again!"))
    chat = Chat("gpt-4o").system("Be brief.").user("Hi")

    assert chat.generate() == "Hello!"
    assert [m.role for m in chat.messages] == ["system", "user", "assistant"]
    assert len(fake_http.last["json"]["messages"]) == 2

    chat.user("Once more")
    chat.generate()
    assert len(fake_http.last["json"]["messages"]) == 4
    assert chat.messages[-1].content == "Again!"


def test_generate_with_result_reports_usage(fake_http, api_keys):
    fake_http.reply(_completion("Hi"))

    result = Chat("gpt-4o").user("Hi").generate_with_result()

    assert result.text == "Hi"
    assert result.usage.input_tokens == 10
    assert result.usage.output_tokens == 5


def test_tool_loop_runs_calls_and_keeps_only_the_answer(fake_http, api_keys):
    fake_http.reply(_tool_call_completion())
    fake_http.reply(_completion("It is 21.5C in Paris."))
    calls = []
    chat = Chat("gpt-4o").user("Weather in Paris?").add_tool(_weather_tool(calls))

    assert chat.generate() == "It is 21.5C in Paris."

    first, second = (c["json"] for c in fake_http.calls)
    assert first["tools"][0]["function"]["name"] == "get_weather"
    assert first["tools"][0]["function"]["parameters"]["required"] == ["city"]
    assert second["messages"][1] == {
        "role": "assistant",
        "content": None,
        "tool_calls": [
            {
                "id": "call_1",
                "type": "function",
                "function": {"name": "get_weather", "arguments": '{"city": "Paris"}'},
            }
        ],
    }
    assert second["messages"][2] == {
        "role": "tool",
        "content": '{"temp": 21.5}',
        "tool_call_id": "call_1",
    }
    assert calls[0][0] == {"city": "Paris"}
    assert (calls[0][1].model, calls[0][1].provider) == ("gpt-4o", "openai")
    assert [m.role for m in chat.messages] == ["user", "assistant"]


def test_anthropic_tool_loop_uses_content_blocks(fake_http, api_keys):
    fake_http.reply(
        {
            "content": [
                {"type": "tool_use", "id": "tu_1", "name": "get_weather", "input": {"city": "Oslo"}}
            ],
            "usage": {"input_tokens": 3, "output_tokens": 2},
        }
    )
    fake_http.reply({"content": [{"type": "text", "text": "Cold."}], "usage": {}})
    chat = Chat("claude-3-haiku").system("Be brief.").user("Oslo?").add_tool(_weather_tool())

    assert chat.generate() == "Cold."

    first, second = (c["json"] for c in fake_http.calls)
    assert first["tools"][0]["input_schema"]["properties"] == {"city": {"type": "string"}}
    assert second["system"] == "Be brief."
    assert second["messages"][1:] == [
        {
            "role": "assistant",
            "content": [
                {"type": "tool_use", "id": "tu_1", "name": "get_weather", "input": {"city": "Oslo"}}
            ],
        },
        {
            "role": "user",
            "content": [
                {"type": "tool_result", "tool_use_id": "tu_1", "content": '{"temp": 21.5}'}
            ],
        },
    ]


def test_unknown_tool_is_answered_with_an_error(fake_http, api_keys):
    fake_http.reply(_tool_call_completion(name="get_time", arguments="{}"))
    fake_http.reply(_completion("Sorry."))
    chat = Chat("gpt-4o").user("Time?").add_tool(_weather_tool())

    assert chat.generate() == "Sorry."
    assert fake_http.last["json"]["messages"][-1]["content"] == "Unknown tool: get_time"


def test_tool_errors_raise_when_requested(fake_http, api_keys):
    def broken(args, ctx):
        raise RuntimeError("station offline")

    fake_http.reply(_tool_call_completion())
    chat = Chat("gpt-4o", on_tool_error="raise").user("Paris?")
    chat.add_tool(_weather_tool(execute=broken))

    with pytest.raises(LLMError, match="station offline"):
        chat.generate()
    assert len(chat.messages) == 1


def test_tool_loop_stops_after_max_iterations(fake_http, api_keys):
    fake_http.reply(_tool_call_completion())
    fake_http.reply(_completion("Giving up: 21.5C."))
    chat = Chat("gpt-4o", max_tool_iterations=1).user("Paris?").add_tool(_weather_tool())

    assert chat.generate() == "Giving up: 21.5C."
    assert fake_http.last["json"]["tool_choice"] == "none"
    assert len(fake_http.calls) == 2


def test_generate_data_fills_schema_and_records_json(fake_http, api_keys):
    fake_http.reply(_completion(json.dumps({"title": "Soup", "minutes": 20})))
    chat = Chat("gpt-4o").user("A quick recipe?")

    recipe = chat.generate_data(Recipe)

    assert (recipe.title, recipe.minutes) == ("Soup", 20)
    assert json.loads(chat.messages[-1].content) == {"title": "Soup", "minutes": 20}
    fmt = fake_http.last["json"]["response_format"]
    assert fmt["json_schema"]["name"] == "Recipe"


def test_presets_and_creativity_reach_the_request(fake_http, api_keys):
    fake_http.reply({"content": [{"type": "text", "text": "ok"}], "usage": {}})
    chat = Chat("fast", provider="anthropic", creativity="creative").user("Hi")

    chat.generate()

    assert chat.model == "claude-3-5-haiku-20241022"
    assert fake_http.last["json"]["model"] == "claude-3-5-haiku-20241022"
    assert fake_http.last["json"]["temperature"] == 1.0


def test_serialization_round_trip():
    chat = Chat("fast", creativity="precise").system("s").user("u", metadata={"k": 1})
    document = chat.to_json()

    assert document == {
        "model": "gpt-4o-mini",
        "messages": [
            {"role": "system", "content": "s"},
            {"role": "user", "content": "u", "metadata": {"k": 1}},
        ],
        "config": {"defaults": {"creativity": "precise"}},
    }
    assert Chat.from_json(chat.stringify()).to_json() == document
    assert Chat.from_json(document).to_json() == document
    assert chat.stringify(pretty=True).startswith('{\n  "model": "gpt-4o-mini"')
    with pytest.raises(TypeError):
        Chat.from_json("[1, 2]")


def test_clone_is_independent():
    chat = Chat("gpt-4o").user("u", metadata={"k": 1}).add_tool(_weather_tool())
    twin = chat.clone()

    twin.user("more")
    twin.messages[0].metadata["k"] = 2
    twin.clear_tools()

    assert len(chat.messages) == 1
    assert chat.messages[0].metadata == {"k": 1}
    assert len(chat.tools) == 1


def test_invalid_settings():
    with pytest.raises(ValueError):
        Chat("gpt-4o", on_tool_error="ignore")
    with pytest.raises(ValueError):
        Chat("gpt-4o", max_tool_iterations=0)
