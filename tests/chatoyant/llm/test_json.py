import pytest

from chatoyant.llm._json import parse_json, validate_json
from chatoyant.llm.errors import LLMValidationError


def test_parse_json_plain_and_fenced():
    assert parse_json('{"a": 1}') == {"a": 1}
    assert parse_json('```json\n{"a": 1}\n```') == {"a": 1}
    assert parse_json('```\n{"a": 1}\n```') == {"a": 1}


def test_parse_json_rejects_bad_input():
    with pytest.raises(LLMValidationError):
        parse_json("not json")
    with pytest.raises(LLMValidationError):
        parse_json("[1, 2]")


def test_validate_json():
    schema = {"type": "object", "properties": {"a": {"type": "integer"}}, "required": ["a"]}

    validate_json({"a": 1}, schema)
    with pytest.raises(LLMValidationError) as exc_info:
        validate_json({"a": "x"}, schema)
    assert "JSON schema validation failed" in str(exc_info.value)
