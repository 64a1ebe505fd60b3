import pytest

from chatoyant.providers.errors import (
    AnthropicError,
    OpenAIError,
    ProviderError,
    XAIError,
)


@pytest.mark.parametrize(
    "status, expected",
    [
        (400, "invalid_request_error"),
        (401, "authentication_error"),
        (403, "permission_error"),
        (404, "not_found_error"),
        (429, "rate_limit_error"),
        (500, "server_error"),
        (418, "invalid_request_error"),
    ],
)
def test_openai_type_from_status(status, expected):
    assert OpenAIError.type_from_status(status) == expected


def test_anthropic_status_differences():
    assert AnthropicError.type_from_status(413) == "request_too_large"
    assert AnthropicError.type_from_status(529) == "overloaded_error"
    assert AnthropicError.type_from_status(503) == "api_error"
    assert XAIError.type_from_status(503) == "server_error"


def test_classification_and_category():
    rate = OpenAIError("slow down", 429, "rate_limit_error", headers={"Retry-After": "12"})
    assert rate.is_rate_limited and rate.is_retryable
    assert rate.retry_after == 12
    assert rate.category == "rate_limit"

    missing = OpenAIError("nope", 404, "not_found_error")
    assert not missing.is_retryable
    assert missing.retry_after is None
    assert missing.category == "not_found"

    overloaded = OpenAIError("busy", 200, "engine_overloaded_error")
    assert overloaded.is_server_error

    denied = AnthropicError("no", 403, "permission_error")
    assert denied.category == "permission"

    assert OpenAIError.network_error(OSError("x")).category == "server_error"


def test_retry_after_ignores_non_numeric():
    err = OpenAIError("x", 429, "rate_limit_error", headers={"retry-after": "soon"})
    assert err.retry_after is None


def test_from_response_uses_error_body(make_response):
    response = make_response(
        400,
        {"error": {"message": "bad param", "type": "invalid_request_error", "param": "model"}},
    )

    err = OpenAIError.from_response(response)
    assert (err.status, err.type, err.param, str(err)) == (
        400,
        "invalid_request_error",
        "model",
        "bad param",
    )


def test_anthropic_never_carries_param_or_code(make_response):
    response = make_response(
        400,
        {"error": {"message": "m", "type": "invalid_request_error", "param": "p", "code": "c"}},
    )

    err = AnthropicError.from_response(response)
    assert err.param is None and err.code is None
    assert AnthropicError.timeout(3).code is None
    assert AnthropicError.timeout(3).type == "api_error"
    assert str(AnthropicError.timeout(3)) == "Request timed out after 3s"


def test_xai_rate_limit_headers():
    err = XAIError(
        "x",
        429,
        "rate_limit_error",
        headers={"x-ratelimit-remaining-requests": "3", "x-ratelimit-remaining-tokens": "900"},
    )
    assert err.remaining_requests == 3
    assert err.remaining_tokens == 900
    assert XAIError("x", 0, "server_error").remaining_tokens is None


def test_provider_error_messages():
    err = ProviderError.missing_api_key("anthropic")
    assert err.provider_id == "anthropic"
    assert err.env_key == "API_KEY_ANTHROPIC"
    assert "API_KEY_ANTHROPIC" in str(err)

    unknown = ProviderError.unknown_provider("llama-3")
    assert '"llama-3"' in str(unknown)
    assert "claude" in str(unknown)
