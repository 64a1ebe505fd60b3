import pytest
import requests

from chatoyant.providers.errors import OpenAIError, ProviderAPIError
from chatoyant.providers.http import RequestOptions, build_url, request_json


def _call(method="POST", body=None, options=None, error_cls=OpenAIError):
    return request_json(
        method,
        "/things",
        body,
        options or RequestOptions(api_key="k", timeout_s=5),
        default_base_url="https://api.example.com/v1",
        headers={"Authorization": "Bearer k"},
        error_cls=error_cls,
    )


def test_build_url_joins_without_doubled_slashes():
    assert build_url("/models", "https://x/v1/") == "https://x/v1/models"
    assert build_url("models", "https://x/v1") == "https://x/v1/models"


def test_post_sends_json_body_and_content_type(fake_http):
    fake_http.reply({"ok": True})

    assert _call(body={"a": 1}) == {"ok": True}
    call = fake_http.last
    assert call["method"] == "POST"
    assert call["url"] == "https://api.example.com/v1/things"
    assert call["json"] == {"a": 1}
    assert call["timeout"] == 5
    assert call["headers"]["Content-Type"] == "application/json"
    assert call["headers"]["Authorization"] == "Bearer k"


def test_get_has_no_body_and_no_content_type(fake_http):
    fake_http.reply({"data": []})

    _call(method="get")
    call = fake_http.last
    assert call["method"] == "GET"
    assert "json" not in call
    assert "Content-Type" not in call["headers"]


def test_options_override_base_url_and_headers(fake_http):
    fake_http.reply({})
    options = RequestOptions(api_key="k", base_url="https://proxy/", headers={"X-Extra": "1"})

    _call(options=options)
    assert fake_http.last["url"] == "https://proxy/things"
    assert fake_http.last["headers"]["X-Extra"] == "1"


def test_error_status_raises_vendor_error(fake_http):
    fake_http.reply(
        {"error": {"message": "bad key", "type": "authentication_error", "code": "invalid_api_key"}},
        status_code=401,
    )

    with pytest.raises(OpenAIError) as exc_info:
        _call()
    err = exc_info.value
    assert err.status == 401
    assert err.is_auth_error
    assert err.code == "invalid_api_key"
    assert str(err) == "bad key"


def test_undecodable_error_body_falls_back_to_status(fake_http, make_response):
    fake_http.queue(make_response(502, None, text="<html>bad gateway</html>"))

    with pytest.raises(OpenAIError) as exc_info:
        _call()
    assert exc_info.value.type == "server_error"
    assert str(exc_info.value) == "Request failed with status 502"


def test_timeout_and_transport_failures_are_wrapped(fake_http):
    fake_http.queue(requests.exceptions.Timeout("slow"))
    with pytest.raises(OpenAIError) as exc_info:
        _call()
    assert exc_info.value.status == 0
    assert exc_info.value.code == "timeout"
    assert isinstance(exc_info.value.__cause__, requests.exceptions.Timeout)

    fake_http.queue(requests.exceptions.ConnectionError("refused"))
    with pytest.raises(ProviderAPIError) as exc_info:
        _call()
    assert exc_info.value.code == "network_error"
    assert "refused" in str(exc_info.value)


def test_non_json_success_body_is_invalid_response(fake_http, make_response):
    fake_http.queue(make_response(200, None, text="not json"))

    with pytest.raises(OpenAIError) as exc_info:
        _call()
    assert exc_info.value.status == 0
    assert exc_info.value.code == "invalid_response"
