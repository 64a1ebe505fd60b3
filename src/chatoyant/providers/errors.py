from __future__ import annotations

import re
from typing import Any, ClassVar, Mapping, Optional

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

_CATEGORIES = {
    "invalid_request_error": "invalid_request",
    "request_too_large": "invalid_request",
    "authentication_error": "authentication",
    "permission_error": "permission",
    "not_found_error": "not_found",
    "rate_limit_error": "rate_limit",
}


def _header(headers: Optional[Mapping[str, str]], name: str) -> Optional[str]:
    if not headers:
        return None
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, v in headers.items():
        if key.lower() == lowered:
            return v
    return None


def _int_header(headers: Optional[Mapping[str, str]], name: str) -> Optional[int]:
    value = _header(headers, name)
    if not value:
        return None
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


class ProviderAPIError(RuntimeError):
    """HTTP-level failure reported by (or on the way to) a vendor API.

    ``status`` is the HTTP status, or ``0`` for failures that never produced a
    response (transport error, timeout, undecodable body).
    """

    provider: ClassVar[str] = "provider"
    _STATUS_TYPES: ClassVar[dict[int, str]] = {
        400: "invalid_request_error",
        401: "authentication_error",
        403: "permission_error",
        404: "not_found_error",
        429: "rate_limit_error",
    }
    _SERVER_TYPE: ClassVar[str] = "server_error"
    _SERVER_TYPES: ClassVar[frozenset[str]] = frozenset({"server_error"})
    # Whether synthetic (status 0) errors carry a machine code.
    _SYNTHETIC_CODES: ClassVar[bool] = False

    def __init__(
        self,
        message: str,
        status: int,
        type: str,
        param: Optional[str] = None,
        code: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.type = type
        self.param = param
        self.code = code
        self.headers = headers

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status}, type={self.type!r}, message={self.message!r})"

    @property
    def is_rate_limited(self) -> bool:
        return self.type == "rate_limit_error" or self.status == 429

    @property
    def is_auth_error(self) -> bool:
        return self.type == "authentication_error" or self.status == 401

    @property
    def is_server_error(self) -> bool:
        return self.status >= 500 or self.type in self._SERVER_TYPES

    @property
    def is_retryable(self) -> bool:
        return self.is_rate_limited or self.is_server_error

    @property
    def retry_after(self) -> Optional[int]:
        """Seconds from the ``retry-after`` header, if present and numeric."""

        return _int_header(self.headers, "retry-after")

    @property
    def category(self) -> str:
        if self.is_rate_limited:
            return "rate_limit"
        if self.is_auth_error:
            return "authentication"
        if self.is_server_error or self.status == 0:
            return "server_error"
        return _CATEGORIES.get(self.type, "invalid_request")

    @classmethod
    def type_from_status(cls, status: int) -> str:
        if status in cls._STATUS_TYPES:
            return cls._STATUS_TYPES[status]
        return cls._SERVER_TYPE if status >= 500 else "invalid_request_error"

    @classmethod
    def _error_body(cls, response: Any) -> Optional[dict[str, Any]]:
        try:
            payload = response.json()
        except ValueError:
            return None
        if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
            return payload["error"]
        return None

    @classmethod
    def from_response(cls, response: Any) -> "ProviderAPIError":
        status = response.status_code
        headers = response.headers
        body = cls._error_body(response)
        if body is not None:
            return cls(
                body.get("message") or f"Request failed with status {status}",
                status,
                body.get("type") or cls.type_from_status(status),
                body.get("param"),
                body.get("code"),
                headers,
            )
        return cls(
            f"Request failed with status {status}",
            status,
            cls.type_from_status(status),
            headers=headers,
        )

    @classmethod
    def _synthetic(cls, message: str, code: str) -> "ProviderAPIError":
        return cls(message, 0, cls._SERVER_TYPE, code=code if cls._SYNTHETIC_CODES else None)

    @classmethod
    def network_error(cls, cause: BaseException) -> "ProviderAPIError":
        return cls._synthetic(f"Network error: {cause}", "network_error")

    @classmethod
    def timeout(cls, seconds: float) -> "ProviderAPIError":
        return cls._synthetic(f"Request timed out after {seconds:g}s", "timeout")

    @classmethod
    def invalid_response(cls, message: str) -> "ProviderAPIError":
        return cls._synthetic(message, "invalid_response")


class OpenAIError(ProviderAPIError):
    provider = "openai"
    _SERVER_TYPES = frozenset({"server_error", "engine_overloaded_error"})
    _SYNTHETIC_CODES = True


class AnthropicError(ProviderAPIError):
    """Anthropic errors never carry ``param`` or ``code``."""

    provider = "anthropic"
    _STATUS_TYPES = {
        **ProviderAPIError._STATUS_TYPES,
        413: "request_too_large",
        529: "overloaded_error",
    }
    _SERVER_TYPE = "api_error"
    _SERVER_TYPES = frozenset({"api_error", "overloaded_error"})

    def __init__(
        self,
        message: str,
        status: int,
        type: str,
        param: Optional[str] = None,
        code: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
    ):
        super().__init__(message, status, type, headers=headers)


class XAIError(ProviderAPIError):
    provider = "xai"

    @property
    def remaining_requests(self) -> Optional[int]:
        return _int_header(self.headers, "x-ratelimit-remaining-requests")

    @property
    def remaining_tokens(self) -> Optional[int]:
        return _int_header(self.headers, "x-ratelimit-remaining-tokens")


class ProviderError(RuntimeError):
    """Provider could not be resolved or is not configured."""

    def __init__(
        self,
        message: str,
        provider_id: Optional[str] = None,
        env_key: Optional[str] = None,
    ):
        super().__init__(message)
        self.provider_id = provider_id
        self.env_key = env_key

    @classmethod
    def missing_api_key(cls, provider_id: str) -> "ProviderError":
        from .registry import PROVIDERS

        info = PROVIDERS[provider_id]
        return cls(
            f"{info.name} is not active (missing {info.env_key} environment variable)",
            provider_id,
            info.env_key,
        )

    @classmethod
    def unknown_provider(cls, model: str) -> "ProviderError":
        from .registry import PROVIDERS

        signatures = [s for info in PROVIDERS.values() for s in info.signatures]
        return cls(
            f'Could not detect provider for model "{model}". '
            f"Known signatures: {', '.join(signatures)}"
        )
