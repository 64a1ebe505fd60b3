"""Vendor HTTP wrappers (OpenAI, Anthropic, xAI) and provider resolution.

Each vendor module exposes plain functions taking a ``RequestOptions``; all
failures surface as that vendor's ``ProviderAPIError`` subclass.
"""

from . import anthropic_api, openai_api, xai_api
from .errors import (
    AnthropicError,
    OpenAIError,
    ProviderAPIError,
    ProviderError,
    XAIError,
)
from .http import RequestOptions, build_url, request_json
from .registry import (
    PROVIDER_IDS,
    PROVIDERS,
    ProviderInfo,
    active_providers,
    detect_provider_by_model,
    get_api_key,
    get_base_url,
    is_provider_active,
    request_options,
    resolve_provider,
)
from .schema_utils import make_openai_strict, needs_openai_strict_transform, strip_strict_nulls

__all__ = [
    "PROVIDERS",
    "PROVIDER_IDS",
    "AnthropicError",
    "OpenAIError",
    "ProviderAPIError",
    "ProviderError",
    "ProviderInfo",
    "RequestOptions",
    "XAIError",
    "active_providers",
    "anthropic_api",
    "build_url",
    "detect_provider_by_model",
    "get_api_key",
    "get_base_url",
    "is_provider_active",
    "make_openai_strict",
    "needs_openai_strict_transform",
    "openai_api",
    "request_json",
    "request_options",
    "resolve_provider",
    "strip_strict_nulls",
    "xai_api",
]
