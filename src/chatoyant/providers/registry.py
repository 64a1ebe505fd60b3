"""Known providers, model-name detection and environment-based activation."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from chatoyant import config

from .errors import ProviderError
from .http import RequestOptions


@dataclass(frozen=True)
class ProviderInfo:
    name: str
    signatures: tuple[str, ...]
    env_key: str
    base_url: str


PROVIDERS: dict[str, ProviderInfo] = {
    "openai": ProviderInfo(
        name="OpenAI",
        signatures=("gpt", "o1", "o3", "chatgpt"),
        env_key=config.OPENAI_KEY_ENV,
        base_url=config.OPENAI_BASE_URL,
    ),
    "anthropic": ProviderInfo(
        name="Anthropic",
        signatures=("claude",),
        env_key=config.ANTHROPIC_KEY_ENV,
        base_url=config.ANTHROPIC_BASE_URL,
    ),
    "xai": ProviderInfo(
        name="xAI",
        signatures=("grok",),
        env_key=config.XAI_KEY_ENV,
        base_url=config.XAI_BASE_URL,
    ),
}

PROVIDER_IDS: tuple[str, ...] = tuple(PROVIDERS)


def detect_provider_by_model(model: str) -> Optional[str]:
    """First provider whose signature occurs in ``model`` (case-insensitive)."""

    lower = model.lower()
    for provider_id, info in PROVIDERS.items():
        if any(sig in lower for sig in info.signatures):
            return provider_id
    return None


def is_provider_active(provider_id: str) -> bool:
    return bool(os.getenv(PROVIDERS[provider_id].env_key))


def active_providers() -> list[str]:
    return [p for p in PROVIDER_IDS if is_provider_active(p)]


def get_api_key(provider_id: str) -> str:
    if not is_provider_active(provider_id):
        raise ProviderError.missing_api_key(provider_id)
    return os.environ[PROVIDERS[provider_id].env_key]


def get_base_url(provider_id: str) -> str:
    return PROVIDERS[provider_id].base_url


def resolve_provider(model: str) -> str:
    """Detect the provider for ``model`` and require its API key."""

    provider_id = detect_provider_by_model(model)
    if provider_id is None:
        raise ProviderError.unknown_provider(model)
    get_api_key(provider_id)
    return provider_id


def request_options(provider_id: str, timeout_s: Optional[float] = None) -> RequestOptions:
    return RequestOptions(
        api_key=get_api_key(provider_id),
        base_url=get_base_url(provider_id),
        timeout_s=timeout_s if timeout_s is not None else config.DEFAULT_TIMEOUT_S,
    )
