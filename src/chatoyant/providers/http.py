"""Single-round-trip JSON transport shared by the vendor wrappers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

import requests

from chatoyant import config
from chatoyant import logger as logger_mod

from .errors import ProviderAPIError

log = logger_mod.get_logger()


@dataclass(frozen=True)
class RequestOptions:
    api_key: str
    base_url: Optional[str] = None
    timeout_s: float = config.DEFAULT_TIMEOUT_S
    headers: Optional[Mapping[str, str]] = None


def build_url(endpoint: str, base_url: str) -> str:
    base = base_url[:-1] if base_url.endswith("/") else base_url
    path = endpoint if endpoint.startswith("/") else f"/{endpoint}"
    return f"{base}{path}"


def request_json(
    method: str,
    endpoint: str,
    body: Any,
    options: RequestOptions,
    *,
    default_base_url: str,
    headers: Mapping[str, str],
    error_cls: type[ProviderAPIError] = ProviderAPIError,
) -> Any:
    """Perform one request and return the decoded JSON body.

    Every failure (non-2xx status, timeout, transport error, a success body
    that is not JSON) is raised as ``error_cls``.
    """

    method = method.upper()
    url = build_url(endpoint, options.base_url or default_base_url)

    merged = dict(headers)
    if method != "GET":
        merged["Content-Type"] = "application/json"
    if options.headers:
        merged.update(options.headers)

    kwargs: dict[str, Any] = {"headers": merged, "timeout": options.timeout_s}
    if method != "GET":
        kwargs["json"] = body

    log.debug(f"{method} {url}")
    try:
        response = requests.request(method, url, **kwargs)
    except requests.exceptions.Timeout as e:
        raise error_cls.timeout(options.timeout_s) from e
    except requests.exceptions.RequestException as e:
        raise error_cls.network_error(e) from e

    if not response.ok:
        err = error_cls.from_response(response)
        log.warning(f"{method} {url} failed: {err.status} {err.type}: {err.message}")
        raise err

    try:
        return response.json()
    except ValueError as e:
        raise error_cls.invalid_response("Failed to parse response JSON") from e
