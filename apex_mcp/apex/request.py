"""
Description: Outbound request construction for the Apex API
Main features:
    - Repeated-key query string encoding
    - JSON body serialization with ISO-8601 dates
    - Authorization and Consumer-Type header policy
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

import httpx

from apex_mcp.config import Credentials


CONSUMER_TYPE = "mcp"
JSON_CONTENT_TYPE = "application/json"

QUERY_METHODS = frozenset({"GET", "DELETE"})
BODY_METHODS = frozenset({"POST", "PUT"})


# region Request spec
@dataclass(frozen=True)
class RequestSpec:
    """Fully resolved outbound request"""
    method: str
    url: str
    query_params: tuple[tuple[str, str], ...] = ()
    body: str | None = None
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def full_url(self) -> str:
        return str(httpx.URL(self.url, params=list(self.query_params)))
# endregion


# region Value normalization
def normalize_value(value: Any) -> Any:
    """Convert date values to ISO-8601 strings, recursing into containers"""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {key: normalize_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_value(item) for item in value]
    return value


def _format_query_value(value: Any) -> str:
    value = normalize_value(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def encode_query_params(params: Mapping[str, Any] | None) -> tuple[tuple[str, str], ...]:
    """
    Encode a mapping as ordered (key, value) pairs

    Array values produce one pair per element under the same key, in input
    order. None values are omitted.
    """
    if not params:
        return ()
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _format_query_value(item)) for item in value if item is not None)
        else:
            pairs.append((key, _format_query_value(value)))
    return tuple(pairs)


def serialize_body(body: Mapping[str, Any]) -> str:
    """Compact JSON, dropping keys whose value is None"""
    payload = {key: value for key, value in normalize_value(body).items() if value is not None}
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
# endregion


# region Header policy
def merge_headers(
    bearer_token: str,
    extra: Mapping[str, str] | None = None,
    content_type: str | None = None,
) -> dict[str, str]:
    """
    Build outbound headers

    Precedence (lowest first):
        1. Consumer-Type and the optional Content-Type
        2. caller headers, matched case-insensitively
        3. Authorization, which callers cannot override
    """
    merged: dict[str, str] = {"Consumer-Type": CONSUMER_TYPE}
    if content_type:
        merged["Content-Type"] = content_type

    for key, value in (extra or {}).items():
        if key.lower() == "authorization":
            continue
        for existing in [name for name in merged if name.lower() == key.lower()]:
            del merged[existing]
        merged[key] = value

    merged["Authorization"] = f"Bearer {bearer_token}"
    return merged
# endregion


# region Builder
def build_request(
    credentials: Credentials,
    path: str,
    method: str = "GET",
    query_params: Mapping[str, Any] | None = None,
    body: Mapping[str, Any] | None = None,
    headers: Mapping[str, str] | None = None,
) -> RequestSpec:
    """
    Resolve a tool request into a RequestSpec

    Args:
        credentials: token and base URL of the owning registry
        path: API path, e.g. /apex/tweet/search
        method: HTTP verb
        query_params: plain mapping, only for GET/DELETE
        body: JSON body mapping, only for POST/PUT
        headers: extra headers merged under the auth policy

    Raises:
        ValueError: query params and body do not match the verb
    """
    method = method.upper()
    if query_params and body is not None:
        raise ValueError("A request carries either query params or a JSON body, not both")
    if body is not None and method in QUERY_METHODS:
        raise ValueError(f"{method} requests cannot carry a JSON body")
    if query_params and method in BODY_METHODS:
        raise ValueError(f"{method} requests send their input as a JSON body")

    serialized = serialize_body(body) if body is not None else None
    content_type = JSON_CONTENT_TYPE if serialized is not None and method != "GET" else None

    return RequestSpec(
        method=method,
        url=f"{credentials.api_base_url}{path}",
        query_params=encode_query_params(query_params),
        body=serialized,
        headers=merge_headers(credentials.bearer_token, headers, content_type),
    )
# endregion
