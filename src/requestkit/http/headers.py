# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header policy and case-insensitive header helpers.

HTTP header field names are case-insensitive (RFC 9110), while request configs carry
plain dicts. Lookups and overrides go through these helpers so a caller's
``content-type`` and a dispatcher-set ``Content-Type`` never end up side by side.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..config import DEFAULT_USER_AGENT

JSON_CONTENT_TYPE = "application/json"


def default_headers() -> dict[str, str]:
    """Headers applied when the caller supplies none. A fresh dict on every call."""
    return {
        "Connection": "keep-alive",
        "Accept-Encoding": "gzip, deflate, br",
        "Accept": "*/*",
        "User-Agent": DEFAULT_USER_AGENT,
    }


def resolve_headers(headers: Mapping[str, str] | None) -> dict[str, str]:
    """Caller headers replace the defaults wholesale; nothing is merged."""
    if headers is None:
        return default_headers()
    return {str(key): str(value) for key, value in headers.items()}


def set_header(headers: dict[str, str], name: str, value: str) -> dict[str, str]:
    """Set ``name`` in place, dropping any existing entry that differs only in case."""
    lower = name.lower()
    for key in [key for key in headers if key.lower() == lower]:
        del headers[key]
    headers[name] = value
    return headers


def header_value(headers: Mapping[object, object] | None, name: str, default: str = "") -> str:
    """
    Return a header value using case-insensitive key matching.

    Fast-paths common key casings before falling back to a full scan.
    """
    if not headers or not name:
        return default

    lower = str(name).lower()
    for key in (name, lower, lower.title()):
        if key in headers:
            value = headers.get(key)
            return default if value is None else str(value).strip()

    for key, value in headers.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


__all__ = [
    "JSON_CONTENT_TYPE",
    "default_headers",
    "header_value",
    "resolve_headers",
    "set_header",
]
