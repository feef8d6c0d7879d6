# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers for the dispatcher."""

from __future__ import annotations

from collections.abc import Mapping

import httpx

from ..errors import ErrorCategory, HttpRequestException


def parse_url(url: str) -> httpx.URL:
    """
    Parse and validate an absolute http(s) URL.

    Raises HttpRequestException (INVALID_REQUEST) before any network I/O happens.
    """
    try:
        parsed = httpx.URL(str(url or ""))
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise HttpRequestException(f"Invalid URL {url!r}", cause=exc, category=ErrorCategory.INVALID_REQUEST) from exc
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise HttpRequestException(f"Invalid URL {url!r}: expected an absolute http(s) URL", category=ErrorCategory.INVALID_REQUEST)
    return parsed


def build_url(url: str, params: Mapping[str, str] | None = None) -> str:
    """
    Append ``params`` to ``url`` as percent-encoded query parameters.

    Pairs are applied in mapping order; a key already present in the URL is replaced.
    Without params the URL is returned exactly as given.
    """
    if not params:
        return url

    parsed = parse_url(url)
    try:
        for key, value in params.items():
            parsed = parsed.copy_set_param(str(key), "" if value is None else str(value))
    except (TypeError, ValueError) as exc:
        raise HttpRequestException("Failed to encode query parameters", cause=exc, category=ErrorCategory.INVALID_REQUEST) from exc
    return str(parsed)


def is_https(url: str) -> bool:
    return str(url or "").lower().startswith("https:")


__all__ = ["build_url", "is_https", "parse_url"]
