# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request configuration and outcome models used by the dispatcher."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Literal

import httpx

from ..errors import HttpRequestException
from .url import is_https as url_is_https

Headers = dict[str, str]
ProxyScheme = Literal["http", "https"]


@dataclass(frozen=True)
class ProxyConfig:
    """Intermediary proxy used for a single request."""

    host: str
    port: int
    scheme: ProxyScheme = "http"
    username: str | None = None
    password: str | None = None

    def __post_init__(self) -> None:
        if not self.host:
            raise ValueError("proxy host is required")
        if not 1 <= int(self.port) <= 65535:
            raise ValueError(f"proxy port out of range: {self.port}")
        if self.scheme not in ("http", "https"):
            raise ValueError(f"unsupported proxy scheme: {self.scheme!r}")

    @property
    def url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"

    @property
    def has_credentials(self) -> bool:
        return self.username is not None and self.password is not None

    def to_httpx_proxy(self) -> httpx.Proxy:
        """Build the httpx proxy; basic credentials are only sent to the proxy itself."""
        if self.has_credentials:
            return httpx.Proxy(self.url, auth=(self.username, self.password))
        return httpx.Proxy(self.url)


@dataclass(frozen=True)
class HttpRequestConfig:
    """
    Declarative description of one outbound call.

    Timeouts are in milliseconds; ``None`` or ``0`` falls back to the settings default.
    When both ``json_body`` and ``params`` are given to a POST, the JSON body wins and
    ``params`` is ignored.
    """

    url: str
    headers: Mapping[str, str] | None = None
    params: Mapping[str, str] | None = None
    json_body: str | None = None
    connection_timeout: int | None = None
    read_timeout: int | None = None
    proxy_config: ProxyConfig | None = None

    @property
    def is_https(self) -> bool:
        return url_is_https(self.url)

    def timeout(self, default_seconds: float) -> httpx.Timeout:
        connect = self.connection_timeout / 1000 if self.connection_timeout else default_seconds
        read = self.read_timeout / 1000 if self.read_timeout else default_seconds
        return httpx.Timeout(default_seconds, connect=connect, read=read)


@dataclass
class HttpOutcome:
    """Either the decoded body of a successful call or the error that ended it."""

    ok: bool
    text: str = ""
    status_code: int | None = None
    url: str | None = None
    error: HttpRequestException | None = None

    def unwrap(self) -> str:
        if self.ok:
            return self.text
        if self.error is None:
            raise HttpRequestException("Request failed without a recorded error")
        raise self.error

    @classmethod
    def failure(cls, error: HttpRequestException, *, url: str | None = None) -> HttpOutcome:
        return cls(ok=False, status_code=error.status_code, url=url, error=error)


__all__ = ["Headers", "HttpOutcome", "HttpRequestConfig", "ProxyConfig", "ProxyScheme"]
