# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Synchronous GET/POST dispatch over httpx with optional proxy and self-signed TLS support."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from urllib.parse import urlencode

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import ErrorCategory, HttpRequestException
from .client import SharedClients, create_proxied_client
from .headers import JSON_CONTENT_TYPE, header_value, resolve_headers, set_header
from .models import HttpOutcome, HttpRequestConfig
from .url import build_url, parse_url

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=UTF-8"

# Failures below the HTTP layer that are reported instead of propagated raw.
_TRANSPORT_ERRORS = (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError, OSError, UnicodeError)


class Dispatcher:
    """
    Issues one blocking request per call and returns the decoded body.

    There is no retry: every call makes a single attempt and either returns text or
    raises ``HttpRequestException``. Instances are safe to share between threads.
    """

    def __init__(self, settings: HttpSettings | None = None, *, transport: httpx.BaseTransport | None = None):
        self.settings = settings or load_http_settings()
        self._transport = transport
        self._shared = SharedClients(self.settings, transport=transport)

    def get(self, config: HttpRequestConfig) -> str:
        return self.send("GET", config).unwrap()

    def post(self, config: HttpRequestConfig) -> str:
        return self.send("POST", config).unwrap()

    def send(self, method: str, config: HttpRequestConfig) -> HttpOutcome:
        """Run the request and report the result as an outcome rather than raising."""
        method = method.upper()
        context = f"Failed to execute {method} request"
        try:
            if method == "GET":
                url = build_url(config.url, config.params)
                content = None
                headers = resolve_headers(config.headers)
            elif method == "POST":
                parse_url(config.url)
                url = config.url
                headers = resolve_headers(config.headers)
                content = self._post_body(config, headers)
            else:
                raise HttpRequestException(f"Unsupported method {method}", category=ErrorCategory.INVALID_REQUEST)
            return self._execute(method, url, headers, content, config)
        except HttpRequestException as exc:
            error = exc.with_context(context)
        except _TRANSPORT_ERRORS as exc:
            error = HttpRequestException(f"{context}: {str(exc) or type(exc).__name__}", cause=exc)
        logger.debug("%s %s failed: %s", method, config.url, error.message)
        return HttpOutcome.failure(error, url=config.url)

    def close(self) -> None:
        self._shared.close()

    def __enter__(self) -> Dispatcher:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()

    @staticmethod
    def _post_body(config: HttpRequestConfig, headers: dict[str, str]) -> bytes | None:
        # JSON wins over params when both are present.
        if config.json_body is not None:
            set_header(headers, "Content-Type", JSON_CONTENT_TYPE)
            return config.json_body.encode("utf-8")
        if config.params is not None:
            if not header_value(headers, "Content-Type"):
                headers["Content-Type"] = FORM_CONTENT_TYPE
            pairs = [(str(key), "" if value is None else str(value)) for key, value in config.params.items()]
            return urlencode(pairs, encoding="utf-8").encode("ascii")
        return None

    @contextmanager
    def _client_for(self, config: HttpRequestConfig) -> Iterator[httpx.Client]:
        if config.proxy_config is None:
            yield self._shared.https() if config.is_https else self._shared.default()
            return

        insecure = config.is_https and self.settings.insecure_skip_verify
        client = create_proxied_client(
            config.proxy_config,
            self.settings,
            insecure=insecure,
            transport=self._transport,
        )
        try:
            yield client
        finally:
            client.close()

    def _execute(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        content: bytes | None,
        config: HttpRequestConfig,
    ) -> HttpOutcome:
        logger.debug(
            "%s %s (proxy=%s)",
            method,
            url,
            config.proxy_config.url if config.proxy_config is not None else "none",
        )
        # A redirected POST would be replayed as a body-less GET; the 3xx is returned instead.
        follow_redirects = self.settings.allow_redirects and method != "POST"
        with self._client_for(config) as client:
            with client.stream(
                method,
                url,
                headers=headers,
                content=content,
                timeout=config.timeout(self.settings.timeout),
                follow_redirects=follow_redirects,
            ) as resp:
                # Error statuses are reported without reading the body.
                if resp.status_code >= 400:
                    raise HttpRequestException(
                        f"Request failed with status {resp.status_code}",
                        status_code=resp.status_code,
                    )
                body = resp.read()
                status_code = resp.status_code
                final_url = str(resp.url)

        text = body.decode("utf-8", errors="replace") if body else ""
        return HttpOutcome(ok=True, text=text, status_code=status_code, url=final_url)


_default_dispatcher: Dispatcher | None = None
_default_lock = threading.Lock()


def get_default_dispatcher() -> Dispatcher:
    """Process-wide dispatcher, created on first use."""
    global _default_dispatcher
    dispatcher = _default_dispatcher
    if dispatcher is None:
        with _default_lock:
            if _default_dispatcher is None:
                _default_dispatcher = Dispatcher()
            dispatcher = _default_dispatcher
    return dispatcher


def close_default_dispatcher() -> None:
    global _default_dispatcher
    with _default_lock:
        dispatcher = _default_dispatcher
        _default_dispatcher = None
    if dispatcher is not None:
        dispatcher.close()


def get(config: HttpRequestConfig) -> str:
    """GET ``config.url`` (plus query params) and return the body as text."""
    return get_default_dispatcher().get(config)


def post(config: HttpRequestConfig) -> str:
    """POST a JSON or form body to ``config.url`` and return the response body as text."""
    return get_default_dispatcher().post(config)


__all__ = ["Dispatcher", "close_default_dispatcher", "get", "get_default_dispatcher", "post"]
