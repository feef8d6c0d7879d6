# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx client construction.

Four client shapes exist, picked per call from two facts about the request: whether the
target is HTTPS and whether a proxy is configured. The two direct shapes are shared and
long-lived (see ``SharedClients``); proxied ones are built for a single call.

HTTPS clients built with ``insecure=True`` trust self-signed certificates and skip
hostname verification. That is only acceptable for development and test targets.
"""

from __future__ import annotations

import logging
import ssl
import threading

import httpx

from ..config import HttpSettings, load_http_settings
from .models import ProxyConfig

logger = logging.getLogger(__name__)

_insecure_warned = False
_insecure_warn_lock = threading.Lock()


def create_insecure_ssl_context() -> ssl.SSLContext:
    """TLS context that accepts self-signed certificates and any hostname."""
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def _warn_insecure_once() -> None:
    global _insecure_warned
    with _insecure_warn_lock:
        if _insecure_warned:
            return
        _insecure_warned = True
    logger.warning("HTTPS requests trust self-signed certificates and skip hostname checks")


def create_http_client(
    settings: HttpSettings | None = None,
    *,
    proxy: ProxyConfig | None = None,
    insecure: bool = False,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """
    Build an httpx client for the dispatcher.

    Environment proxy variables are ignored (``trust_env=False``); only an explicit
    ``proxy`` routes traffic through an intermediary. The client carries no default
    headers of its own so that each request sends exactly the headers it was given.
    """
    settings = settings or load_http_settings()
    if insecure:
        _warn_insecure_once()
    kwargs: dict[str, object] = {
        "follow_redirects": settings.allow_redirects,
        "timeout": settings.timeout,
        "verify": create_insecure_ssl_context() if insecure else True,
        "limits": httpx.Limits(max_connections=settings.max_connections),
        "trust_env": False,
    }
    if proxy is not None:
        kwargs["proxy"] = proxy.to_httpx_proxy()
    if transport is not None:
        kwargs["transport"] = transport

    client = httpx.Client(**kwargs)
    client.headers.clear()
    logger.debug(
        "Built %s client%s",
        "insecure TLS" if insecure else "default",
        f" via proxy {proxy.url}" if proxy is not None else "",
    )
    return client


def create_proxied_client(
    proxy: ProxyConfig,
    settings: HttpSettings | None = None,
    *,
    insecure: bool = False,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Fresh client routed through ``proxy``; the caller owns and closes it."""
    return create_http_client(settings, proxy=proxy, insecure=insecure, transport=transport)


class SharedClients:
    """
    The two process-lifetime direct clients, each built at most once.

    httpx.Client is safe to share between threads; only first use needs the lock.
    """

    def __init__(self, settings: HttpSettings | None = None, transport: httpx.BaseTransport | None = None):
        self.settings = settings or load_http_settings()
        self._transport = transport
        self._lock = threading.Lock()
        self._default: httpx.Client | None = None
        self._https: httpx.Client | None = None

    def default(self) -> httpx.Client:
        client = self._default
        if client is None:
            with self._lock:
                if self._default is None:
                    self._default = create_http_client(self.settings, transport=self._transport)
                client = self._default
        return client

    def https(self) -> httpx.Client:
        client = self._https
        if client is None:
            with self._lock:
                if self._https is None:
                    self._https = create_http_client(
                        self.settings,
                        insecure=self.settings.insecure_skip_verify,
                        transport=self._transport,
                    )
                client = self._https
        return client

    def close(self) -> None:
        with self._lock:
            clients = [c for c in (self._default, self._https) if c is not None]
            self._default = None
            self._https = None
        for client in clients:
            client.close()


__all__ = [
    "SharedClients",
    "create_http_client",
    "create_insecure_ssl_context",
    "create_proxied_client",
]
