# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP dispatcher exports."""

from .client import SharedClients, create_http_client, create_insecure_ssl_context, create_proxied_client
from .dispatcher import Dispatcher, close_default_dispatcher, get, get_default_dispatcher, post
from .headers import default_headers, header_value
from .models import Headers, HttpOutcome, HttpRequestConfig, ProxyConfig
from .url import build_url

__all__ = [
    "Dispatcher",
    "Headers",
    "HttpOutcome",
    "HttpRequestConfig",
    "ProxyConfig",
    "SharedClients",
    "build_url",
    "close_default_dispatcher",
    "create_http_client",
    "create_insecure_ssl_context",
    "create_proxied_client",
    "default_headers",
    "get",
    "get_default_dispatcher",
    "header_value",
    "post",
]
