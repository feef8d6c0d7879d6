# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
requestkit package entrypoint.

Two independent pieces live here: a thin GET/POST dispatcher over httpx that adds
optional proxy routing and self-signed TLS trust for HTTPS targets, and a generic
``Result`` envelope with its ``ResultCode`` enumeration.

The self-signed trust mode skips certificate and hostname verification. It is on by
default for HTTPS targets and is meant for development and test endpoints; disable it
with ``REQUESTKIT_INSECURE_SKIP_VERIFY=0`` or ``HttpSettings(insecure_skip_verify=False)``.
"""

from .config import HttpSettings, load_http_settings
from .errors import ErrorCategory, HttpRequestException
from .http import (
    Dispatcher,
    HttpOutcome,
    HttpRequestConfig,
    ProxyConfig,
    close_default_dispatcher,
    get,
    post,
)
from .log import setup_logging
from .models import Result, ResultCode
from .version import __version__

__all__ = [
    "Dispatcher",
    "ErrorCategory",
    "HttpOutcome",
    "HttpRequestConfig",
    "HttpRequestException",
    "HttpSettings",
    "ProxyConfig",
    "Result",
    "ResultCode",
    "close_default_dispatcher",
    "get",
    "load_http_settings",
    "post",
    "setup_logging",
    "__version__",
]
