# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Data model exports for requestkit."""

from ..http.models import Headers, HttpOutcome, HttpRequestConfig, ProxyConfig
from .result import Result, ResultCode

__all__ = [
    "Headers",
    "HttpOutcome",
    "HttpRequestConfig",
    "ProxyConfig",
    "Result",
    "ResultCode",
]
