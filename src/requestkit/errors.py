# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    HTTP_STATUS = "HTTP_STATUS"
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


class HttpRequestException(Exception):
    """
    The single error raised by dispatcher calls.

    The sub-cause is carried on the instance: ``status_code`` for HTTP status failures,
    ``cause`` (also chained as ``__cause__``) for transport and URL problems.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        cause: BaseException | None = None,
        category: ErrorCategory | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.cause = cause
        if category is None:
            if status_code is not None:
                category = ErrorCategory.HTTP_STATUS
            elif cause is not None:
                category = categorize_exception(cause)
            else:
                category = ErrorCategory.UNKNOWN_ERROR
        self.category = category
        if cause is not None:
            self.__cause__ = cause

    def with_context(self, context: str) -> HttpRequestException:
        """Return a copy whose message is prefixed with ``context``, keeping status and cause."""
        wrapped = HttpRequestException(
            f"{context}: {self.message}",
            status_code=self.status_code,
            cause=self.cause,
            category=self.category,
        )
        if wrapped.__cause__ is None:
            wrapped.__cause__ = self
        return wrapped


def _root_cause(exc: BaseException) -> BaseException:
    seen: set[int] = set()
    current = exc
    while id(current) not in seen:
        seen.add(id(current))
        inner = current.__cause__ or current.__context__
        if inner is None:
            break
        current = inner
    return current


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, HttpRequestException):
        return exc.category

    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    # httpx wraps the socket error; the original exception sits at the end of the chain.
    if isinstance(exc, httpx.ConnectError):
        root = _root_cause(exc)
        if root is not exc and isinstance(root, (ssl_module.SSLError, socket.gaierror, socket.herror)):
            return categorize_exception(root)

    # CertificateError is also a ValueError, so TLS is checked first.
    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (httpx.InvalidURL, httpx.UnsupportedProtocol, ValueError)):
        return ErrorCategory.INVALID_REQUEST

    if isinstance(
        exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)
    ):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.HTTP_STATUS: "Server returned an error status",
        ErrorCategory.TIMEOUT: "Network timeout during request",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.INVALID_REQUEST: "Malformed URL or request parameters",
        ErrorCategory.UNKNOWN_ERROR: "Network error during request",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Request failed due to network error")


__all__ = ["ErrorCategory", "HttpRequestException", "categorize_exception", "error_category_to_reason"]
