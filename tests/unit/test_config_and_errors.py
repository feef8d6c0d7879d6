# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket
import ssl

import httpx

from requestkit import config
from requestkit.config import DEFAULT_USER_AGENT
from requestkit.errors import (
    ErrorCategory,
    HttpRequestException,
    categorize_exception,
    error_category_to_reason,
)


def test_http_settings_env_overrides(monkeypatch):
    monkeypatch.setenv("REQUESTKIT_HTTP_TIMEOUT", "5.5")
    monkeypatch.setenv("REQUESTKIT_HTTP_REDIRECTS", "false")
    monkeypatch.setenv("REQUESTKIT_INSECURE_SKIP_VERIFY", "0")
    monkeypatch.setenv("REQUESTKIT_HTTP_MAX_CONNECTIONS", "7")

    settings = config.load_http_settings()

    assert settings.timeout == 5.5
    assert settings.allow_redirects is False
    assert settings.insecure_skip_verify is False
    assert settings.max_connections == 7


def test_http_settings_invalid_env_fall_back(monkeypatch):
    monkeypatch.setenv("REQUESTKIT_HTTP_TIMEOUT", "not-a-number")
    monkeypatch.setenv("REQUESTKIT_HTTP_MAX_CONNECTIONS", "-3")

    settings = config.load_http_settings()

    assert settings.timeout == config.HttpSettings.timeout
    assert settings.max_connections == config.HttpSettings.max_connections
    assert settings.insecure_skip_verify is True


def test_load_http_settings_reads_env_at_call_time(monkeypatch):
    monkeypatch.setenv("REQUESTKIT_HTTP_TIMEOUT", "7.7")
    assert config.load_http_settings().timeout == 7.7
    monkeypatch.setenv("REQUESTKIT_HTTP_TIMEOUT", "8.8")
    assert config.load_http_settings().timeout == 8.8


def test_default_user_agent_is_browser_string():
    assert DEFAULT_USER_AGENT == (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/84.0.4147.135 Safari/537.36"
    )


def test_categorize_exception_maps_transport_failures():
    assert categorize_exception(httpx.ReadTimeout("slow")) == ErrorCategory.TIMEOUT
    assert categorize_exception(httpx.ConnectError("refused")) == ErrorCategory.CONNECTION_ERROR
    assert categorize_exception(ssl.SSLError("bad cert")) == ErrorCategory.SSL_ERROR
    assert categorize_exception(ssl.SSLCertVerificationError("bad cert")) == ErrorCategory.SSL_ERROR
    assert categorize_exception(socket.gaierror("no such host")) == ErrorCategory.DNS_ERROR
    assert categorize_exception(httpx.InvalidURL("nope")) == ErrorCategory.INVALID_REQUEST
    assert categorize_exception(RuntimeError("boom")) == ErrorCategory.UNKNOWN_ERROR


def test_categorize_exception_follows_wrapped_cause():
    try:
        try:
            raise socket.gaierror("no such host")
        except socket.gaierror as inner:
            raise httpx.ConnectError("connect failed") from inner
    except httpx.ConnectError as exc:
        assert categorize_exception(exc) == ErrorCategory.DNS_ERROR


def test_http_request_exception_carries_status_and_cause():
    status_error = HttpRequestException("Request failed with status 404", status_code=404)
    assert status_error.category == ErrorCategory.HTTP_STATUS
    assert status_error.cause is None

    cause = httpx.ConnectTimeout("slow")
    transport_error = HttpRequestException("Failed", cause=cause)
    assert transport_error.cause is cause
    assert transport_error.__cause__ is cause
    assert transport_error.category == ErrorCategory.TIMEOUT


def test_with_context_prefixes_message_and_keeps_details():
    original = HttpRequestException("Request failed with status 500", status_code=500)
    wrapped = original.with_context("Failed to execute POST request")
    assert wrapped.message == "Failed to execute POST request: Request failed with status 500"
    assert str(wrapped) == wrapped.message
    assert wrapped.status_code == 500
    assert wrapped.__cause__ is original


def test_error_category_to_reason():
    assert error_category_to_reason(ErrorCategory.TIMEOUT) == "Network timeout during request"
    assert error_category_to_reason(ErrorCategory.NONE) == ""
    assert error_category_to_reason(None) == ""
