# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for requestkit."""

import os
from dataclasses import dataclass

# Browser-like agent sent when the caller supplies no headers. Some targets filter
# obvious bot agents, so the exact string is kept stable.
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/84.0.4147.135 Safari/537.36"
)


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    try:
        value = os.getenv(name)
        return int(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class HttpSettings:
    """
    Dispatcher defaults.

    ``insecure_skip_verify`` makes HTTPS targets trust self-signed certificates and skip
    hostname checks. It is meant for development and test endpoints only; set
    ``REQUESTKIT_INSECURE_SKIP_VERIFY=0`` to get normal certificate verification.
    """

    timeout: float = 30.0
    allow_redirects: bool = True
    insecure_skip_verify: bool = True
    max_connections: int = 100

    @classmethod
    def from_env(cls) -> "HttpSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("REQUESTKIT_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        max_connections = _int_env("REQUESTKIT_HTTP_MAX_CONNECTIONS", cls.max_connections)
        if max_connections <= 0:
            max_connections = cls.max_connections
        return cls(
            timeout=timeout,
            allow_redirects=_bool_env("REQUESTKIT_HTTP_REDIRECTS", cls.allow_redirects),
            insecure_skip_verify=_bool_env("REQUESTKIT_INSECURE_SKIP_VERIFY", cls.insecure_skip_verify),
            max_connections=max_connections,
        )


def load_http_settings() -> HttpSettings:
    """Load HTTP settings from environment with sensible defaults."""
    return HttpSettings.from_env()
