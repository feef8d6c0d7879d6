# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""requestkit CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

import httpx

from ..config import HttpSettings, load_http_settings
from ..errors import HttpRequestException, error_category_to_reason
from ..http import Dispatcher, HttpRequestConfig, ProxyConfig
from ..log import setup_logging
from ..models import Result, ResultCode


def _parse_header(value: str) -> tuple[str, str]:
    name, sep, header = value.partition(":")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected 'Name: value', got {value!r}")
    return name.strip(), header.strip()


def _parse_param(value: str) -> tuple[str, str]:
    key, sep, param = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"expected key=value, got {value!r}")
    return key, param


def _parse_proxy(value: str) -> ProxyConfig:
    """Parse ``scheme://[user:pass@]host:port`` into a ProxyConfig."""
    try:
        url = httpx.URL(value if "://" in value else f"http://{value}")
        if url.port is None:
            raise ValueError("proxy port is required")
        return ProxyConfig(
            host=url.host,
            port=url.port,
            scheme=url.scheme,  # type: ignore[arg-type]
            username=url.username or None,
            password=url.password or None,
        )
    except (httpx.InvalidURL, ValueError) as exc:
        raise argparse.ArgumentTypeError(f"invalid proxy {value!r}: {exc}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send a single GET or POST request and print the response body")
    parser.add_argument("method", choices=["get", "post"], type=str.lower, help="HTTP method")
    parser.add_argument("url", help="Target URL")
    parser.add_argument(
        "-H",
        "--header",
        dest="headers",
        action="append",
        type=_parse_header,
        help="Request header 'Name: value' (repeatable; replaces the default header set)",
    )
    parser.add_argument(
        "-p",
        "--param",
        dest="params",
        action="append",
        type=_parse_param,
        help="Parameter key=value (query string for GET, form body for POST; repeatable)",
    )
    parser.add_argument("--json-body", help="Raw JSON string to POST (takes precedence over --param)")
    parser.add_argument("--proxy", type=_parse_proxy, help="Proxy as scheme://[user:pass@]host:port")
    parser.add_argument("--connect-timeout", type=int, help="Connection timeout in milliseconds")
    parser.add_argument("--read-timeout", type=int, help="Read timeout in milliseconds")
    parser.add_argument(
        "--verify-ssl",
        action="store_true",
        help="Verify TLS certificates instead of trusting self-signed ones",
    )
    parser.add_argument(
        "--envelope",
        action="store_true",
        help="Print a JSON result envelope instead of the raw body",
    )
    parser.add_argument("--log-level", help="Logging level (default from REQUESTKIT_LOG_LEVEL)")
    return parser


def build_request_config(args: argparse.Namespace) -> HttpRequestConfig:
    return HttpRequestConfig(
        url=args.url,
        headers=dict(args.headers) if args.headers else None,
        params=dict(args.params) if args.params else None,
        json_body=args.json_body,
        connection_timeout=args.connect_timeout,
        read_timeout=args.read_timeout,
        proxy_config=args.proxy,
    )


def error_envelope(error: HttpRequestException) -> Result[Any]:
    """Map a failed call onto the envelope: known status codes keep their code."""
    if error.status_code is not None:
        known = ResultCode.from_code(error.status_code)
        if known is not None:
            return Result.error(known, error.message)
        return Result.error(error.status_code, error.message)
    reason = error_category_to_reason(error.category)
    message = f"{reason}: {error.message}" if reason else error.message
    return Result.error(message)


def _print_json(value: Any) -> None:
    print(json.dumps(value, indent=2, ensure_ascii=False))


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    settings: HttpSettings = load_http_settings()
    if args.verify_ssl:
        settings.insecure_skip_verify = False

    config = build_request_config(args)
    with Dispatcher(settings) as dispatcher:
        outcome = dispatcher.send(args.method.upper(), config)

    if args.envelope:
        envelope = Result.ok(outcome.text) if outcome.ok else error_envelope(outcome.error)
        _print_json(envelope.to_dict())
    elif outcome.ok:
        sys.stdout.write(outcome.text)
        if outcome.text and not outcome.text.endswith("\n"):
            sys.stdout.write("\n")
    else:
        print(f"error: {outcome.error.message}", file=sys.stderr)

    return 0 if outcome.ok else 1


if __name__ == "__main__":
    raise SystemExit(main())
