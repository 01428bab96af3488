# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""resttemplate CLI: load a JSON request template and invoke it once."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import httpx

from ..builder import RequestTemplate
from ..config import HttpSettings, load_http_settings
from ..errors import ApplicationError, RestTemplateError, TemplateError
from ..log import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Invoke a JSON request template once and print the result")
    parser.add_argument("template", help="Path to a JSON request template")
    parser.add_argument(
        "arguments",
        nargs="*",
        metavar="NAME=VALUE",
        help="Template variables; typed placeholders coerce the text value",
    )
    parser.add_argument(
        "--full-response",
        action="store_true",
        help="Print status code, headers and body instead of the body alone",
    )
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed endpoints)",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: RESTTEMPLATE_LOG_LEVEL or WARNING)")
    return parser


def parse_assignments(items: list[str]) -> dict[str, str]:
    arguments: dict[str, str] = {}
    for item in items:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise ValueError(f"Expected NAME=VALUE, got {item!r}")
        arguments[name] = value
    return arguments


def load_template(path: str) -> dict[str, Any]:
    descriptor = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(descriptor, dict):
        raise TemplateError(f"{path}: a request template must be a JSON object")
    return descriptor


def _print_json(data: Any) -> None:
    payload = data.to_dict() if hasattr(data, "to_dict") else data
    json.dump(payload, sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")


async def _invoke(template: RequestTemplate, arguments: dict[str, str]) -> Any:
    try:
        return await template.invoke(arguments)
    finally:
        await template.aclose()


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        arguments = parse_assignments(args.arguments)
    except ValueError as exc:
        parser.error(str(exc))

    settings: HttpSettings = load_http_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False

    try:
        descriptor = load_template(args.template)
        if args.full_response:
            descriptor["fullResponse"] = True
        template = RequestTemplate.from_mapping(descriptor, settings=settings)
        result = asyncio.run(_invoke(template, arguments))
    except TemplateError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    except ApplicationError as exc:
        _print_json({"status_code": exc.status_code, "message": exc.message, "body": exc.body})
        return 1
    except (RestTemplateError, httpx.HTTPError, OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    _print_json(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
