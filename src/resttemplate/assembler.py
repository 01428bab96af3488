# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Combine resolved template parts into one transport-ready HttpRequest."""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

import httpx

from .config import HttpSettings, load_http_settings
from .errors import TemplateError
from .http.headers import has_header, without_header
from .http.models import Attachment, HttpRequest
from .template.substitution import render_value

JSON_CONTENT_TYPE = "application/json"


def to_json(value: Any) -> str:
    """Strict JSON encoding; NaN and infinities are rejected."""
    try:
        return json.dumps(value, allow_nan=False)
    except ValueError as exc:
        raise TemplateError(f"Value cannot be encoded as JSON: {exc}") from None


def _field_value(value: Any) -> str:
    if isinstance(value, (Mapping, list, tuple)):
        return to_json(value)
    return render_value(value)


def flatten_query(query: Mapping[str, Any], prefix: str = "") -> list[tuple[str, str]]:
    """
    Flatten a resolved query mapping into ordered key/value pairs.

    Nested mappings use bracket notation (``a[b]=c``), sequences repeat the key
    and None values are dropped.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in query.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if value is None:
            continue
        if isinstance(value, Mapping):
            pairs.extend(flatten_query(value, name))
        elif isinstance(value, (list, tuple)):
            pairs.extend((name, _field_value(item)) for item in value if item is not None)
        else:
            pairs.append((name, render_value(value)))
    return pairs


def build_url(url: str, query: Mapping[str, Any] | None) -> str:
    """Append the encoded query to ``url``, keeping any query it already has."""
    pairs = flatten_query(query or {})
    if not pairs:
        return url
    return str(httpx.URL(url).copy_merge_params(pairs))


def build_headers(headers: Mapping[str, Any] | None) -> dict[str, str]:
    return {str(name): render_value(value) for name, value in (headers or {}).items() if value is not None}


def build_form(body: Any) -> dict[str, str]:
    if body is None:
        return {}
    if not isinstance(body, Mapping):
        raise TemplateError("A request with attachments needs a mapping body (or none)")
    return {str(key): _field_value(value) for key, value in body.items() if value is not None}


def assemble(
    method: str,
    url: str,
    *,
    headers: Mapping[str, Any] | None = None,
    query: Mapping[str, Any] | None = None,
    body: Any = None,
    attachments: Iterable[Attachment] = (),
    settings: HttpSettings | None = None,
) -> HttpRequest:
    """Build the wire-level request from already-resolved parts."""
    settings = settings or load_http_settings()
    files = list(attachments)
    request_headers = build_headers(headers)
    if not has_header(request_headers, "accept"):
        request_headers["Accept"] = JSON_CONTENT_TYPE

    request = HttpRequest(
        url=build_url(url, query),
        method=(method or "GET").upper(),
        timeout=settings.timeout,
        allow_redirects=settings.allow_redirects,
    )

    if files:
        # The transport generates the multipart boundary header.
        request.headers = without_header(request_headers, "content-type")
        request.form = build_form(body)
        request.files = files
        return request

    if body is not None:
        if not has_header(request_headers, "content-type"):
            request_headers["Content-Type"] = JSON_CONTENT_TYPE
        request.body = to_json(body).encode("utf-8")
    request.headers = request_headers
    return request


__all__ = ["assemble", "build_form", "build_headers", "build_url", "flatten_query", "to_json"]
