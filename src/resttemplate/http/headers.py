# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization utilities.

HTTP header field names are case-insensitive (RFC 9110). Templates keep the
caller's casing, so lookups and removals here match names case-insensitively.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _coerce_headers_mapping(headers: Any) -> Mapping[object, object] | None:
    """
    Best-effort coercion of "dict-like" header containers into a Mapping.

    Transports may hand back plain dicts, httpx.Headers or an iterable of pairs.
    """
    if not headers:
        return None
    if isinstance(headers, Mapping):
        return headers

    items = getattr(headers, "items", None)
    if callable(items):
        return dict(items())

    try:
        return dict(headers)
    except (TypeError, ValueError):
        return None


def normalize_headers(headers: Any) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping."""
    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return {}
    out: dict[str, str] = {}
    for key, value in coerced.items():
        if key is None:
            continue
        name = str(key).strip().lower()
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


def header_value(headers: Any, name: str, default: str = "") -> str:
    """Return a header value using case-insensitive key matching."""
    if not headers or not name:
        return default

    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return default

    lower = str(name).lower()
    for key, value in coerced.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


def has_header(headers: Mapping[str, Any] | None, name: str) -> bool:
    lower = name.lower()
    return any(str(key).lower() == lower for key in (headers or {}))


def without_header(headers: Mapping[str, Any], name: str) -> dict[str, Any]:
    """Copy ``headers`` dropping every casing of ``name``."""
    lower = name.lower()
    return {key: value for key, value in headers.items() if str(key).lower() != lower}


def is_json_content_type(headers: Any) -> bool:
    return "json" in header_value(headers, "content-type").lower()


__all__ = [
    "has_header",
    "header_value",
    "is_json_content_type",
    "normalize_headers",
    "without_header",
]
