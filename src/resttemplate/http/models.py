# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models shared by the assembler, invoker and transports."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

Headers = dict[str, str]


@dataclass(frozen=True)
class Attachment:
    """A file uploaded as one multipart form field."""

    field: str
    path: str


@dataclass
class HttpRequest:
    """Normalized request representation consumed by HttpClient implementations.

    ``url`` already carries the encoded query. Either ``body`` (raw bytes) or
    ``form``/``files`` (multipart) is populated, never both.
    """

    url: str
    method: str = "GET"
    headers: Headers | None = None
    body: bytes | str | None = None
    form: dict[str, str] | None = None
    files: list[Attachment] = field(default_factory=list)
    timeout: float | None = None
    allow_redirects: bool = True

    @property
    def is_multipart(self) -> bool:
        return bool(self.files)


@dataclass
class HttpResponse:
    """Normalized HTTP response returned by transports."""

    ok: bool
    status_code: int | None = None
    headers: Headers = field(default_factory=dict)
    text: str = ""
    content: bytes = b""
    url: str | None = None
    error_message: str | None = None
    error_type: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> HttpResponse:
        """Normalize a dictionary-like response, e.g. one produced by a callback transport."""
        raw_headers: Any = data.get("headers") or {}
        if raw_headers and not isinstance(raw_headers, Mapping):
            try:
                raw_headers = dict(raw_headers)
            except (TypeError, ValueError):
                raw_headers = {}
        headers: Headers = {}
        if isinstance(raw_headers, Mapping):
            for key, value in raw_headers.items():
                if key is None:
                    continue
                headers[str(key).lower()] = "" if value is None else str(value)

        raw_body = data.get("body")
        content: bytes = b""
        text: str = ""
        if isinstance(raw_body, (bytes, bytearray, memoryview)):
            content = bytes(raw_body)
            text = content.decode("utf-8", errors="replace")
        elif isinstance(raw_body, str):
            text = raw_body
            content = raw_body.encode("utf-8")

        status_code = data.get("status_code", data.get("statusCode"))
        ok = data.get("ok")
        return cls(
            ok=bool(ok) if ok is not None else status_code is not None,
            status_code=status_code,
            headers=headers,
            text=text,
            content=content,
            url=data.get("url"),
            error_message=data.get("error_message"),
            error_type=data.get("error_type"),
            meta={
                k: v
                for k, v in data.items()
                if k not in {"ok", "status_code", "statusCode", "headers", "body", "url", "error_message", "error_type"}
            },
        )


@dataclass(frozen=True)
class FullResponse:
    """Status, headers and decoded body delivered when a template asks for the full response."""

    status_code: int
    headers: Headers
    body: Any

    def to_dict(self) -> dict[str, Any]:
        return {"status_code": self.status_code, "headers": dict(self.headers), "body": self.body}
