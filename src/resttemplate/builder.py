# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""RequestTemplate: declarative request shape, invoked repeatedly with different arguments."""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

from .assembler import assemble
from .config import HttpSettings, load_http_settings
from .errors import TemplateError
from .http.client import HttpClient, create_default_http_client
from .http.models import Attachment, HttpRequest
from .invoker import Callback, Invoker
from .operation import Operation, normalize_names
from .template.substitution import (
    ParsedString,
    compile_structure,
    iter_variables,
    render_value,
    substitute,
)
from .template.tokens import Variable


def _attachments_from(entries: Any) -> list[Attachment]:
    attachments: list[Attachment] = []
    for entry in entries or []:
        if isinstance(entry, Attachment):
            attachments.append(entry)
            continue
        if not isinstance(entry, Mapping):
            raise TemplateError(f"Attachment entries must be mappings, got {type(entry).__name__}")
        field = entry.get("field")
        path = entry.get("filePath", entry.get("file_path", entry.get("path")))
        if not field or not path:
            raise TemplateError("Attachment entries need both 'field' and 'filePath'")
        attachments.append(Attachment(field=str(field), path=str(path)))
    return attachments


class RequestTemplate:
    """
    A parameterized HTTP request.

    Build it from ``(method, url)`` and the fluent ``headers``/``query``/``body``/
    ``attach`` calls, or from a single descriptor mapping with the keys
    ``method``, ``url``, ``headers``, ``query``, ``body``, ``fullResponse`` and
    ``formData``. Every string leaf is parsed once when it is set; ``invoke``
    only resolves the cached tokens against its arguments.
    """

    def __init__(
        self,
        method: str | Mapping[str, Any] = "GET",
        url: str | None = None,
        *,
        client: HttpClient | None = None,
        settings: HttpSettings | None = None,
    ):
        descriptor: Mapping[str, Any] = method if isinstance(method, Mapping) else {"method": method, "url": url}
        raw_url = descriptor.get("url")
        if not isinstance(raw_url, str) or not raw_url:
            raise TemplateError("A request template needs a url")

        self.settings = settings or load_http_settings()
        self._owns_client = client is None
        self.client = client or create_default_http_client(self.settings)
        self.method = str(descriptor.get("method") or "GET").upper()
        self._url = ParsedString.from_text(raw_url)
        self._headers: dict[str, Any] = {}
        self._query: dict[str, Any] = {}
        self._body: Any = None
        self._attachments: list[Attachment] = []
        full_response = descriptor.get("fullResponse", descriptor.get("full_response", False))
        self._invoker = Invoker(self.client, full_response=bool(full_response))

        if descriptor.get("headers") is not None:
            self.headers(descriptor["headers"])
        if descriptor.get("query") is not None:
            self.query(descriptor["query"])
        if descriptor.get("body") is not None:
            self.body(descriptor["body"])
        self._attachments = _attachments_from(descriptor.get("formData", descriptor.get("attachments")))

    @classmethod
    def from_mapping(
        cls,
        descriptor: Mapping[str, Any],
        *,
        client: HttpClient | None = None,
        settings: HttpSettings | None = None,
    ) -> RequestTemplate:
        return cls(descriptor, client=client, settings=settings)

    @property
    def url(self) -> str:
        return self._url.source

    @property
    def full_response(self) -> bool:
        return self._invoker.full_response

    @property
    def attachments(self) -> tuple[Attachment, ...]:
        return tuple(self._attachments)

    def headers(self, headers: Mapping[str, Any]) -> RequestTemplate:
        if not isinstance(headers, Mapping):
            raise TemplateError("headers must be a mapping")
        self._headers = compile_structure(headers)
        return self

    def query(self, query: Mapping[str, Any]) -> RequestTemplate:
        if not isinstance(query, Mapping):
            raise TemplateError("query must be a mapping")
        self._query = compile_structure(query)
        return self

    def body(self, body: Any) -> RequestTemplate:
        self._body = compile_structure(body)
        return self

    def attach(self, field: str, file_path: str) -> RequestTemplate:
        self._attachments.append(Attachment(field=field, path=str(file_path)))
        return self

    def variables(self) -> tuple[Variable, ...]:
        """All placeholder variables, in declaration order, first occurrence per name."""
        seen: dict[str, Variable] = {}
        for part in (self._url, self._headers, self._query, self._body):
            for variable in iter_variables(part):
                seen.setdefault(variable.name, variable)
        return tuple(seen.values())

    def build_request(self, arguments: Mapping[str, Any] | None = None) -> HttpRequest:
        """Resolve every placeholder and assemble the request; raises on variable errors."""
        arguments = arguments if arguments is not None else {}
        return assemble(
            self.method,
            render_value(substitute(self._url, arguments)),
            headers=substitute(self._headers, arguments),
            query=substitute(self._query, arguments),
            body=substitute(self._body, arguments),
            attachments=self._attachments,
            settings=self.settings,
        )

    def invoke(
        self,
        arguments: Mapping[str, Any] | Callback | None = None,
        callback: Callback | None = None,
    ) -> asyncio.Task[Any] | None:
        """
        Invoke the template on the running event loop.

        Variable errors raise immediately, before anything is sent. Otherwise,
        with a callback, ``callback(error, value, response)`` is called once and
        None is returned; without one, a task resolving to the body (or a
        FullResponse) is returned.
        """
        if callable(arguments) and callback is None:
            arguments, callback = None, arguments
        request = self.build_request(arguments)  # type: ignore[arg-type]
        return self._invoker.dispatch(request, callback)

    def operation(self, *names: Any) -> Operation:
        return Operation(self, normalize_names(names))

    async def aclose(self) -> None:
        """Close the transport when this template created it."""
        if self._owns_client:
            await self.client.aclose()

    def __repr__(self) -> str:
        return f"RequestTemplate({self.method} {self.url})"


__all__ = ["RequestTemplate"]
