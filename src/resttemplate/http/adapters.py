# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Adapters to integrate external transports with the HttpClient protocol."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from typing import Any

from ..errors import TransportError
from .client import HttpClient
from .headers import normalize_headers
from .models import HttpRequest, HttpResponse

DoneCallback = Callable[..., None]
CallbackTransport = Callable[[HttpRequest, DoneCallback], None]


def _as_http_response(raw: Any, body: Any, request: HttpRequest) -> HttpResponse:
    if isinstance(raw, HttpResponse):
        response = raw
    elif isinstance(raw, Mapping):
        data = dict(raw)
        if body is not None:
            data["body"] = body
        response = HttpResponse.from_mapping(data)
    else:
        status_code = getattr(raw, "status_code", getattr(raw, "statusCode", None))
        response = HttpResponse.from_mapping(
            {
                "status_code": status_code,
                "headers": normalize_headers(getattr(raw, "headers", None)),
                "body": body,
                "url": getattr(raw, "url", None),
            }
        )
    if body is not None and not response.text and not response.content:
        if isinstance(body, (bytes, bytearray)):
            response.content = bytes(body)
            response.text = response.content.decode("utf-8", errors="replace")
        elif isinstance(body, str):
            response.text = body
            response.content = body.encode("utf-8")
    if response.url is None:
        response.url = request.url
    return response


class CallbackTransportAdapter(HttpClient):
    """
    Adapter for completion-callback transports of the shape ``transport(request, done)``.

    ``done(error, response, body)`` may be called from any thread; only the first
    call counts. ``response`` may be an HttpResponse, a mapping, or any object
    exposing ``status_code``/``statusCode`` and ``headers``.
    """

    def __init__(self, transport: CallbackTransport):
        self._transport = transport

    async def request(self, request: HttpRequest) -> HttpResponse:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[tuple[Any, Any]] = loop.create_future()

        def settle(error: Any, raw: Any, body: Any) -> None:
            if future.done():
                return
            if error is None:
                future.set_result((raw, body))
            elif isinstance(error, BaseException):
                future.set_exception(error)
            else:
                future.set_exception(TransportError(str(error)))

        def done(error: Any = None, raw: Any = None, body: Any = None) -> None:
            loop.call_soon_threadsafe(settle, error, raw, body)

        self._transport(request, done)
        raw, body = await future
        return _as_http_response(raw, body, request)

    async def aclose(self) -> None:
        return None


class StubHttpClient(HttpClient):
    """Deterministic, programmable HttpClient for tests.

    Responses are matched on the full URL first, then on the URL without its
    query string, then fall back to ``default``.
    """

    def __init__(
        self,
        responses: dict[str, HttpResponse] | None = None,
        default: HttpResponse | None = None,
    ):
        self._responses = responses or {}
        self._default = default
        self.requests: list[HttpRequest] = []

    def add(self, url: str, response: HttpResponse) -> None:
        self._responses[url] = response

    async def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        for key in (request.url, request.url.split("?", 1)[0]):
            if key in self._responses:
                return self._responses[key]
        if self._default is not None:
            return self._default
        return HttpResponse(ok=False, status_code=None, error_message="No stubbed response configured")

    async def aclose(self) -> None:
        return None
