# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
Dispatch assembled requests and classify responses.

``Invoker.execute`` is the single asynchronous producer: it never raises for
transport or HTTP failures and instead returns an InvocationResult. ``dispatch``
adapts that result either to a completion callback or to an asyncio.Task.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx

from .errors import (
    ApplicationError,
    TransportError,
    categorize_exception,
    category_from_error_type,
)
from .http.client import HttpClient
from .http.headers import is_json_content_type
from .http.models import FullResponse, HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

Callback = Callable[[BaseException | None, Any, HttpResponse | None], Any]


@dataclass
class InvocationResult:
    error: BaseException | None = None
    value: Any = None
    response: HttpResponse | None = None


def decode_body(response: HttpResponse) -> Any:
    """Return the JSON-decoded body for JSON responses, otherwise the text."""
    if response.text and is_json_content_type(response.headers):
        try:
            return json.loads(response.text)
        except ValueError:
            logger.debug("Response from %s claims JSON but does not parse", response.url)
    return response.text


def error_message(status_code: int, body: Any) -> str:
    """Derive an error message from a decoded error body."""
    if isinstance(body, dict):
        nested = body.get("error")
        if isinstance(nested, dict) and isinstance(nested.get("message"), str) and nested["message"]:
            return nested["message"]
        for key in ("message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    if isinstance(body, str) and body.strip():
        return body.strip()
    if body not in (None, "", {}, []):
        return json.dumps(body)
    reason = httpx.codes.get_reason_phrase(status_code)
    return reason or f"HTTP {status_code}"


class Invoker:
    """Runs requests through an HttpClient and shapes the outcome."""

    def __init__(self, client: HttpClient, *, full_response: bool = False):
        self.client = client
        self.full_response = full_response
        self._pending: set[asyncio.Task[Any]] = set()

    def classify(self, response: HttpResponse) -> InvocationResult:
        if response.status_code is None:
            message = response.error_message or "Transport returned no response"
            return InvocationResult(
                error=TransportError(
                    message,
                    error_type=response.error_type,
                    category=category_from_error_type(response.error_type),
                ),
                response=response,
            )

        body = decode_body(response)
        if response.status_code >= 300:
            error = ApplicationError(
                response.status_code,
                error_message(response.status_code, body),
                body=body,
                response=response,
            )
            return InvocationResult(error=error, value=body, response=response)

        if self.full_response:
            value: Any = FullResponse(status_code=response.status_code, headers=dict(response.headers), body=body)
        else:
            value = body
        return InvocationResult(value=value, response=response)

    async def execute(self, request: HttpRequest) -> InvocationResult:
        logger.debug("Dispatching %s %s", request.method, request.url)
        try:
            response = await self.client.request(request)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Transport failed for %s %s (%s): %s", request.method, request.url, categorize_exception(exc).value, exc)
            return InvocationResult(error=exc)

        result = self.classify(response)
        if isinstance(result.error, TransportError):
            logger.debug("Transport failed for %s %s (%s): %s", request.method, request.url, result.error.category.value, result.error)
        else:
            logger.debug("%s %s -> %s", request.method, request.url, response.status_code)
        return result

    async def _settle(self, request: HttpRequest) -> Any:
        result = await self.execute(request)
        if result.error is not None:
            raise result.error
        return result.value

    async def _notify(self, request: HttpRequest, callback: Callback) -> None:
        result = await self.execute(request)
        try:
            callback(result.error, result.value, result.response)
        except Exception as exc:  # noqa: BLE001
            logger.exception("Callback for %s %s failed: %s", request.method, request.url, exc)

    def dispatch(self, request: HttpRequest, callback: Callback | None = None) -> asyncio.Task[Any] | None:
        """
        Start the call on the running event loop.

        With a callback, ``callback(error, value, response)`` runs once the call
        completes and None is returned. Without one, the returned task resolves to
        the value or raises the error.
        """
        loop = asyncio.get_running_loop()
        if callback is None:
            return loop.create_task(self._settle(request))

        task = loop.create_task(self._notify(request, callback))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return None


__all__ = ["Callback", "InvocationResult", "Invoker", "decode_body", "error_message"]
