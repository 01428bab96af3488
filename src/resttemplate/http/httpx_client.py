# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""httpx-backed HttpClient implementation."""

from __future__ import annotations

import logging
import os
from contextlib import ExitStack
from typing import Any

import httpx

from ..config import DEFAULT_MAX_BODY_BYTES, HttpSettings, load_http_settings
from ..errors import TransportError
from .client import HttpClient
from .headers import normalize_headers
from .models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxClient(HttpClient):
    """Asynchronous httpx client wrapper.

    Network failures raise the original httpx exception and bodies over
    ``max_body_bytes`` raise TransportError; the invoker reports either through
    the caller's callback or awaitable.
    """

    def __init__(self, settings: HttpSettings | None = None, client: httpx.AsyncClient | None = None):
        self.settings = settings or load_http_settings()
        self._client = client or httpx.AsyncClient(
            follow_redirects=self.settings.allow_redirects,
            timeout=self.settings.timeout,
            verify=self.settings.verify_ssl,
        )

    def _open_files(self, request: HttpRequest, stack: ExitStack) -> list[tuple[str, Any]]:
        files: list[tuple[str, Any]] = []
        for attachment in request.files:
            handle = stack.enter_context(open(attachment.path, "rb"))
            files.append((attachment.field, (os.path.basename(attachment.path), handle)))
        return files

    async def request(self, request: HttpRequest) -> HttpResponse:
        headers = dict(request.headers or {})
        headers.setdefault("User-Agent", self.settings.user_agent)

        max_body_bytes = self.settings.max_body_bytes
        if max_body_bytes <= 0:
            max_body_bytes = DEFAULT_MAX_BODY_BYTES
        timeout = request.timeout if request.timeout is not None else self.settings.timeout

        with ExitStack() as stack:
            send_kwargs: dict[str, Any] = {}
            if request.is_multipart:
                send_kwargs["data"] = request.form or {}
                send_kwargs["files"] = self._open_files(request, stack)
            else:
                send_kwargs["content"] = request.body

            async with self._client.stream(
                request.method,
                request.url,
                headers=headers,
                timeout=timeout,
                follow_redirects=request.allow_redirects,
                **send_kwargs,
            ) as resp:
                content = bytearray()
                async for chunk in resp.aiter_bytes():
                    content.extend(chunk)
                    if len(content) > max_body_bytes:
                        logger.warning("Response body from %s exceeds %d bytes", request.url, max_body_bytes)
                        raise TransportError(
                            f"Response body exceeds {max_body_bytes} bytes",
                            error_type="ResponseTooLarge",
                        )

                encoding = resp.encoding or "utf-8"
                try:
                    text = bytes(content).decode(encoding, errors="replace")
                except LookupError:
                    text = bytes(content).decode("utf-8", errors="replace")

        return HttpResponse(
            ok=True,
            status_code=resp.status_code,
            headers=normalize_headers(resp.headers),
            text=text,
            content=bytes(content),
            url=str(resp.url),
            meta={
                "body_bytes_read": len(content),
                "body_bytes_limit": max_body_bytes,
            },
        )

    async def aclose(self) -> None:
        await self._client.aclose()
