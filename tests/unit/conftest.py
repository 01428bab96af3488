# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json
from pathlib import Path

import httpx
import pytest

from resttemplate.config import HttpSettings
from resttemplate.http.httpx_client import HttpxClient

FIXTURES = Path(__file__).parent / "fixtures"


def echo_payload(request: httpx.Request) -> dict:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json") and request.content:
        body = json.loads(request.content)
    else:
        body = request.content.decode("utf-8", errors="replace")
    return {
        "method": request.method,
        "path": request.url.path,
        "query": dict(request.url.params),
        "headers": dict(request.headers),
        "body": body,
    }


def make_echo_client(status: int = 200, settings: HttpSettings | None = None) -> HttpxClient:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, json=echo_payload(request))

    return HttpxClient(settings or HttpSettings(), client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


@pytest.fixture
def echo_client() -> HttpxClient:
    return make_echo_client()


@pytest.fixture
def template_descriptor() -> dict:
    return json.loads((FIXTURES / "request-template.json").read_text(encoding="utf-8"))


@pytest.fixture
def echo_client_factory():
    return make_echo_client
