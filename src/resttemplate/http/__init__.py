# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP client exports."""

from .adapters import CallbackTransportAdapter, StubHttpClient
from .client import HttpClient, create_default_http_client
from .headers import header_value, normalize_headers
from .httpx_client import HttpxClient
from .models import Attachment, FullResponse, Headers, HttpRequest, HttpResponse

__all__ = [
    "Attachment",
    "CallbackTransportAdapter",
    "FullResponse",
    "Headers",
    "HttpClient",
    "HttpxClient",
    "HttpRequest",
    "HttpResponse",
    "StubHttpClient",
    "create_default_http_client",
    "header_value",
    "normalize_headers",
]
