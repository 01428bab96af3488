# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
resttemplate package entrypoint.

Declarative, parameterized HTTP request templates. A template string embeds
``{name}``, ``{name=default:type}`` or ``{!name}`` placeholders; invoking the
template resolves them against an argument map, assembles the request and sends
it through an injectable HTTP client, delivering the result to a callback or an
asyncio task.
"""

from .builder import RequestTemplate
from .config import HttpSettings, load_http_settings
from .errors import (
    ApplicationError,
    ErrorCategory,
    MissingRequiredVariable,
    RestTemplateError,
    TemplateError,
    TemplateVariableError,
    TransportError,
    TypeCoercionError,
)
from .http import (
    Attachment,
    CallbackTransportAdapter,
    FullResponse,
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpxClient,
    StubHttpClient,
    create_default_http_client,
)
from .invoker import InvocationResult, Invoker
from .log import setup_logging
from .operation import Operation
from .template import Literal, Variable, VariableType, parse
from .version import __version__

__all__ = [
    "ApplicationError",
    "Attachment",
    "CallbackTransportAdapter",
    "ErrorCategory",
    "FullResponse",
    "HttpClient",
    "HttpRequest",
    "HttpResponse",
    "HttpSettings",
    "HttpxClient",
    "InvocationResult",
    "Invoker",
    "Literal",
    "MissingRequiredVariable",
    "Operation",
    "RequestTemplate",
    "RestTemplateError",
    "StubHttpClient",
    "TemplateError",
    "TemplateVariableError",
    "TransportError",
    "TypeCoercionError",
    "Variable",
    "VariableType",
    "create_default_http_client",
    "load_http_settings",
    "parse",
    "setup_logging",
    "__version__",
]
