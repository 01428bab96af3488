# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers.

Template and variable errors are caller bugs and are raised synchronously from
``invoke``. Transport and application errors are results of the remote call and
are only ever delivered through the callback or the awaitable.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class RestTemplateError(Exception):
    """Base class for every error raised or delivered by resttemplate."""


class TemplateError(RestTemplateError):
    """The template itself cannot produce a request."""


class TemplateVariableError(TemplateError):
    """A placeholder variable could not be resolved."""

    def __init__(self, name: str, message: str):
        super().__init__(message)
        self.name = name


class MissingRequiredVariable(TemplateVariableError):
    def __init__(self, name: str):
        super().__init__(name, f"Missing required variable: {name}")


class TypeCoercionError(TemplateVariableError, ValueError):
    def __init__(self, name: str, value: Any, type_name: str):
        super().__init__(name, f"Variable {name!r} cannot be coerced to {type_name}: {value!r}")
        self.value = value
        self.type_name = type_name


class TransportError(RestTemplateError):
    """The transport reported a failure without an HTTP response."""

    def __init__(
        self,
        message: str,
        *,
        error_type: str | None = None,
        category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR,
    ):
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.category = category


class ApplicationError(RestTemplateError):
    """The remote endpoint answered with a status code of 300 or above."""

    def __init__(self, status_code: int, message: str, *, body: Any = None, response: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.body = body
        self.response = response


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    import socket
    import ssl as ssl_module

    import httpx

    if isinstance(exc, TransportError):
        return exc.category

    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(
        exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)
    ):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def category_from_error_type(error_type: str | None) -> ErrorCategory:
    """Best-effort category for adapters that only report an exception class name."""
    name = (error_type or "").lower()
    if "timeout" in name:
        return ErrorCategory.TIMEOUT
    if "ssl" in name or "certificate" in name:
        return ErrorCategory.SSL_ERROR
    if "gaierror" in name or "dns" in name:
        return ErrorCategory.DNS_ERROR
    if "connect" in name or "network" in name or "protocol" in name:
        return ErrorCategory.CONNECTION_ERROR
    return ErrorCategory.UNKNOWN_ERROR


__all__ = [
    "ApplicationError",
    "ErrorCategory",
    "MissingRequiredVariable",
    "RestTemplateError",
    "TemplateError",
    "TemplateVariableError",
    "TransportError",
    "TypeCoercionError",
    "categorize_exception",
    "category_from_error_type",
]
