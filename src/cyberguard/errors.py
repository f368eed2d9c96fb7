# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception types."""

from __future__ import annotations

import socket
import ssl as ssl_module
from collections.abc import Sequence
from enum import Enum

import httpx


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    RATE_LIMITED = "RATE_LIMITED"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    NONE = "NONE"


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.
    """
    if isinstance(exc, httpx.TimeoutException):
        return ErrorCategory.TIMEOUT

    if isinstance(exc, (httpx.ConnectError, httpx.RemoteProtocolError, httpx.NetworkError, httpx.ProxyError)):
        return ErrorCategory.CONNECTION_ERROR

    if isinstance(exc, (ssl_module.SSLError, ssl_module.CertificateError)):
        return ErrorCategory.SSL_ERROR

    if isinstance(exc, (socket.gaierror, socket.herror)):
        return ErrorCategory.DNS_ERROR

    if isinstance(exc, (ConnectionError, ConnectionRefusedError, ConnectionResetError)):
        return ErrorCategory.CONNECTION_ERROR

    if getattr(exc, "response", None) is not None:
        status = getattr(exc.response, "status_code", None)
        if status == 429:
            return ErrorCategory.RATE_LIMITED

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "The server took too long to respond",
        ErrorCategory.RATE_LIMITED: "Too many requests, try again shortly",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Could not reach the CyberGuard server",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.UNKNOWN_ERROR: "Network error",
        ErrorCategory.NONE: "",
        None: "",
    }
    return mapping.get(category, "Request failed due to network error")


class CyberGuardError(Exception):
    """Base class for every error raised by the client."""


class TransportError(CyberGuardError):
    """The request never produced an HTTP status (network, DNS, TLS, timeout)."""

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR):
        super().__init__(message)
        self.category = category

    @property
    def reason(self) -> str:
        return error_category_to_reason(self.category)


class ApiError(CyberGuardError):
    """The backend answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message

    def __str__(self) -> str:
        return f"{self.message} (HTTP {self.status_code})"


class AuthenticationError(ApiError):
    """Credentials were rejected by the backend."""


class NotAuthenticatedError(CyberGuardError):
    """An operation needs a logged-in session."""


class PermissionDeniedError(CyberGuardError):
    """The logged-in user lacks the role an operation needs."""


class ValidationError(CyberGuardError):
    """Input was rejected client-side before any request was sent."""

    def __init__(self, message: str, fields: Sequence[str] = ()):
        super().__init__(message)
        self.message = message
        self.fields = tuple(fields)


__all__ = [
    "ApiError",
    "AuthenticationError",
    "CyberGuardError",
    "ErrorCategory",
    "NotAuthenticatedError",
    "PermissionDeniedError",
    "TransportError",
    "ValidationError",
    "categorize_exception",
    "error_category_to_reason",
]
