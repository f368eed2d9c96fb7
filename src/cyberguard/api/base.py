# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared request/response handling for the endpoint wrappers."""

from __future__ import annotations

import logging
from typing import Any

from ..auth.transport import AuthenticatedTransport
from ..errors import ApiError, ErrorCategory, TransportError
from ..http.models import HttpRequest, HttpResponse

logger = logging.getLogger(__name__)


def error_message(response: HttpResponse, fallback: str) -> str:
    """Pull the backend's ``msg``/``message``/``error`` field, falling back to the raw body."""
    payload = response.json_or_none()
    if isinstance(payload, dict):
        for key in ("msg", "message", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    text = response.text.strip()
    if text and payload is None and len(text) <= 500:
        return text
    return fallback


def expect_object(payload: Any, fallback: str) -> dict[str, Any]:
    """Return a 2xx JSON object body, or raise ApiError when the backend sent anything else."""
    if not isinstance(payload, dict):
        raise ApiError(200, f"{fallback}: unexpected response")
    return payload


class Endpoint:
    """Base class for a group of related backend endpoints."""

    def __init__(self, transport: AuthenticatedTransport):
        self.transport = transport

    def call(
        self,
        method: str,
        *segments: str,
        payload: Any = None,
        authenticated: bool = True,
        fallback: str = "Request failed",
        error_cls: type[ApiError] = ApiError,
    ) -> Any:
        """
        Issue a request and return the decoded JSON body.

        Raises :class:`TransportError` when no response arrived and
        ``error_cls`` (an :class:`ApiError`) for any non-2xx status.
        """
        url = self.transport.url(*segments)
        if payload is None:
            request = HttpRequest(url=url, method=method)
        else:
            request = HttpRequest.json(url, method, payload)

        response = self.transport.send(request, authenticated=authenticated)
        if response.status_code is None:
            logger.debug("%s %s transport failure: %s", method, url, response.error_message)
            raise TransportError(
                response.error_message or fallback,
                response.error_category or ErrorCategory.UNKNOWN_ERROR,
            )
        if not response.is_success:
            raise error_cls(response.status_code, error_message(response, fallback))
        try:
            return response.json()
        except ValueError:
            # Some mutation endpoints answer 2xx with a plain-text body.
            return None
