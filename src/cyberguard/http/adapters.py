# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""In-process HttpClient adapters."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from typing import Any

from .client import HttpClient
from .models import HttpRequest, HttpResponse

Responder = Callable[[HttpRequest], HttpResponse]


class StubHttpClient(HttpClient):
    """
    Deterministic, programmable HttpClient for tests and offline use.

    Responses are keyed by ``(METHOD, url)``. Queued responses are consumed in
    order; the last one is repeated once the queue runs dry. A callable may be
    registered instead of a fixed response.
    """

    def __init__(self) -> None:
        self._queues: dict[tuple[str, str], deque[HttpResponse | Responder]] = {}
        self.requests: list[HttpRequest] = []
        self.closed = False

    def add(self, method: str, url: str, *responses: HttpResponse | Responder) -> None:
        queue = self._queues.setdefault((method.upper(), url), deque())
        queue.extend(responses)

    def add_json(self, method: str, url: str, status_code: int, payload: Any = None) -> None:
        self.add(method, url, HttpResponse.from_json(status_code, payload))

    def calls(self, method: str, url: str) -> list[HttpRequest]:
        return [r for r in self.requests if r.method.upper() == method.upper() and r.url == url]

    def request(self, request: HttpRequest) -> HttpResponse:
        self.requests.append(request)
        queue = self._queues.get((request.method.upper(), request.url))
        if not queue:
            return HttpResponse(ok=False, url=request.url, error_message="No stubbed response configured")
        entry = queue.popleft() if len(queue) > 1 else queue[0]
        if callable(entry):
            return entry(request)
        return entry

    def close(self) -> None:
        self.closed = True
