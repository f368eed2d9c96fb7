# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Common plumbing for the cached resource stores."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from ..errors import CyberGuardError
from ..notify import LoggingSink, NotificationSink, failure, success
from ..session import Session

logger = logging.getLogger(__name__)


class Store:
    """
    Base for stores that mirror a backend collection.

    Local state only changes after the backend confirms a mutation, either by
    applying the returned entity or by refetching. A failed call leaves the
    cache as it was and reports an error notification.
    """

    def __init__(
        self,
        session: Session,
        sink: NotificationSink | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.session = session
        self.sink = sink or LoggingSink()
        self.loading = False
        self.last_synced: float | None = None
        self._clock = clock

    def _mark_synced(self) -> None:
        self.last_synced = self._clock()

    def is_stale(self, max_age: float | None = None) -> bool:
        if self.last_synced is None:
            return True
        limit = self.session.settings.sync_interval if max_age is None else max_age
        return self._clock() - self.last_synced >= limit

    def fetch(self) -> bool:  # pragma: no cover - overridden
        raise NotImplementedError

    def refresh_if_stale(self, max_age: float | None = None) -> bool:
        """Refetch when the cache is older than ``max_age`` (default: the sync interval)."""
        if not self.is_stale(max_age):
            return False
        return self.fetch()

    def _ok(self, title: str, description: str) -> None:
        self.sink.notify(success(title, description))

    def _fail(self, exc: CyberGuardError, fallback: str) -> None:
        logger.debug("%s: %s", fallback, exc)
        self.sink.notify(failure(exc, fallback))
