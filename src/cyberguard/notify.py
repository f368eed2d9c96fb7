# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""User-facing notifications emitted by the stores."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from .errors import ApiError, CyberGuardError, TransportError, ValidationError

logger = logging.getLogger(__name__)


class Level(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    level: Level = Level.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.level == Level.ERROR


class NotificationSink(Protocol):
    def notify(self, notification: Notification) -> None: ...


class LoggingSink:
    """Forward notifications to the ``cyberguard.notify`` logger."""

    def notify(self, notification: Notification) -> None:
        log = logger.warning if notification.is_error else logger.info
        log("%s: %s", notification.title, notification.description)


class CollectingSink:
    """Keep notifications in memory (CLI rendering, tests)."""

    def __init__(self) -> None:
        self.items: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.items.append(notification)

    @property
    def errors(self) -> list[Notification]:
        return [item for item in self.items if item.is_error]

    @property
    def last(self) -> Notification | None:
        return self.items[-1] if self.items else None

    def drain(self) -> list[Notification]:
        items, self.items = self.items, []
        return items


def describe_error(exc: CyberGuardError, fallback: str) -> str:
    """Turn a client error into the sentence shown to the user."""
    if isinstance(exc, ValidationError):
        return exc.message
    if isinstance(exc, TransportError):
        return exc.reason or fallback
    if isinstance(exc, ApiError):
        return exc.message or fallback
    return str(exc) or fallback


def success(title: str, description: str) -> Notification:
    return Notification(title, description, Level.SUCCESS)


def failure(exc: CyberGuardError, fallback: str, title: str = "Error") -> Notification:
    return Notification(title, describe_error(exc, fallback), Level.ERROR)
