"""Per-request notification collector.

Replaces a global message manager: services append to a bag owned by the
caller, which decides how to render the collected messages.
"""
from __future__ import annotations

from app.models.db.enums import NotificationLevel
from app.models.schemas.config import Notification


class NotificationBag:
    def __init__(self) -> None:
        self._messages: list[Notification] = []

    def _add(self, level: NotificationLevel, message: str) -> None:
        self._messages.append(Notification(level=level, message=message))

    def add_error(self, message: str) -> None:
        self._add(NotificationLevel.ERROR, message)

    def add_warning(self, message: str) -> None:
        self._add(NotificationLevel.WARNING, message)

    def add_notice(self, message: str) -> None:
        self._add(NotificationLevel.NOTICE, message)

    def add_success(self, message: str) -> None:
        self._add(NotificationLevel.SUCCESS, message)

    @property
    def messages(self) -> list[Notification]:
        return list(self._messages)

    def by_level(self, level: NotificationLevel) -> list[Notification]:
        return [m for m in self._messages if m.level == level]

    def __len__(self) -> int:
        return len(self._messages)


__all__ = ["NotificationBag"]
