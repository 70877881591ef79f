"""Transient status-bar notifications."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum

NOTIFICATION_TTL_SECONDS = 5.0


class NotificationKind(Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"


@dataclass
class Notification:
    message: str
    kind: NotificationKind
    created_at: float = field(default_factory=time.monotonic)

    @classmethod
    def success(cls, message: str) -> Notification:
        return cls(message, NotificationKind.SUCCESS)

    @classmethod
    def info(cls, message: str) -> Notification:
        return cls(message, NotificationKind.INFO)

    @classmethod
    def warning(cls, message: str) -> Notification:
        return cls(message, NotificationKind.WARNING)

    def is_expired(self, now: float | None = None) -> bool:
        current = time.monotonic() if now is None else now
        return current - self.created_at >= NOTIFICATION_TTL_SECONDS
