"""
Notifications - user-facing success / error / warning messages.

Services and the wizard report outcomes ("Image deleted", "3 image(s)
processed") through an injected NotificationService. Calls are
fire-and-forget: they never block and never raise.

NotificationOutbox logs every message and keeps it until the UI drains it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from hestia.shared.core.logging import get_logger

logger = get_logger(__name__)


class NotificationLevel(str, Enum):
    """Severity of a user-facing notification."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Notification:
    """One user-facing message."""

    level: NotificationLevel
    message: str
    description: Optional[str] = None


class NotificationService:
    """Sink for user-facing messages. Subclasses decide where they go."""

    def notify(self, notification: Notification) -> None:
        raise NotImplementedError

    def success(self, message: str, description: Optional[str] = None) -> None:
        self.notify(Notification(NotificationLevel.SUCCESS, message, description))

    def error(self, message: str, description: Optional[str] = None) -> None:
        self.notify(Notification(NotificationLevel.ERROR, message, description))

    def warning(self, message: str, description: Optional[str] = None) -> None:
        self.notify(Notification(NotificationLevel.WARNING, message, description))


class NotificationOutbox(NotificationService):
    """Logs notifications and queues them for the UI to drain."""

    def __init__(self) -> None:
        self._pending: list[Notification] = []

    def notify(self, notification: Notification) -> None:
        logger.info(
            "notification",
            level=notification.level.value,
            message=notification.message,
            description=notification.description,
        )
        self._pending.append(notification)

    @property
    def pending(self) -> list[Notification]:
        """Queued notifications, oldest first (not removed)."""
        return list(self._pending)

    def drain(self) -> list[Notification]:
        """Return and clear every queued notification."""
        drained, self._pending = self._pending, []
        return drained
