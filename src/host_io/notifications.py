"""User-facing notifications."""

import logging
import sys
from dataclasses import dataclass
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    """One message shown to the user."""
    level: str  # "info", "warning" or "error"
    message: str


def _echo(notification: Notification) -> None:
    stream = sys.stderr if notification.level == "error" else sys.stdout
    prefix = "" if notification.level == "info" else f"{notification.level.upper()}: "
    print(f"{prefix}{notification.message}", file=stream)


class Notifier:
    """Logs notifications, shows them to the user and keeps a history."""

    def __init__(self, echo: Optional[Callable[[Notification], None]] = _echo):
        self.echo = echo
        self.history: List[Notification] = []

    def _notify(self, level: str, message: str) -> Notification:
        notification = Notification(level=level, message=message)
        self.history.append(notification)
        if self.echo:
            self.echo(notification)
        return notification

    def info(self, message: str) -> Notification:
        logger.info(message)
        return self._notify("info", message)

    def warn(self, message: str) -> Notification:
        logger.warning(message)
        return self._notify("warning", message)

    def error(self, message: str) -> Notification:
        logger.error(message)
        return self._notify("error", message)
