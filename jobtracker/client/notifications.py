import enum
import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from jobtracker.core.config import settings
from jobtracker.core.exceptions import RequestError

logger = logging.getLogger(__name__)

class NotificationLevel(str, enum.Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"

@dataclass
class Notification:
    level: NotificationLevel
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

def failure_message(action: str, exc: RequestError) -> str:
    """'Failed to create job (500)', or without the code when there was no response."""
    if exc.status_code:
        return f"{action} ({exc.status_code})"
    return action

class Notifier:
    """
    Transient user-visible messages. Only the most recent ones are kept;
    a view layer pops them into toasts.
    """

    def __init__(self, history: Optional[int] = None):
        self._items = deque(maxlen=history or settings.client.notification_history)

    def notify(self, message: str, level: NotificationLevel = NotificationLevel.INFO) -> Notification:
        notification = Notification(level=level, message=message)
        self._items.append(notification)
        log = logger.error if level == NotificationLevel.ERROR else logger.info
        log(message, extra={"notification": level.value})
        return notification

    def success(self, message: str) -> Notification:
        return self.notify(message, NotificationLevel.SUCCESS)

    def error(self, message: str) -> Notification:
        return self.notify(message, NotificationLevel.ERROR)

    @property
    def recent(self) -> List[Notification]:
        return list(self._items)

    def latest(self) -> Optional[Notification]:
        return self._items[-1] if self._items else None

    def clear(self) -> None:
        self._items.clear()
