"""
Transient user notifications.

Controllers report the outcome of remote operations through a
``Notifier``.  Each notification is logged and handed to an optional
listener, which is how a front end (the console screen, for example)
shows it to the user.  The most recent notifications are kept so a
front end that polls, and the tests, can inspect them.
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, List, Optional


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    level: str
    text: str


Listener = Callable[[Notification], None]


class Notifier:
    """Collect success and error messages for the user."""

    def __init__(self, listener: Optional[Listener] = None, history: int = 50) -> None:
        self.listener = listener
        self._history: Deque[Notification] = deque(maxlen=history)

    @property
    def history(self) -> List[Notification]:
        return list(self._history)

    @property
    def last(self) -> Optional[Notification]:
        return self._history[-1] if self._history else None

    def success(self, text: str) -> None:
        logger.info("%s", text)
        self._emit(Notification("success", text))

    def error(self, text: str) -> None:
        logger.warning("%s", text)
        self._emit(Notification("error", text))

    def clear(self) -> None:
        self._history.clear()

    def _emit(self, notification: Notification) -> None:
        self._history.append(notification)
        if self.listener is not None:
            self.listener(notification)
