"""Toast-style user notifications and navigation targets used by the views."""

from __future__ import annotations

from enum import Enum
import logging
from typing import Callable, Protocol


class Destination(str, Enum):
    """Places a view can send the user after a session event."""

    BACK = "back"
    DASHBOARD = "dashboard"
    JOIN = "start-join"
    WAITING_ROOM = "waiting"
    LIVE_QUIZ = "quiz-participant"
    HOST_RESULTS = "host-results"
    USER_RESULTS = "user-results"
    FEEDBACK = "feedback"


Navigator = Callable[[Destination], None]


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LoggingNotifier:
    """Notifier that only writes to the log; used headless and as a fallback."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("quizlive.notifications")

    def success(self, message: str) -> None:
        self._logger.info("%s", message)

    def info(self, message: str) -> None:
        self._logger.info("%s", message)

    def error(self, message: str) -> None:
        self._logger.error("%s", message)


def ignore_navigation(destination: Destination) -> None:
    logging.getLogger("quizlive.notifications").debug("Navigation to %s ignored", destination.value)
