"""Moves session events from the socket thread onto the Qt GUI thread."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QObject, Signal

from quizlive.core.events import SessionEvent
from quizlive.core.services.session_client import SessionClient


class SessionEventBridge(QObject):
    """Re-emits every broadcast of a :class:`SessionClient` as a Qt signal.

    The bridge lives on the GUI thread, so the queued signal delivers the
    event to connected slots there regardless of which thread received it.
    """

    event_received = Signal(str, object)

    def __init__(self, client: SessionClient, parent: QObject | None = None) -> None:
        super().__init__(parent)
        client.on_all(self._relay)

    def connect_handler(self, handler: Callable[[str, SessionEvent], None]) -> None:
        self.event_received.connect(handler)

    def _relay(self, name: str, event: SessionEvent) -> None:
        self.event_received.emit(name, event)
