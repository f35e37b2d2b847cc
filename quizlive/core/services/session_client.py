"""Socket.IO connection scoped to a single live quiz session.

One :class:`SessionClient` is created per session view and closed when the
view goes away. Socket callbacks arrive on the socket library's background
thread; handlers registered with :meth:`SessionClient.on` are invoked there,
so Qt views go through :mod:`quizlive.ui.event_bridge` to reach the GUI
thread.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Any, Callable

import socketio
from pydantic import ValidationError

from quizlive.constants.network_constants import (
    SOCKET_RECONNECTION_ATTEMPTS,
    SOCKET_RECONNECTION_DELAY_SECONDS,
    SOCKET_TRANSPORTS,
)
from quizlive.core import events
from quizlive.core.errors import SessionClosedError

logger = logging.getLogger(__name__)

EventHandler = Callable[[str, events.SessionEvent], None]


class SessionClient:
    """Emits host/participant commands and dispatches typed broadcast events."""

    def __init__(
        self,
        server_url: str,
        user_id: str,
        session_id: str,
        sio: socketio.Client | None = None,
    ) -> None:
        self.server_url = server_url
        self.user_id = user_id
        self.session_id = session_id
        self._sio = sio or socketio.Client(
            reconnection=True,
            reconnection_attempts=SOCKET_RECONNECTION_ATTEMPTS,
            reconnection_delay=SOCKET_RECONNECTION_DELAY_SECONDS,
        )
        self._lock = Lock()
        self._handlers: dict[str, list[EventHandler]] = {}
        self._closed = False
        self.join_count = 0

        self._sio.on("connect", self._on_connect)
        self._sio.on("disconnect", self._on_disconnect)
        self._sio.on("connect_error", self._on_connect_error)
        for name in events.BROADCAST_EVENTS:
            self._sio.on(name, self._dispatcher(name))

    # --- Lifecycle ---

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    @property
    def connected(self) -> bool:
        return bool(self._sio.connected)

    @property
    def socket_id(self) -> str | None:
        return self._sio.get_sid() if self._sio.connected else None

    def connect(self) -> None:
        self._ensure_open()
        logger.info("Connecting to %s for session %s", self.server_url, self.session_id)
        self._sio.connect(
            self.server_url,
            auth={"userId": self.user_id, "sessionId": self.session_id},
            transports=SOCKET_TRANSPORTS,
        )

    def close(self) -> None:
        """Drop all handlers and disconnect. Safe to call more than once."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._handlers.clear()
        if self._sio.connected:
            self._sio.disconnect()
        logger.info("Session client for %s closed", self.session_id)

    def __enter__(self) -> "SessionClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # --- Subscriptions ---

    def on(self, name: str, handler: EventHandler) -> Callable[[], None]:
        """Register ``handler`` for broadcast ``name``; returns an unsubscribe callable."""
        if name not in events.EVENT_MODELS:
            raise KeyError(f"Unknown session event '{name}'")
        with self._lock:
            self._handlers.setdefault(name, []).append(handler)

        def off() -> None:
            with self._lock:
                handlers = self._handlers.get(name, [])
                if handler in handlers:
                    handlers.remove(handler)

        return off

    def on_all(self, handler: EventHandler) -> None:
        for name in events.BROADCAST_EVENTS:
            self.on(name, handler)

    # --- Participant commands ---

    def join(self) -> None:
        # The gateway expects the bare session id, not an object.
        self._emit(events.JOIN_SESSION, self.session_id)

    def submit_answer(self, question_id: str | None, selected_option: Any) -> None:
        command = events.SubmitAnswerCommand(
            session_id=self.session_id,
            user_id=self.user_id,
            question_id=question_id,
            selected_option=selected_option,
        )
        self._emit(events.SUBMIT_ANSWER, command.to_wire())

    def leave(self) -> None:
        self._emit(events.LEAVE_QUIZ)

    # --- Host commands ---

    def start_quiz(self) -> None:
        self._emit_host(events.START_QUIZ)

    def start_quiz_countdown(self, countdown: int) -> None:
        command = events.StartQuizCountdownCommand(
            session_id=self.session_id, admin_id=self.user_id, countdown=countdown
        )
        self._emit(events.START_QUIZ_COUNTDOWN, command.to_wire())

    def stop_quiz_countdown(self) -> None:
        self._emit_host(events.STOP_QUIZ_COUNTDOWN)

    def pause_quiz(self) -> None:
        self._emit_host(events.PAUSE_QUIZ)

    def resume_quiz(self) -> None:
        self._emit_host(events.RESUME_QUIZ)

    def next_question(self, question_index: int) -> None:
        command = events.NextQuestionCommand(
            session_id=self.session_id, admin_id=self.user_id, question_index=question_index
        )
        self._emit(events.NEXT_QUESTION, command.to_wire())

    def restart_question(self, question_id: str | None) -> None:
        command = events.RestartQuestionCommand(
            session_id=self.session_id, admin_id=self.user_id, question_id=question_id
        )
        self._emit(events.RESTART_QUESTION, command.to_wire())

    def skip_question(self) -> None:
        self._emit_host(events.SKIP_QUESTION)

    def end_quiz(self) -> None:
        self._emit_host(events.END_QUIZ)

    def remove_participant(self, user_id: str) -> None:
        command = events.RemoveParticipantCommand(
            session_id=self.session_id, admin_id=self.user_id, user_id=user_id
        )
        self._emit(events.REMOVE_PARTICIPANT, command.to_wire())

    # --- Internals ---

    def _ensure_open(self) -> None:
        if self.closed:
            raise SessionClosedError(f"Session client for {self.session_id} is closed")

    def _emit_host(self, name: str) -> None:
        command = events.HostCommand(session_id=self.session_id, admin_id=self.user_id)
        self._emit(name, command.to_wire())

    def _emit(self, name: str, payload: Any = None) -> None:
        self._ensure_open()
        logger.debug("emit %s %s", name, payload)
        if payload is None:
            self._sio.emit(name)
        else:
            self._sio.emit(name, payload)

    def _on_connect(self) -> None:
        if self.closed:
            return
        logger.info("Connected to realtime gateway (sid=%s)", self.socket_id)
        # Every (re)connect lands in a fresh server-side room membership.
        self.join()
        self.join_count += 1

    def _on_disconnect(self, *args: Any) -> None:
        logger.info("Disconnected from realtime gateway for session %s", self.session_id)

    def _on_connect_error(self, data: Any = None) -> None:
        logger.warning("Realtime connection error: %s", data)

    def _dispatcher(self, name: str) -> Callable[..., None]:
        def dispatch(payload: Any = None, *_: Any) -> None:
            self._dispatch(name, payload)

        return dispatch

    def _dispatch(self, name: str, payload: Any) -> None:
        with self._lock:
            if self._closed:
                logger.debug("Dropping %s received after close", name)
                return
            handlers = list(self._handlers.get(name, []))
        try:
            event = events.parse_event(name, payload)
        except ValidationError as exc:
            logger.warning("Malformed %s payload dropped: %s", name, exc)
            return
        if not event.concerns(self.session_id):
            logger.debug("Ignoring %s for session %s", name, event.session_id)
            return
        logger.debug("recv %s %s", name, payload)
        for handler in handlers:
            handler(name, event)
