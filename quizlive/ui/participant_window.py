"""Qt main window for participants: join, answer, rate and review."""

from __future__ import annotations

from enum import Enum, auto
import logging

from PySide6.QtCore import QTimer
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import QMainWindow, QStackedWidget
from socketio.exceptions import ConnectionError as SocketConnectionError

from quizlive.config import ClientConfig
from quizlive.constants.quiz_constants import COUNTDOWN_TICK_INTERVAL_MS
from quizlive.constants.ui_constants import INVALID_SESSION_MESSAGE, PARTICIPANT_WINDOW_TITLE
from quizlive.core.app_state import AppState
from quizlive.core.errors import ApiError
from quizlive.core.notifications import Destination
from quizlive.core.services.api_client import QuizApiClient
from quizlive.core.services.participant_session import JoinFlow, JoinResult, ParticipantSession
from quizlive.core.services.session_client import SessionClient
from quizlive.ui.components.feedback_panel import FeedbackPanel
from quizlive.ui.components.join_panel import JoinPanel
from quizlive.ui.components.participant_panel import ParticipantPanel
from quizlive.ui.components.results_panel import ResultsPanel
from quizlive.ui.dialog_helpers import StatusBarNotifier, show_error
from quizlive.ui.event_bridge import SessionEventBridge
from quizlive.styling.styles import Styles

logger = logging.getLogger(__name__)


class ParticipantMode(Enum):
    JOIN = auto()
    SESSION = auto()
    FEEDBACK = auto()
    RESULTS = auto()


class ParticipantWindow(QMainWindow):
    """Single window walking a participant through one session at a time."""

    def __init__(self, config: ClientConfig, app_state: AppState, api: QuizApiClient) -> None:
        super().__init__()
        self.setWindowTitle(PARTICIPANT_WINDOW_TITLE)

        self.config = config
        self.app_state = app_state
        self.api = api
        self.notifier = StatusBarNotifier(self)
        user = app_state.require_user()
        self.join_flow = JoinFlow(api, self.notifier, user.id)

        self._session_client: SessionClient | None = None
        self._event_bridge: SessionEventBridge | None = None
        self._participant_session: ParticipantSession | None = None
        self._session_id: str | None = None

        self._build_ui(user.name)
        self._configure_tick_timer()
        self.setStyleSheet(Styles.get_main_window_style())

    def _build_ui(self, user_name: str) -> None:
        self.mode_stack = QStackedWidget(self)
        self.join_panel = JoinPanel(self.join_flow, self._handle_joined, default_name=user_name, parent=self)
        self.participant_panel = ParticipantPanel(self)
        self.feedback_panel = FeedbackPanel(self._handle_feedback, self._handle_skip_feedback, self)
        self.results_panel = ResultsPanel(self)

        self._mode_pages = {
            ParticipantMode.JOIN: self.join_panel,
            ParticipantMode.SESSION: self.participant_panel,
            ParticipantMode.FEEDBACK: self.feedback_panel,
            ParticipantMode.RESULTS: self.results_panel,
        }
        for page in self._mode_pages.values():
            self.mode_stack.addWidget(page)
        self.setCentralWidget(self.mode_stack)
        self._set_mode(ParticipantMode.JOIN)

    def _configure_tick_timer(self) -> None:
        self.tick_timer = QTimer(self)
        self.tick_timer.setInterval(COUNTDOWN_TICK_INTERVAL_MS)
        self.tick_timer.timeout.connect(self._tick)

    def _tick(self) -> None:
        if self._participant_session is not None and self._session_client is not None:
            self._participant_session.tick()

    def _set_mode(self, mode: ParticipantMode) -> None:
        self.mode_stack.setCurrentWidget(self._mode_pages[mode])

    # --- Session lifecycle ---

    def _handle_joined(self, result: JoinResult) -> None:
        if not result.session.id:
            show_error(self, "Join failed", INVALID_SESSION_MESSAGE)
            return
        self.open_session(result.session.id)

    def open_session(self, session_id: str) -> bool:
        user_id = self.app_state.require_user().id
        client = SessionClient(self.config.server_url, user_id, session_id)
        bridge = SessionEventBridge(client, self)
        participant_session = ParticipantSession(client, self.notifier, navigate=self._navigate)
        bridge.connect_handler(participant_session.apply)
        participant_session.subscribe(self.participant_panel.refresh)

        try:
            client.connect()
        except SocketConnectionError as exc:
            logger.error("Socket connection failed: %s", exc)
            client.close()
            show_error(self, "Connection failed", f"Could not reach the quiz server: {exc}")
            return False

        self._session_client = client
        self._event_bridge = bridge
        self._participant_session = participant_session
        self._session_id = session_id
        if not participant_session.load(self.api):
            self._close_session()
            return False

        self.participant_panel.bind(participant_session)
        self._set_mode(ParticipantMode.SESSION)
        self.tick_timer.start()
        return True

    def _close_session(self) -> None:
        self.tick_timer.stop()
        if self._session_client is not None:
            self._session_client.close()
        if self._event_bridge is not None:
            self._event_bridge.deleteLater()
        self._session_client = None
        self._event_bridge = None

    def _navigate(self, destination: Destination) -> None:
        if destination in (Destination.WAITING_ROOM, Destination.LIVE_QUIZ):
            self._set_mode(ParticipantMode.SESSION)
        elif destination == Destination.FEEDBACK:
            self._close_session()
            self.feedback_panel.reset_state()
            self._set_mode(ParticipantMode.FEEDBACK)
        elif destination == Destination.USER_RESULTS:
            self._close_session()
            self._participant_session = None
            self._show_results()
        else:
            self._close_session()
            self._participant_session = None
            self.participant_panel.reset_state()
            self.join_panel.reset_state()
            self._set_mode(ParticipantMode.JOIN)

    # --- Feedback and results ---

    def _handle_feedback(self, rating: int, comment: str) -> None:
        if self._participant_session is not None:
            self._participant_session.submit_feedback(self.api, rating, comment)

    def _handle_skip_feedback(self) -> None:
        self._navigate(Destination.USER_RESULTS)

    def _show_results(self) -> None:
        if self._session_id is None:
            self._navigate(Destination.JOIN)
            return
        try:
            results = self.api.get_user_results(self._session_id, self.app_state.require_user().id)
        except ApiError as exc:
            show_error(self, "Results unavailable", exc.message)
            self._navigate(Destination.JOIN)
            return
        self.results_panel.show_user_results(results)
        self._set_mode(ParticipantMode.RESULTS)

    def closeEvent(self, event: QCloseEvent) -> None:
        if self._participant_session is not None and self._session_client is not None:
            self._participant_session.leave()
        self._close_session()
        super().closeEvent(event)
