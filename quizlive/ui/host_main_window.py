"""Qt main window for hosts: authoring, lobby, live control and results."""

from __future__ import annotations

from enum import Enum, auto
import logging
from pathlib import Path

from PySide6.QtCore import QTimer
from PySide6.QtGui import QCloseEvent
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)
from socketio.exceptions import ConnectionError as SocketConnectionError

from quizlive.config import ClientConfig
from quizlive.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from quizlive.constants.quiz_constants import COUNTDOWN_TICK_INTERVAL_MS
from quizlive.constants.ui_constants import (
    EXPORT_DIALOG_TITLE,
    EXPORT_FILE_FILTER,
    IMPORT_DIALOG_TITLE,
    IMPORT_FILE_FILTER,
    MODE_BUTTON_ANALYTICS,
    MODE_BUTTON_BACK,
    MODE_BUTTON_BROWSE,
    MODE_BUTTON_DELETE,
    MODE_BUTTON_HOST,
    MODE_BUTTON_IMPORT,
    MODE_BUTTON_INVITE,
    MODE_BUTTON_NEW,
    MODE_BUTTON_PUBLISH,
    MODE_BUTTON_SAVE_FILE,
    MODE_BUTTON_SAVE_SERVER,
    MODE_BUTTON_SCHEDULE,
    NO_QUIZ_LOADED_MESSAGE,
    WINDOW_TITLE,
)
from quizlive.core.app_state import AppState
from quizlive.core.errors import ApiError, QuizValidationError
from quizlive.core.notifications import Destination
from quizlive.core.quiz_exporter import save_quiz_to_file
from quizlive.core.quiz_importer import QuizImportError, load_quiz_from_file
from quizlive.core.services.analytics import SessionAnalytics
from quizlive.core.services.api_client import QuizApiClient
from quizlive.core.services.host_session import HostSession
from quizlive.core.services.media_client import GiphySource, UnsplashSource
from quizlive.core.services.quiz_repository import QuizRepository
from quizlive.core.services.session_client import SessionClient
from quizlive.ui.components.analytics_panel import AnalyticsPanel
from quizlive.ui.components.creation_panel import CreationPanel
from quizlive.ui.components.live_panel import LivePanel
from quizlive.ui.components.lobby_panel import LobbyPanel
from quizlive.ui.components.results_panel import ResultsPanel
from quizlive.ui.dialog_helpers import (
    StatusBarNotifier,
    ask_invitee_email,
    ask_public_quiz,
    ask_schedule_time,
    confirm_delete_quiz,
    confirm_end_quiz,
    confirm_import_quiz,
    show_error,
    show_info,
    show_warning,
)
from quizlive.ui.event_bridge import SessionEventBridge
from quizlive.styling.styles import Styles

logger = logging.getLogger(__name__)


class HostMode(Enum):
    """High-level UI mode for the host console."""

    QUIZ_CREATION = auto()
    QUIZ_LOBBY = auto()
    QUIZ_LIVE = auto()
    QUIZ_RESULTS = auto()
    ANALYTICS = auto()


class HostMainWindow(QMainWindow):
    """Main Qt window orchestrating the host's modes."""

    def __init__(
        self,
        config: ClientConfig,
        app_state: AppState,
        api: QuizApiClient,
        repository: QuizRepository | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)

        self.config = config
        self.app_state = app_state
        self.api = api
        self.repository = repository or QuizRepository()
        self.notifier = StatusBarNotifier(self)

        self._mode = HostMode.QUIZ_CREATION
        self._session_client: SessionClient | None = None
        self._event_bridge: SessionEventBridge | None = None
        self._host_session: HostSession | None = None
        self._last_session_id: str | None = None
        self._last_export_path: Path | None = None
        self._ui_font_size: int = 10
        self._game_font_size: int = 14

        self._build_ui()
        self._configure_tick_timer()
        self._apply_styles()

    @property
    def user_id(self) -> str:
        return self.app_state.require_user().id

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_mode_buttons(root_layout)

        self.mode_stack = QStackedWidget(self)
        self.creation_panel = CreationPanel(
            self.repository,
            image_source=UnsplashSource(self.config.unsplash_key) if self.config.unsplash_key else None,
            gif_source=GiphySource(self.config.gifs_key) if self.config.gifs_key else None,
            parent=self,
        )
        self.lobby_panel = LobbyPanel(self)
        self.live_panel = LivePanel(self)
        self.results_panel = ResultsPanel(self)
        self.analytics_panel = AnalyticsPanel(self)

        self._mode_pages = {
            HostMode.QUIZ_CREATION: self.creation_panel,
            HostMode.QUIZ_LOBBY: self.lobby_panel,
            HostMode.QUIZ_LIVE: self.live_panel,
            HostMode.QUIZ_RESULTS: self.results_panel,
            HostMode.ANALYTICS: self.analytics_panel,
        }
        for page in self._mode_pages.values():
            self.mode_stack.addWidget(page)
        root_layout.addWidget(self.mode_stack)

        self._set_mode(HostMode.QUIZ_CREATION)
        self.creation_panel.reset_state()

    def _build_mode_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        def add_button(label: str, handler) -> QPushButton:
            button = QPushButton(label, self)
            button.clicked.connect(handler)
            button_row.addWidget(button)
            return button

        self.new_quiz_button = add_button(MODE_BUTTON_NEW, self._handle_new_quiz)
        self.import_button = add_button(MODE_BUTTON_IMPORT, self._handle_import_quiz)
        self.browse_button = add_button(MODE_BUTTON_BROWSE, self._handle_browse_public)
        self.save_file_button = add_button(MODE_BUTTON_SAVE_FILE, self._handle_save_quiz_to_file)
        self.save_server_button = add_button(MODE_BUTTON_SAVE_SERVER, self._handle_save_quiz)
        self.publish_button = add_button(MODE_BUTTON_PUBLISH, self._handle_publish_quiz)
        self.delete_quiz_button = add_button(MODE_BUTTON_DELETE, self._handle_delete_quiz)
        self.schedule_button = add_button(MODE_BUTTON_SCHEDULE, self._handle_schedule_quiz)
        self.host_button = add_button(MODE_BUTTON_HOST, self._handle_host_session)
        self.invite_button = add_button(MODE_BUTTON_INVITE, self._handle_invite)
        self.analytics_button = add_button(MODE_BUTTON_ANALYTICS, self._handle_show_analytics)
        self.back_button = add_button(MODE_BUTTON_BACK, lambda: self._set_mode(HostMode.QUIZ_CREATION))
        button_row.addStretch()
        self.about_button = add_button(f"About {APP_NAME}", self._handle_about)
        self.help_button = add_button("Help", self._handle_help)

        layout.addLayout(button_row)

    def _configure_tick_timer(self) -> None:
        self.tick_timer = QTimer(self)
        self.tick_timer.setInterval(COUNTDOWN_TICK_INTERVAL_MS)
        self.tick_timer.timeout.connect(self._tick)

    def _tick(self) -> None:
        if self._host_session is not None:
            self._host_session.tick()

    def _set_mode(self, mode: HostMode) -> None:
        self._mode = mode
        in_session = mode in (HostMode.QUIZ_LOBBY, HostMode.QUIZ_LIVE)
        for button in (
            self.new_quiz_button,
            self.import_button,
            self.browse_button,
            self.save_file_button,
            self.save_server_button,
            self.publish_button,
            self.delete_quiz_button,
            self.schedule_button,
            self.host_button,
            self.analytics_button,
        ):
            button.setEnabled(not in_session)
        self.invite_button.setEnabled(mode == HostMode.QUIZ_LOBBY)
        self.back_button.setEnabled(mode in (HostMode.QUIZ_RESULTS, HostMode.ANALYTICS))
        self.mode_stack.setCurrentWidget(self._mode_pages[mode])

    # --- Quiz drafts ---

    def _handle_new_quiz(self) -> None:
        if not self.creation_panel.check_unsaved_changes():
            return
        if self.repository.has_questions() and not confirm_import_quiz(self):
            return
        self.repository.clear()
        self.creation_panel.reset_state()
        self._set_mode(HostMode.QUIZ_CREATION)

    def open_quiz(self, quiz_id: str) -> bool:
        """Load a saved quiz from the server into the editor."""
        try:
            quiz = self.api.get_quiz(quiz_id, self.user_id)
            self.repository.load(quiz)
        except ApiError as exc:
            show_error(self, "Open failed", exc.message)
            return False
        except ValueError as exc:
            show_error(self, "Quiz rejected", str(exc))
            return False
        self.creation_panel.reset_state()
        self._set_mode(HostMode.QUIZ_CREATION)
        return True

    def _handle_browse_public(self) -> None:
        if not self.creation_panel.check_unsaved_changes():
            return
        if self.repository.has_questions() and not confirm_import_quiz(self):
            return
        try:
            quizzes = self.api.list_public_quizzes()
        except ApiError as exc:
            show_error(self, "Browse failed", exc.message)
            return
        if not quizzes:
            show_info(self, "Public Quizzes", "No public quizzes yet.")
            return
        chosen = ask_public_quiz(self, quizzes)
        if chosen is None or chosen.id is None:
            return
        try:
            self.repository.load_copy(self.api.get_public_quiz(chosen.id))
        except ApiError as exc:
            show_error(self, "Open failed", exc.message)
            return
        except ValueError as exc:
            show_error(self, "Quiz rejected", str(exc))
            return
        self.creation_panel.reset_state()
        self._set_mode(HostMode.QUIZ_CREATION)
        self.creation_panel.set_status_message(f"Copied '{chosen.title}'. Save it to keep your own version.")

    def _handle_import_quiz(self) -> None:
        if not self.creation_panel.check_unsaved_changes():
            return
        if self.repository.has_questions() and not confirm_import_quiz(self):
            return

        file_path, _ = QFileDialog.getOpenFileName(self, IMPORT_DIALOG_TITLE, str(Path.home()), IMPORT_FILE_FILTER)
        if not file_path:
            return

        try:
            imported = load_quiz_from_file(Path(file_path))
            self.repository.load(imported.quiz)
        except (OSError, QuizImportError) as exc:
            show_error(self, "Import failed", str(exc))
            return
        except ValueError as exc:
            show_error(self, "Quiz rejected", str(exc))
            return

        count = self.repository.question_count()
        self.creation_panel.reset_state()
        self._set_mode(HostMode.QUIZ_CREATION)
        self.creation_panel.set_status_message(f"Imported {count} questions. Viewing question 1 of {count}.")
        show_info(self, "Quiz imported", f"Successfully imported {count} questions.")

    def _handle_save_quiz_to_file(self) -> None:
        if not self.repository.has_questions():
            show_warning(self, "No quiz", NO_QUIZ_LOADED_MESSAGE)
            return
        if not self.creation_panel.check_unsaved_changes():
            return

        default_path = self._last_export_path or (Path.cwd() / "quiz_export.txt")
        file_path, _ = QFileDialog.getSaveFileName(self, EXPORT_DIALOG_TITLE, str(default_path), EXPORT_FILE_FILTER)
        if not file_path:
            return

        try:
            save_quiz_to_file(Path(file_path), self.repository.quiz())
        except (OSError, ValueError) as exc:
            show_error(self, "Export failed", str(exc))
            return

        self._last_export_path = Path(file_path)
        show_info(self, "Quiz saved", f"Quiz exported to {file_path}.")

    def _save_to_server(self) -> bool:
        if not self.creation_panel.check_unsaved_changes():
            return False
        try:
            quiz = self.repository.save(self.api, self.user_id)
        except QuizValidationError as exc:
            show_warning(self, "Quiz incomplete", self._describe_validation(exc))
            return False
        except ApiError as exc:
            show_error(self, "Save failed", exc.message)
            return False
        self.notifier.success(f"Quiz '{quiz.title}' saved")
        return True

    def _handle_save_quiz(self) -> None:
        self._save_to_server()

    def _handle_publish_quiz(self) -> None:
        if not self.creation_panel.check_unsaved_changes():
            return
        try:
            is_public = self.repository.publish(self.api, self.user_id)
        except QuizValidationError as exc:
            show_warning(self, "Quiz incomplete", self._describe_validation(exc))
            return
        except ApiError as exc:
            show_error(self, "Publish failed", exc.message)
            return
        self.notifier.success("Quiz published" if is_public else "Quiz unpublished")

    def _handle_delete_quiz(self) -> None:
        quiz = self.repository.quiz()
        if not self.repository.has_questions() and quiz.id is None:
            show_warning(self, "No quiz", NO_QUIZ_LOADED_MESSAGE)
            return
        if not confirm_delete_quiz(self, quiz.title or "Untitled quiz"):
            return
        try:
            deleted = self.repository.delete(self.api, self.user_id)
        except ApiError as exc:
            show_error(self, "Delete failed", exc.message)
            return
        self.creation_panel.reset_state()
        self._set_mode(HostMode.QUIZ_CREATION)
        self.notifier.success("Quiz deleted" if deleted else "Draft discarded")

    def _handle_schedule_quiz(self) -> None:
        if not self._ensure_saved_quiz():
            return
        schedule_time = ask_schedule_time(self)
        if schedule_time is None:
            return
        try:
            self.api.schedule_quiz(self.repository.quiz().id, self.user_id, schedule_time)
        except ApiError as exc:
            show_error(self, "Schedule failed", exc.message)
            return
        self.notifier.success(f"Quiz scheduled for {schedule_time:%Y-%m-%d %H:%M}")

    def _ensure_saved_quiz(self) -> bool:
        if not self.repository.has_questions():
            show_warning(self, "No quiz", NO_QUIZ_LOADED_MESSAGE)
            return False
        if self.repository.quiz().id is None or self.repository.is_dirty():
            return self._save_to_server()
        return True

    @staticmethod
    def _describe_validation(exc: QuizValidationError) -> str:
        if exc.question_index is None:
            return exc.message
        return f"Question {exc.question_index + 1}: {exc.message}"

    # --- Live session ---

    def _handle_host_session(self) -> None:
        if not self._ensure_saved_quiz():
            return
        quiz = self.repository.quiz()
        try:
            session = self.api.create_session(quiz.id, self.user_id, is_public=quiz.is_public)
        except ApiError as exc:
            show_error(self, "Could not start session", exc.message)
            return
        self._open_session(session.id)

    def _open_session(self, session_id: str) -> bool:
        client = SessionClient(self.config.server_url, self.user_id, session_id)
        bridge = SessionEventBridge(client, self)
        host_session = HostSession(client, self.notifier, navigate=self._navigate)
        bridge.connect_handler(host_session.apply)
        host_session.subscribe(self._refresh_session_views)

        try:
            client.connect()
        except SocketConnectionError as exc:
            logger.error("Socket connection failed: %s", exc)
            client.close()
            show_error(self, "Connection failed", f"Could not reach the quiz server: {exc}")
            return False

        self._session_client = client
        self._event_bridge = bridge
        self._host_session = host_session
        self._last_session_id = session_id
        if not host_session.load(self.api):
            self._close_session()
            return False

        self.lobby_panel.bind(host_session)
        self.live_panel.bind(host_session)
        self._set_mode(HostMode.QUIZ_LIVE if host_session.is_host_control else HostMode.QUIZ_LOBBY)
        self.tick_timer.start()
        return True

    def _refresh_session_views(self) -> None:
        host_session = self._host_session
        if host_session is None:
            return
        if self._mode == HostMode.QUIZ_LOBBY and host_session.is_host_control:
            self._set_mode(HostMode.QUIZ_LIVE)
        if self._mode == HostMode.QUIZ_LOBBY:
            self.lobby_panel.refresh()
        elif self._mode == HostMode.QUIZ_LIVE:
            self.live_panel.refresh()

    def _navigate(self, destination: Destination) -> None:
        if destination == Destination.HOST_RESULTS:
            self._close_session()
            self._show_results()
        elif destination in (Destination.BACK, Destination.DASHBOARD):
            self._close_session()
            self._set_mode(HostMode.QUIZ_CREATION)
        else:
            logger.debug("Host window ignores navigation to %s", destination.value)

    def _close_session(self) -> None:
        self.tick_timer.stop()
        if self._session_client is not None:
            self._session_client.close()
        if self._event_bridge is not None:
            self._event_bridge.deleteLater()
        self._session_client = None
        self._event_bridge = None
        self._host_session = None
        self.lobby_panel.reset_state()
        self.live_panel.reset_state()

    def _handle_invite(self) -> None:
        host_session = self._host_session
        if host_session is None or host_session.session is None:
            return
        email = ask_invitee_email(self)
        if email is None:
            return
        session = host_session.session
        try:
            self.api.invite_to_session(
                session.id,
                self.config.invite_link(session.code),
                session.quiz.title if session.quiz else self.repository.quiz().title,
                invitee_email=email,
            )
        except (ApiError, QuizValidationError) as exc:
            show_error(self, "Invite failed", exc.message)
            return
        self.notifier.success(f"Invitation sent to {email}")

    # --- Results and analytics ---

    def _show_results(self) -> None:
        if self._last_session_id is None:
            return
        try:
            results = self.api.get_host_results(self._last_session_id, self.user_id)
        except ApiError as exc:
            show_error(self, "Results unavailable", exc.message)
            self._set_mode(HostMode.QUIZ_CREATION)
            return
        self.results_panel.show_host_results(results)
        self._set_mode(HostMode.QUIZ_RESULTS)

    def _handle_show_analytics(self) -> None:
        try:
            history = self.api.get_all_sessions(self.user_id)
        except ApiError as exc:
            show_error(self, "Analytics unavailable", exc.message)
            return
        self.analytics_panel.show_analytics(SessionAnalytics(history, self.user_id))
        self._set_mode(HostMode.ANALYTICS)

    # --- Misc ---

    def _handle_about(self) -> None:
        details = f"{APP_NAME} v{APP_VERSION}\nLicense: {APP_LICENSE}\n\n{APP_ABOUT_TEXT}"
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def _apply_styles(self) -> None:
        self.setStyleSheet(Styles.get_main_window_style())
        ui_style = f"font-size: {self._ui_font_size}pt;"
        for button in (self.new_quiz_button, self.import_button, self.save_file_button, self.host_button):
            button.setStyleSheet(ui_style)
        self.creation_panel.apply_font_size(self._ui_font_size)
        self.lobby_panel.apply_font_size(self._game_font_size)
        self.live_panel.apply_font_size(self._game_font_size)

    def closeEvent(self, event: QCloseEvent) -> None:
        if self._host_session is not None:
            if not confirm_end_quiz(self):
                event.ignore()
                return
            self._host_session.end_quiz()
        self._close_session()
        super().closeEvent(event)
