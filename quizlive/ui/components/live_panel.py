"""Component for the host's live quiz delivery interface."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from quizlive.constants.quiz_constants import DEFAULT_QUESTION_COUNTDOWN_SECONDS
from quizlive.constants.ui_constants import (
    LIVE_PAUSE_BUTTON,
    LIVE_PAUSED_TEXT,
    LIVE_RESTART_BUTTON,
    LIVE_RESUME_BUTTON,
    LIVE_SKIP_BUTTON,
    LIVE_WAITING_FOR_ANSWERS,
    MODE_BUTTON_END,
)
from quizlive.core.services.host_session import HostSession
from quizlive.ui.dialog_helpers import confirm_end_quiz
from quizlive.ui.question_renderer import render_question
from quizlive.styling.styles import Styles

URGENT_SECONDS = 5


class LivePanel(QWidget):
    """UI component for running a live quiz session as the host."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.host_session: HostSession | None = None

        self._game_font_size: int = 14
        self._scoreboard_size: int = 5
        self._rendered_key: tuple | None = None
        self._countdown_total: int = DEFAULT_QUESTION_COUNTDOWN_SECONDS

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header_row = QHBoxLayout()
        self.progress_label = QLabel("", self)
        self.progress_label.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(self.progress_label)
        header_row.addStretch()
        self.status_label = QLabel(LIVE_WAITING_FOR_ANSWERS, self)
        self.status_label.setAlignment(Qt.AlignRight | Qt.AlignVCenter)
        header_row.addWidget(self.status_label)
        layout.addLayout(header_row)

        timer_row = QHBoxLayout()
        self.countdown_label = QLabel("", self)
        timer_row.addWidget(self.countdown_label)

        self.countdown_progress = QProgressBar(self)
        self.countdown_progress.setRange(0, 1000)
        self.countdown_progress.setValue(0)
        self.countdown_progress.setTextVisible(False)
        timer_row.addWidget(self.countdown_progress, stretch=1)
        layout.addLayout(timer_row)

        preview_row = QHBoxLayout()
        self.preview_view = QWebEngineView(self)
        preview_row.addWidget(self.preview_view, stretch=3)

        self.scoreboard_group = QGroupBox(self)
        self.scoreboard_group.setMinimumWidth(240)
        self.scoreboard_layout = QVBoxLayout()
        self.scoreboard_group.setLayout(self.scoreboard_layout)
        preview_row.addWidget(self.scoreboard_group, stretch=1)
        layout.addLayout(preview_row, stretch=1)

        self.scoreboard_labels: list[QLabel] = []
        self._rebuild_scoreboard_labels()

        button_row = QHBoxLayout()
        self.pause_button = QPushButton(LIVE_PAUSE_BUTTON, self)
        self.pause_button.clicked.connect(self._handle_pause_click)
        button_row.addWidget(self.pause_button)

        self.restart_button = QPushButton(LIVE_RESTART_BUTTON, self)
        self.restart_button.clicked.connect(self._handle_restart_click)
        button_row.addWidget(self.restart_button)

        self.skip_button = QPushButton(LIVE_SKIP_BUTTON, self)
        self.skip_button.clicked.connect(self._handle_skip_click)
        button_row.addWidget(self.skip_button)

        button_row.addStretch()

        self.end_button = QPushButton(MODE_BUTTON_END, self)
        self.end_button.clicked.connect(self._handle_end_click)
        button_row.addWidget(self.end_button)
        layout.addLayout(button_row)

    def bind(self, host_session: HostSession) -> None:
        self.host_session = host_session
        self._rendered_key = None
        self.refresh()

    # --- Button handlers ---

    def _handle_pause_click(self) -> None:
        if self.host_session is not None:
            self.host_session.toggle_pause()

    def _handle_restart_click(self) -> None:
        if self.host_session is not None:
            self.host_session.restart_question()

    def _handle_skip_click(self) -> None:
        if self.host_session is not None:
            self.host_session.skip_question()

    def _handle_end_click(self) -> None:
        if self.host_session is None or not confirm_end_quiz(self):
            return
        self.host_session.end_quiz()

    # --- Rendering ---

    def refresh(self) -> None:
        if self.host_session is None:
            return
        session = self.host_session
        question = session.current_question()
        index = session.current_question_index
        total = len(session.questions)

        self.progress_label.setText(f"Question {index + 1} of {total}" if total else "")
        self.pause_button.setText(LIVE_RESUME_BUTTON if session.is_paused else LIVE_PAUSE_BUTTON)
        if session.is_paused:
            self.status_label.setText(LIVE_PAUSED_TEXT)
        elif session.show_correct_answer:
            remaining = session.reveal.remaining
            self.status_label.setText(f"Next question in {remaining} s" if remaining is not None else "")
        else:
            self.status_label.setText(LIVE_WAITING_FOR_ANSWERS)

        if self._rendered_key is None or self._rendered_key[0] != index:
            self._countdown_total = 0
        self._update_countdown(session.countdown.remaining)

        stats = session.question_stats if session.show_correct_answer else None
        key = (index, id(question), session.show_correct_answer, tuple((s.count, s.percentage) for s in stats or []))
        if key != self._rendered_key:
            self._rendered_key = key
            html = render_question(question, self._game_font_size, reveal=session.show_correct_answer, stats=stats)
            self.preview_view.setHtml(html)

        self._update_scoreboard_view()

    def _update_countdown(self, remaining: int | None) -> None:
        if remaining is None:
            self.countdown_label.setText("")
            self.countdown_progress.setValue(0)
            return
        if remaining > self._countdown_total:
            self._countdown_total = remaining
        fraction = 0.0 if self._countdown_total <= 0 else max(0.0, min(1.0, remaining / self._countdown_total))
        self.countdown_progress.setValue(int(fraction * 1000))
        self.countdown_label.setText(f"{remaining}s remaining" if remaining > 0 else "Time is up")
        self.countdown_label.setStyleSheet(Styles.get_countdown_style(urgent=remaining <= URGENT_SECONDS))

    def _rebuild_scoreboard_labels(self) -> None:
        while self.scoreboard_layout.count():
            item = self.scoreboard_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()

        self.scoreboard_labels = []
        for idx in range(self._scoreboard_size):
            label = QLabel(f"{idx + 1}. -", self)
            label.setAlignment(Qt.AlignLeft)
            self.scoreboard_layout.addWidget(label)
            self.scoreboard_labels.append(label)

        self.scoreboard_layout.addStretch()
        self.scoreboard_group.setTitle(f"Top {self._scoreboard_size}")

    def _update_scoreboard_view(self) -> None:
        if self.host_session is None:
            return
        entries = self.host_session.leaderboard.ranked(self._scoreboard_size)
        for idx, label in enumerate(self.scoreboard_labels):
            if idx < len(entries):
                entry = entries[idx]
                label.setText(f"{idx + 1}. {entry.name}  {entry.score:g}")
            else:
                label.setText(f"{idx + 1}. -")

    def set_scoreboard_size(self, size: int) -> None:
        self._scoreboard_size = size
        self._rebuild_scoreboard_labels()
        self.apply_font_size(self._game_font_size)
        self._update_scoreboard_view()

    def reset_state(self) -> None:
        self.host_session = None
        self._rendered_key = None
        self._countdown_total = DEFAULT_QUESTION_COUNTDOWN_SECONDS
        self.preview_view.setHtml(render_question(None, self._game_font_size))
        self._update_countdown(None)
        for idx, label in enumerate(self.scoreboard_labels):
            label.setText(f"{idx + 1}. -")

    def apply_font_size(self, font_size: int) -> None:
        self._game_font_size = font_size
        game_label_style = f"font-size: {font_size}pt;"
        self.status_label.setStyleSheet(game_label_style)
        for button in (self.pause_button, self.restart_button, self.skip_button, self.end_button):
            button.setStyleSheet(game_label_style)
        for label in self.scoreboard_labels:
            label.setStyleSheet(game_label_style)
        self.scoreboard_group.setStyleSheet(f"font-size: {font_size}pt; font-weight: bold;")
        self._rendered_key = None
        self.refresh()
