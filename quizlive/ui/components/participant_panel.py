"""Component for the participant's waiting room and live question view."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Qt
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from quizlive.constants.ui_constants import (
    LIVE_PAUSED_TEXT,
    PARTICIPANT_LEAVE_BUTTON,
    PARTICIPANT_LOBBY_TEXT,
    PARTICIPANT_SUBMIT_BUTTON,
    PARTICIPANT_WAITING_TEXT,
)
from quizlive.core.models import AnswerFeedback, Question, QuestionType
from quizlive.core.services.participant_session import ParticipantSession
from quizlive.ui.dialog_helpers import confirm_leave_quiz
from quizlive.ui.question_renderer import render_question
from quizlive.styling.styles import Styles

_WAITING_PAGE = 0
_LIVE_PAGE = 1
URGENT_SECONDS = 5


def describe_feedback(feedback: AnswerFeedback) -> str:
    if feedback.timed_out:
        return "Time's up! No answer was submitted."
    if feedback.is_correct is None:
        return PARTICIPANT_WAITING_TEXT
    verdict = "Correct!" if feedback.is_correct else "Incorrect"
    parts = [f"{verdict} +{feedback.points:g} points"]
    if feedback.time_taken is not None:
        parts.append(f"answered in {feedback.time_taken:g}s")
    return ", ".join(parts)


class ParticipantPanel(QWidget):
    """Shows the lobby until the quiz starts, then the current question."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.participant_session: ParticipantSession | None = None
        self._game_font_size: int = 14
        self._rendered_key: tuple | None = None
        self._option_buttons: list[QPushButton] = []
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        header_row = QHBoxLayout()
        self.title_label = QLabel("", self)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        header_row.addWidget(self.title_label)
        header_row.addStretch()
        self.leave_button = QPushButton(PARTICIPANT_LEAVE_BUTTON, self)
        self.leave_button.clicked.connect(self._handle_leave_click)
        header_row.addWidget(self.leave_button)
        layout.addLayout(header_row)

        self.pages = QStackedWidget(self)
        self.pages.addWidget(self._build_waiting_page())
        self.pages.addWidget(self._build_live_page())
        layout.addWidget(self.pages, stretch=1)

    def _build_waiting_page(self) -> QWidget:
        page = QWidget(self)
        page_layout = QVBoxLayout(page)
        self.lobby_label = QLabel(PARTICIPANT_LOBBY_TEXT, page)
        self.lobby_label.setAlignment(Qt.AlignCenter)
        page_layout.addWidget(self.lobby_label)
        self.auto_start_label = QLabel("", page)
        self.auto_start_label.setAlignment(Qt.AlignCenter)
        page_layout.addWidget(self.auto_start_label)
        self.roster_list = QListWidget(page)
        page_layout.addWidget(self.roster_list, stretch=1)
        return page

    def _build_live_page(self) -> QWidget:
        page = QWidget(self)
        page_layout = QVBoxLayout(page)

        status_row = QHBoxLayout()
        self.progress_label = QLabel("", page)
        status_row.addWidget(self.progress_label)
        status_row.addStretch()
        self.countdown_label = QLabel("", page)
        status_row.addWidget(self.countdown_label)
        page_layout.addLayout(status_row)

        self.question_view = QWebEngineView(page)
        page_layout.addWidget(self.question_view, stretch=1)

        self.options_layout = QHBoxLayout()
        page_layout.addLayout(self.options_layout)

        self.text_answer_input = QLineEdit(page)
        self.text_answer_input.setPlaceholderText("Type your answer")
        self.text_answer_input.textEdited.connect(self._handle_text_edited)
        self.text_answer_input.returnPressed.connect(self._handle_submit_click)
        page_layout.addWidget(self.text_answer_input)

        self.submit_button = QPushButton(PARTICIPANT_SUBMIT_BUTTON, page)
        self.submit_button.setProperty("primary", True)
        self.submit_button.clicked.connect(self._handle_submit_click)
        page_layout.addWidget(self.submit_button)

        self.feedback_label = QLabel("", page)
        self.feedback_label.setWordWrap(True)
        page_layout.addWidget(self.feedback_label)
        return page

    def bind(self, participant_session: ParticipantSession) -> None:
        self.participant_session = participant_session
        self._rendered_key = None
        session = participant_session.session
        quiz = session.quiz if session else None
        self.title_label.setText(quiz.title if quiz else "")
        self.refresh()

    # --- Handlers ---

    def _handle_option_click(self, value: Any) -> None:
        if self.participant_session is not None:
            self.participant_session.select(value)

    def _handle_text_edited(self, value: str) -> None:
        if self.participant_session is not None:
            self.participant_session.select(value.strip() or None)

    def _handle_submit_click(self) -> None:
        if self.participant_session is not None:
            self.participant_session.submit_answer()

    def _handle_leave_click(self) -> None:
        if self.participant_session is not None and confirm_leave_quiz(self):
            self.participant_session.leave()

    # --- Rendering ---

    def refresh(self) -> None:
        state = self.participant_session
        if state is None:
            return
        if not state.is_quiz_started or state.current_question is None:
            self.pages.setCurrentIndex(_WAITING_PAGE)
            self._refresh_waiting(state)
            return
        self.pages.setCurrentIndex(_LIVE_PAGE)
        self._refresh_live(state)

    def _refresh_waiting(self, state: ParticipantSession) -> None:
        self.lobby_label.setText(LIVE_PAUSED_TEXT if state.is_paused else PARTICIPANT_LOBBY_TEXT)
        remaining = state.auto_start.remaining
        self.auto_start_label.setText(f"Quiz starts in {remaining} s" if remaining is not None else "")
        names = [p.name for p in state.participants]
        if names != [self.roster_list.item(i).text() for i in range(self.roster_list.count())]:
            self.roster_list.clear()
            self.roster_list.addItems(names)

    def _refresh_live(self, state: ParticipantSession) -> None:
        question = state.current_question
        total = len(state.session.quiz.questions) if state.session and state.session.quiz else 0
        self.progress_label.setText(
            f"Question {state.question_index + 1} of {total}" if total else f"Question {state.question_index + 1}"
        )

        remaining = state.countdown.remaining
        if state.is_paused:
            self.countdown_label.setText(LIVE_PAUSED_TEXT)
        elif remaining is None:
            self.countdown_label.setText("")
        else:
            self.countdown_label.setText(f"{remaining}s")
            self.countdown_label.setStyleSheet(Styles.get_countdown_style(urgent=remaining <= URGENT_SECONDS))

        key = (state.question_index, id(question), state.show_correct_answer)
        if key != self._rendered_key:
            if self._rendered_key is None or self._rendered_key[:2] != key[:2]:
                self._rebuild_answer_controls(question)
            self._rendered_key = key
            self.question_view.setHtml(
                render_question(question, self._game_font_size, reveal=state.show_correct_answer)
            )

        locked = state.submitted or state.is_paused
        for button in self._option_buttons:
            button.setEnabled(not locked)
            button.setChecked(button.property("answer") == state.selected_answer)
        self.text_answer_input.setEnabled(not locked)
        self.submit_button.setEnabled(not locked and state.selected_answer is not None)

        if state.feedback is not None:
            self.feedback_label.setText(describe_feedback(state.feedback))
            self.feedback_label.setStyleSheet(
                Styles.get_feedback_style(None if state.feedback.timed_out else state.feedback.is_correct)
            )
        elif state.submitted:
            self.feedback_label.setText(PARTICIPANT_WAITING_TEXT)
            self.feedback_label.setStyleSheet(Styles.get_feedback_style(None))
        else:
            self.feedback_label.setText("")

    def _rebuild_answer_controls(self, question: Question) -> None:
        for button in self._option_buttons:
            self.options_layout.removeWidget(button)
            button.deleteLater()
        self._option_buttons = []
        self.text_answer_input.clear()

        if question.type == QuestionType.TRUE_FALSE:
            choices: list[tuple[str, Any]] = [("True", True), ("False", False)]
        elif question.type == QuestionType.MULTIPLE_CHOICE:
            choices = [(chr(ord("A") + idx), idx) for idx in range(len(question.options))]
        else:
            choices = []

        self.text_answer_input.setVisible(not choices)
        for label, value in choices:
            button = QPushButton(label, self)
            button.setCheckable(True)
            button.setProperty("answer", value)
            button.clicked.connect(lambda _=False, v=value: self._handle_option_click(v))
            self.options_layout.addWidget(button)
            self._option_buttons.append(button)

    def reset_state(self) -> None:
        self.participant_session = None
        self._rendered_key = None
        self.title_label.setText("")
        self.roster_list.clear()
        self.feedback_label.setText("")
        self.pages.setCurrentIndex(_WAITING_PAGE)

    def apply_font_size(self, font_size: int) -> None:
        self._game_font_size = font_size
        self.submit_button.setStyleSheet(f"font-size: {font_size}pt;")
        self._rendered_key = None
        self.refresh()
