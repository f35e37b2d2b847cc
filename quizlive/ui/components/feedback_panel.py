"""Component asking a participant to rate the session that just finished."""

from __future__ import annotations

from typing import Callable

from PySide6.QtWidgets import (
    QButtonGroup,
    QHBoxLayout,
    QLabel,
    QPlainTextEdit,
    QPushButton,
    QRadioButton,
    QVBoxLayout,
    QWidget,
)

from quizlive.constants.quiz_constants import MAX_RATING, MIN_RATING
from quizlive.styling.styles import Styles


class FeedbackPanel(QWidget):
    """Star rating plus an optional comment.

    ``on_submit`` receives the rating (0 when nothing was chosen, which the
    session rejects with a notification) and the comment.
    """

    def __init__(
        self,
        on_submit: Callable[[int, str], None],
        on_skip: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.on_submit = on_submit
        self.on_skip = on_skip
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        heading = QLabel("How was this quiz?", self)
        heading.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(heading)

        rating_row = QHBoxLayout()
        self.rating_group = QButtonGroup(self)
        for value in range(MIN_RATING, MAX_RATING + 1):
            button = QRadioButton(str(value), self)
            self.rating_group.addButton(button, value)
            rating_row.addWidget(button)
        rating_row.addStretch()
        layout.addLayout(rating_row)

        self.comment_input = QPlainTextEdit(self)
        self.comment_input.setPlaceholderText("Comments (optional)")
        layout.addWidget(self.comment_input, stretch=1)

        button_row = QHBoxLayout()
        self.skip_button = QPushButton("Skip", self)
        self.skip_button.clicked.connect(lambda: self.on_skip())
        button_row.addWidget(self.skip_button)
        button_row.addStretch()
        self.submit_button = QPushButton("Submit Feedback", self)
        self.submit_button.setProperty("primary", True)
        self.submit_button.clicked.connect(self._handle_submit)
        button_row.addWidget(self.submit_button)
        layout.addLayout(button_row)

    def selected_rating(self) -> int:
        checked = self.rating_group.checkedId()
        return checked if checked > 0 else 0

    def _handle_submit(self) -> None:
        self.on_submit(self.selected_rating(), self.comment_input.toPlainText().strip())

    def reset_state(self) -> None:
        self.rating_group.setExclusive(False)
        for button in self.rating_group.buttons():
            button.setChecked(False)
        self.rating_group.setExclusive(True)
        self.comment_input.clear()
