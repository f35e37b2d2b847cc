"""Component for entering a quiz code and joining the session."""

from __future__ import annotations

from typing import Callable

from PySide6.QtWidgets import (
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from quizlive.core.services.participant_session import JoinFlow, JoinResult
from quizlive.styling.styles import Styles


class JoinPanel(QWidget):
    """Two-step join: verify the code, then confirm after seeing the quiz details."""

    def __init__(
        self,
        join_flow: JoinFlow,
        on_joined: Callable[[JoinResult], None],
        default_name: str = "",
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.join_flow = join_flow
        self.on_joined = on_joined
        self._build_ui(default_name)

    def _build_ui(self, default_name: str) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        heading = QLabel("Join a quiz", self)
        heading.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(heading)

        form = QFormLayout()
        self.code_input = QLineEdit(self)
        self.code_input.setPlaceholderText("Quiz code")
        self.code_input.setMaxLength(12)
        self.code_input.returnPressed.connect(self._handle_verify)
        form.addRow("Code:", self.code_input)

        self.name_input = QLineEdit(default_name, self)
        self.name_input.setPlaceholderText("Your name")
        self.name_input.returnPressed.connect(self._handle_verify)
        form.addRow("Name:", self.name_input)
        layout.addLayout(form)

        self.verify_button = QPushButton("Find Quiz", self)
        self.verify_button.setProperty("primary", True)
        self.verify_button.clicked.connect(self._handle_verify)
        layout.addWidget(self.verify_button)

        self.details_group = QGroupBox("Quiz details", self)
        details_layout = QVBoxLayout(self.details_group)
        self.details_label = QLabel("", self.details_group)
        self.details_label.setWordWrap(True)
        details_layout.addWidget(self.details_label)

        confirm_row = QHBoxLayout()
        self.cancel_button = QPushButton("Cancel", self.details_group)
        self.cancel_button.clicked.connect(self.reset_state)
        confirm_row.addWidget(self.cancel_button)
        confirm_row.addStretch()
        self.confirm_button = QPushButton("Join Quiz", self.details_group)
        self.confirm_button.setProperty("primary", True)
        self.confirm_button.clicked.connect(self._handle_confirm)
        confirm_row.addWidget(self.confirm_button)
        details_layout.addLayout(confirm_row)

        self.details_group.setVisible(False)
        layout.addWidget(self.details_group)
        layout.addStretch()

    def _handle_verify(self) -> None:
        result = self.join_flow.verify(self.code_input.text(), self.name_input.text())
        if result is None:
            return
        if result.destination is not None:
            self.on_joined(result)
            return
        session = result.session
        quiz = session.quiz
        lines = [f"Code: {session.code}", f"Status: {session.status.value}"]
        if quiz is not None:
            lines.insert(0, quiz.title)
            lines.append(f"Subject: {quiz.subject or '-'}  Difficulty: {quiz.difficulty}")
            lines.append(f"{len(quiz.questions)} question(s)")
        lines.append(f"{len(session.connected_participants(session.host_id))} participant(s) waiting")
        self.details_label.setText("\n".join(lines))
        self.details_group.setVisible(True)

    def _handle_confirm(self) -> None:
        result = self.join_flow.confirm(self.name_input.text())
        if result is not None:
            self.details_group.setVisible(False)
            self.on_joined(result)

    def reset_state(self) -> None:
        self.join_flow.pending = None
        self.code_input.clear()
        self.details_label.setText("")
        self.details_group.setVisible(False)
