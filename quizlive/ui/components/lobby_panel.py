"""Component for the host's waiting room before the quiz begins."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from quizlive.constants.quiz_constants import AUTO_START_PRESETS_SECONDS
from quizlive.constants.ui_constants import (
    LOBBY_AUTO_START_BUTTON,
    LOBBY_CODE_TEMPLATE,
    LOBBY_DESCRIPTION,
    LOBBY_EMPTY_STATE,
    LOBBY_READY_COUNT_TEMPLATE,
    LOBBY_REMOVE_BUTTON,
    LOBBY_START_BUTTON,
    LOBBY_STOP_AUTO_START_BUTTON,
)
from quizlive.core.services.host_session import HostSession
from quizlive.ui.dialog_helpers import confirm_remove_participant
from quizlive.styling.styles import Styles


class LobbyPanel(QWidget):
    """UI component showing who joined and the start controls."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.host_session: HostSession | None = None
        self._roster_snapshot: list[str] = []

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.description_label = QLabel(LOBBY_DESCRIPTION, self)
        self.description_label.setWordWrap(True)
        layout.addWidget(self.description_label)

        self.code_label = QLabel(LOBBY_CODE_TEMPLATE.format(code="-"), self)
        self.code_label.setStyleSheet(Styles.get_large_label_style())
        self.code_label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        layout.addWidget(self.code_label)

        self.ready_label = QLabel(LOBBY_READY_COUNT_TEMPLATE.format(count=0), self)
        layout.addWidget(self.ready_label)

        self.auto_start_label = QLabel("", self)
        self.auto_start_label.setVisible(False)
        layout.addWidget(self.auto_start_label)

        self.participant_list = QListWidget(self)
        self.participant_list.setAlternatingRowColors(True)
        layout.addWidget(self.participant_list, stretch=1)

        self.empty_label = QLabel(LOBBY_EMPTY_STATE, self)
        self.empty_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.empty_label)

        button_row = QHBoxLayout()
        self.remove_button = QPushButton(LOBBY_REMOVE_BUTTON, self)
        self.remove_button.clicked.connect(self._handle_remove_click)
        button_row.addWidget(self.remove_button)

        button_row.addStretch()

        self.auto_start_combo = QComboBox(self)
        for seconds in AUTO_START_PRESETS_SECONDS:
            self.auto_start_combo.addItem(f"{seconds} s", userData=seconds)
        button_row.addWidget(self.auto_start_combo)

        self.auto_start_button = QPushButton(LOBBY_AUTO_START_BUTTON, self)
        self.auto_start_button.clicked.connect(self._handle_auto_start_click)
        button_row.addWidget(self.auto_start_button)

        self.start_button = QPushButton(LOBBY_START_BUTTON, self)
        self.start_button.setProperty("primary", True)
        self.start_button.clicked.connect(self._handle_start_click)
        button_row.addWidget(self.start_button)

        layout.addLayout(button_row)

    def bind(self, host_session: HostSession) -> None:
        self.host_session = host_session
        self.reset_state()
        if host_session.session is not None:
            self.code_label.setText(LOBBY_CODE_TEMPLATE.format(code=host_session.session.code))
        self.refresh()

    def _handle_start_click(self) -> None:
        if self.host_session is not None:
            self.host_session.start_quiz()

    def _handle_auto_start_click(self) -> None:
        if self.host_session is None:
            return
        if self.host_session.auto_start_enabled:
            self.host_session.stop_auto_start()
        else:
            self.host_session.start_auto_start(int(self.auto_start_combo.currentData()))

    def _handle_remove_click(self) -> None:
        item = self.participant_list.currentItem()
        if self.host_session is None or item is None:
            return
        user_id = item.data(Qt.UserRole)
        if confirm_remove_participant(self, item.text()):
            self.host_session.remove_participant(user_id)

    def refresh(self) -> None:
        if self.host_session is None:
            return
        session = self.host_session
        participants = list(session.participants)

        snapshot = [p.user_id for p in participants]
        if snapshot != self._roster_snapshot:
            self._roster_snapshot = snapshot
            self.participant_list.clear()
            for participant in participants:
                item = QListWidgetItem(participant.name, self.participant_list)
                item.setData(Qt.UserRole, participant.user_id)
        count = len(participants)
        self.ready_label.setText(LOBBY_READY_COUNT_TEMPLATE.format(count=count))
        self.empty_label.setVisible(count == 0)

        auto_start_active = session.auto_start_enabled
        self.auto_start_button.setText(LOBBY_STOP_AUTO_START_BUTTON if auto_start_active else LOBBY_AUTO_START_BUTTON)
        self.auto_start_combo.setEnabled(not auto_start_active)
        remaining = session.auto_start.remaining
        self.auto_start_label.setVisible(auto_start_active and remaining is not None)
        if remaining is not None:
            self.auto_start_label.setText(f"Quiz starts in {remaining} s")

    def reset_state(self) -> None:
        self._roster_snapshot = []
        self.participant_list.clear()
        self.ready_label.setText(LOBBY_READY_COUNT_TEMPLATE.format(count=0))
        self.code_label.setText(LOBBY_CODE_TEMPLATE.format(code="-"))
        self.empty_label.setVisible(True)
        self.auto_start_label.setVisible(False)

    def apply_font_size(self, font_size: int) -> None:
        self.start_button.setStyleSheet(f"font-size: {font_size}pt;")
        self.participant_list.setStyleSheet(f"font-size: {font_size}pt;")
