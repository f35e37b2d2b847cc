"""Helper functions for common dialog patterns in the QuizLive windows."""

from __future__ import annotations

from datetime import datetime

from PySide6.QtCore import QDateTime
from PySide6.QtGui import QFont
from PySide6.QtWidgets import (
    QDateTimeEdit,
    QDialog,
    QDialogButtonBox,
    QInputDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QVBoxLayout,
    QWidget,
)

from quizlive.core.models import Quiz

STATUS_MESSAGE_TIMEOUT_MS = 4000


def _apply_optional_font(widget: QWidget, font_point_size: int | None) -> None:
    if font_point_size is None or font_point_size <= 0:
        return

    font: QFont = widget.font()
    font.setPointSize(font_point_size)
    widget.setFont(font)


def _confirm(parent: QWidget, title: str, message: str) -> bool:
    reply = QMessageBox.question(
        parent,
        title,
        message,
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return reply == QMessageBox.Yes


def confirm_delete_question(parent: QWidget, question_number: int) -> bool:
    return _confirm(parent, "Confirm Delete", f"Are you sure you want to delete question {question_number}?")


def confirm_delete_quiz(parent: QWidget, title: str) -> bool:
    return _confirm(parent, "Delete Quiz", f"Delete '{title}' for good? Past session results are kept.")


def confirm_import_quiz(parent: QWidget) -> bool:
    return _confirm(parent, "Confirm Import", "Importing a quiz will replace the current draft. Continue?")


def ask_save_question(parent: QWidget) -> bool | None:
    """Returns True to save, False to discard, None when the user cancels."""
    reply = QMessageBox.question(
        parent,
        "Unsaved Changes",
        "This question has unsaved edits. Save them first?",
        QMessageBox.Yes | QMessageBox.No | QMessageBox.Cancel,
        QMessageBox.Yes,
    )
    if reply == QMessageBox.Yes:
        return True
    if reply == QMessageBox.No:
        return False
    return None


def confirm_end_quiz(parent: QWidget) -> bool:
    """Ask before ending the session for every participant."""
    return _confirm(
        parent,
        "End Quiz",
        "Are you sure you want to end this quiz session? All participants will be disconnected.",
    )


def confirm_remove_participant(parent: QWidget, name: str) -> bool:
    return _confirm(parent, "Remove Participant", f"Remove {name} from the session?")


def confirm_leave_quiz(parent: QWidget) -> bool:
    return _confirm(parent, "Leave Quiz", "Are you sure you want to leave this quiz?")


def ask_schedule_time(parent: QWidget) -> datetime | None:
    """Let the host pick a future start time. Returns None when cancelled."""
    dialog = QDialog(parent)
    dialog.setWindowTitle("Schedule Quiz")
    layout = QVBoxLayout(dialog)
    layout.addWidget(QLabel("Start the quiz at:", dialog))
    picker = QDateTimeEdit(QDateTime.currentDateTime().addSecs(3600), dialog)
    picker.setCalendarPopup(True)
    picker.setMinimumDateTime(QDateTime.currentDateTime())
    layout.addWidget(picker)
    buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel, dialog)
    buttons.accepted.connect(dialog.accept)
    buttons.rejected.connect(dialog.reject)
    layout.addWidget(buttons)
    if dialog.exec() != QDialog.Accepted:
        return None
    return picker.dateTime().toPython()


def ask_invitee_email(parent: QWidget) -> str | None:
    email, accepted = QInputDialog.getText(parent, "Invite Participant", "Email address:")
    email = email.strip()
    return email if accepted and email else None


def ask_public_quiz(parent: QWidget, quizzes: list[Quiz]) -> Quiz | None:
    """Pick one quiz from the public library. Returns None when cancelled."""
    labels = [
        f"{number}. {quiz.title} ({quiz.subject or 'No subject'}, {quiz.difficulty}, {len(quiz.questions)} questions)"
        for number, quiz in enumerate(quizzes, start=1)
    ]
    label, accepted = QInputDialog.getItem(parent, "Public Quizzes", "Start a draft from:", labels, 0, False)
    if not accepted or label not in labels:
        return None
    return quizzes[labels.index(label)]


def show_error(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.critical(parent, title, message)


def show_info(
    parent: QWidget,
    title: str,
    message: str,
    *,
    font_point_size: int | None = None,
) -> None:
    """Show information dialog.

    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Information message
        font_point_size: Optional font size for label and button text
    """
    msg_box = QMessageBox(parent)
    msg_box.setIcon(QMessageBox.Information)
    msg_box.setWindowTitle(title)
    msg_box.setText(message)
    msg_box.setStandardButtons(QMessageBox.Ok)
    _apply_optional_font(msg_box, font_point_size)
    msg_box.exec()


def show_warning(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.warning(parent, title, message)


class StatusBarNotifier:
    """Toast-like notifier: info in the status bar, errors in a dialog."""

    def __init__(self, window: QMainWindow) -> None:
        self._window = window

    def success(self, message: str) -> None:
        self._window.statusBar().showMessage(message, STATUS_MESSAGE_TIMEOUT_MS)

    def info(self, message: str) -> None:
        self._window.statusBar().showMessage(message, STATUS_MESSAGE_TIMEOUT_MS)

    def error(self, message: str) -> None:
        self._window.statusBar().showMessage(message, STATUS_MESSAGE_TIMEOUT_MS)
        show_warning(self._window, "QuizLive", message)
