"""Qt UI components for the host console and the participant window."""

from .dialog_helpers import (
    ask_save_question,
    confirm_delete_question,
    confirm_end_quiz,
    confirm_import_quiz,
    confirm_leave_quiz,
    show_error,
    show_info,
    show_warning,
)
from .host_main_window import HostMainWindow
from .participant_window import ParticipantWindow
from .question_renderer import render_question

__all__ = [
    "HostMainWindow",
    "ParticipantWindow",
    "ask_save_question",
    "confirm_delete_question",
    "confirm_end_quiz",
    "confirm_import_quiz",
    "confirm_leave_quiz",
    "show_error",
    "show_info",
    "show_warning",
    "render_question",
]
