"""Application entry point for the QuizLive client."""

from __future__ import annotations

import argparse
from pathlib import Path
import sys

from PySide6.QtWidgets import QApplication, QMessageBox

from quizlive.config import ClientConfig
from quizlive.constants.about import APP_NAME
from quizlive.core.app_state import AppState
from quizlive.core.services.api_client import QuizApiClient
from quizlive.ui.host_main_window import HostMainWindow
from quizlive.ui.participant_window import ParticipantWindow
from quizlive.utils.logging_config import configure_logging


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="quizlive", description="Host or join live quizzes.")
    parser.add_argument("--participant", action="store_true", help="open the participant window")
    parser.add_argument("--user-id", help="id of the signed-in user (overrides QUIZLIVE_USER_ID)")
    parser.add_argument("--quiz-id", help="open this quiz in the host editor")
    parser.add_argument("--env-file", type=Path, default=Path(".env"), help="optional .env file")
    return parser.parse_known_args(argv)[0]


def main(argv: list[str] | None = None) -> int:
    """Load config and the signed-in user, then launch the chosen window."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    config = ClientConfig.from_env(args.env_file)
    logger = configure_logging(config.log_level)
    logger.info("Starting %s against %s", APP_NAME, config.server_url)

    app = QApplication(sys.argv)
    api = QuizApiClient(config.server_url, config.request_timeout)
    app_state = AppState()

    user_id = args.user_id or config.user_id
    user = app_state.load_user(api, user_id) if user_id else None
    if user is None:
        logger.error("No signed-in user (user id: %s)", user_id)
        QMessageBox.critical(None, APP_NAME, "Sign-in required: set QUIZLIVE_USER_ID or pass --user-id.")
        api.close()
        return 1
    app_state.refresh_unread_count(api)

    if args.participant:
        window = ParticipantWindow(config, app_state, api)
    else:
        window = HostMainWindow(config, app_state, api)
        if args.quiz_id:
            window.open_quiz(args.quiz_id)
    window.show()
    exit_code = app.exec()
    api.close()
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
