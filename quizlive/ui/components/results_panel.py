"""Component showing the final standings of a finished session."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QListWidget,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from quizlive.core.services.api_client import HostResults, UserResults
from quizlive.core.services.leaderboard import (
    accuracy_bands,
    average_accuracy,
    average_score,
    rank_entries,
    toughest_questions,
)
from quizlive.styling.styles import Styles

_LEADERBOARD_COLUMNS = ("#", "Name", "Score", "Accuracy", "Correct", "Avg. time")


def _cell(value: Any) -> QTableWidgetItem:
    item = QTableWidgetItem(str(value))
    item.setFlags(item.flags() & ~Qt.ItemIsEditable)
    return item


class ResultsPanel(QWidget):
    """Final leaderboard, summary figures and feedback for one session."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.title_label = QLabel("", self)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.title_label)

        self.summary_label = QLabel("", self)
        self.summary_label.setWordWrap(True)
        layout.addWidget(self.summary_label)

        self.table = QTableWidget(0, len(_LEADERBOARD_COLUMNS), self)
        self.table.setHorizontalHeaderLabels(_LEADERBOARD_COLUMNS)
        self.table.horizontalHeader().setSectionResizeMode(1, QHeaderView.Stretch)
        self.table.verticalHeader().setVisible(False)
        layout.addWidget(self.table, stretch=2)

        detail_row = QHBoxLayout()
        self.bands_group = QGroupBox("Accuracy bands", self)
        self.bands_label = QLabel("", self.bands_group)
        bands_layout = QVBoxLayout(self.bands_group)
        bands_layout.addWidget(self.bands_label)
        detail_row.addWidget(self.bands_group)

        self.tough_group = QGroupBox("Toughest questions", self)
        self.tough_list = QListWidget(self.tough_group)
        tough_layout = QVBoxLayout(self.tough_group)
        tough_layout.addWidget(self.tough_list)
        detail_row.addWidget(self.tough_group, stretch=1)

        self.feedback_group = QGroupBox("Feedback", self)
        self.feedback_list = QListWidget(self.feedback_group)
        feedback_layout = QVBoxLayout(self.feedback_group)
        feedback_layout.addWidget(self.feedback_list)
        detail_row.addWidget(self.feedback_group, stretch=1)

        layout.addLayout(detail_row, stretch=1)

    def show_host_results(self, results: HostResults) -> None:
        quiz = results.session.quiz
        self.title_label.setText(f"Results: {quiz.title}" if quiz else "Results")

        entries = rank_entries(results.leaderboard)
        self.summary_label.setText(
            f"{len(entries)} participant(s), average score {average_score(entries):.1f}, "
            f"average accuracy {average_accuracy(entries):.0f}%"
        )
        self._fill_table(entries)

        bands = accuracy_bands(entries)
        self.bands_label.setText("\n".join(f"{band}: {count}" for band, count in bands.items()))

        self.tough_list.clear()
        questions = quiz.questions if quiz else []
        for summary in toughest_questions(questions, entries):
            self.tough_list.addItem(f"{summary.accuracy:.0f}%  {summary.question}")

        self.feedback_list.clear()
        for feedback in results.feedbacks:
            stars = "*" * feedback.rating
            self.feedback_list.addItem(f"{stars}  {feedback.comment}".rstrip())
        self.bands_group.setVisible(True)
        self.tough_group.setVisible(True)
        self.feedback_group.setVisible(True)

    def show_user_results(self, results: UserResults) -> None:
        quiz = results.session.quiz
        self.title_label.setText(f"Your results: {quiz.title}" if quiz else "Your results")
        stats = results.user_stats
        self.summary_label.setText(
            f"Rank #{stats.get('rank', '-')}, score {stats.get('score', 0)}, "
            f"accuracy {stats.get('accuracy', 0)}%, "
            f"{stats.get('correctAnswers', 0)} of {stats.get('answersCount', 0)} correct, "
            f"average time {stats.get('averageTime', 0)}s"
        )
        self.table.setRowCount(0)
        self.bands_group.setVisible(False)
        self.tough_group.setVisible(False)
        self.feedback_group.setVisible(False)

    def _fill_table(self, entries: list) -> None:
        self.table.setRowCount(len(entries))
        for row, entry in enumerate(entries):
            values = (
                row + 1,
                entry.name,
                f"{entry.score:g}",
                f"{entry.accuracy:.0f}%",
                f"{entry.correct_answers}/{entry.answers_count}",
                f"{entry.average_time:.1f}s",
            )
            for column, value in enumerate(values):
                self.table.setItem(row, column, _cell(value))

    def reset_state(self) -> None:
        self.title_label.setText("")
        self.summary_label.setText("")
        self.table.setRowCount(0)
        self.bands_label.setText("")
        self.tough_list.clear()
        self.feedback_list.clear()
