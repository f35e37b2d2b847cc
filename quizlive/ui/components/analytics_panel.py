"""Component for the analytics dashboard of hosted and joined sessions."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QButtonGroup,
    QComboBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QPushButton,
    QRadioButton,
    QVBoxLayout,
    QWidget,
)

from quizlive.constants.quiz_constants import DIFFICULTIES
from quizlive.core.services.analytics import ALL, SessionAnalytics, SessionFilter, SortField

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_SORT_LABELS = {
    SortField.CREATED_AT: "Newest",
    SortField.TITLE: "Title",
    SortField.DIFFICULTY: "Difficulty",
}


class AnalyticsPanel(QWidget):
    """Summary figures plus a filterable, paged list of sessions."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.analytics: SessionAnalytics | None = None
        self._page = 1
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        summary_group = QGroupBox("Overview", self)
        summary_form = QFormLayout(summary_group)
        self.total_quizzes_label = QLabel("0", summary_group)
        summary_form.addRow("Quizzes:", self.total_quizzes_label)
        self.total_sessions_label = QLabel("0", summary_group)
        summary_form.addRow("Sessions:", self.total_sessions_label)
        self.average_rating_label = QLabel("-", summary_group)
        summary_form.addRow("Average rating:", self.average_rating_label)
        self.average_score_label = QLabel("0", summary_group)
        summary_form.addRow("Average score:", self.average_score_label)
        self.difficulty_label = QLabel("", summary_group)
        summary_form.addRow("Difficulty mix:", self.difficulty_label)
        self.monthly_label = QLabel("", summary_group)
        self.monthly_label.setWordWrap(True)
        summary_form.addRow("Sessions per month:", self.monthly_label)
        self.subject_accuracy_label = QLabel("", summary_group)
        self.subject_accuracy_label.setWordWrap(True)
        summary_form.addRow("Accuracy by subject:", self.subject_accuracy_label)
        layout.addWidget(summary_group)

        filter_row = QHBoxLayout()
        self.hosted_radio = QRadioButton("Hosted", self)
        self.hosted_radio.setChecked(True)
        self.participated_radio = QRadioButton("Participated", self)
        self.scope_group = QButtonGroup(self)
        self.scope_group.addButton(self.hosted_radio)
        self.scope_group.addButton(self.participated_radio)
        self.hosted_radio.toggled.connect(lambda _: self._reset_page())
        filter_row.addWidget(self.hosted_radio)
        filter_row.addWidget(self.participated_radio)

        self.search_input = QLineEdit(self)
        self.search_input.setPlaceholderText("Search by title")
        self.search_input.textChanged.connect(lambda _: self._reset_page())
        filter_row.addWidget(self.search_input, stretch=1)

        self.difficulty_combo = QComboBox(self)
        self.difficulty_combo.addItem("All difficulties", userData=ALL)
        for difficulty in DIFFICULTIES:
            self.difficulty_combo.addItem(difficulty.capitalize(), userData=difficulty)
        self.difficulty_combo.currentIndexChanged.connect(lambda _: self._reset_page())
        filter_row.addWidget(self.difficulty_combo)

        self.subject_combo = QComboBox(self)
        self.subject_combo.currentIndexChanged.connect(lambda _: self._reset_page())
        filter_row.addWidget(self.subject_combo)

        self.sort_combo = QComboBox(self)
        for field, label in _SORT_LABELS.items():
            self.sort_combo.addItem(label, userData=field)
        self.sort_combo.currentIndexChanged.connect(lambda _: self._reset_page())
        filter_row.addWidget(self.sort_combo)
        layout.addLayout(filter_row)

        self.session_list = QListWidget(self)
        layout.addWidget(self.session_list, stretch=1)

        page_row = QHBoxLayout()
        self.prev_page_button = QPushButton("Previous", self)
        self.prev_page_button.clicked.connect(lambda: self._change_page(-1))
        page_row.addWidget(self.prev_page_button)
        self.page_label = QLabel("", self)
        page_row.addWidget(self.page_label)
        self.next_page_button = QPushButton("Next", self)
        self.next_page_button.clicked.connect(lambda: self._change_page(1))
        page_row.addWidget(self.next_page_button)
        page_row.addStretch()
        layout.addLayout(page_row)

    def show_analytics(self, analytics: SessionAnalytics) -> None:
        self.analytics = analytics
        self.total_quizzes_label.setText(str(analytics.total_quizzes()))
        self.total_sessions_label.setText(str(analytics.total_sessions()))
        rating = analytics.average_rating()
        distribution = analytics.rating_distribution()
        stars = "  ".join(f"{value}*: {count}" for value, count in enumerate(distribution, start=1))
        self.average_rating_label.setText("-" if rating is None else f"{rating} ({stars})")
        self.average_score_label.setText(str(analytics.average_score()))
        self.difficulty_label.setText(
            ", ".join(f"{level}: {count}" for level, count in analytics.difficulty_distribution().items())
        )
        per_month = analytics.sessions_per_month()
        self.monthly_label.setText(
            ", ".join(
                f"{month} {hosted}/{joined}"
                for month, hosted, joined in zip(_MONTHS, per_month["hosted"], per_month["participated"])
                if hosted or joined
            )
            or "-"
        )
        self.subject_accuracy_label.setText(
            ", ".join(f"{subject}: {acc.percentage:.0f}%" for subject, acc in analytics.subject_accuracy().items())
            or "-"
        )

        self.subject_combo.blockSignals(True)
        self.subject_combo.clear()
        for subject in analytics.subjects():
            self.subject_combo.addItem("All subjects" if subject == ALL else subject, userData=subject)
        self.subject_combo.blockSignals(False)
        self._reset_page()

    def _criteria(self) -> SessionFilter:
        return SessionFilter(
            search=self.search_input.text(),
            difficulty=self.difficulty_combo.currentData() or ALL,
            subject=self.subject_combo.currentData() or ALL,
            sort_by=self.sort_combo.currentData(),
            descending=self.sort_combo.currentData() == SortField.CREATED_AT,
        )

    def _reset_page(self) -> None:
        self._page = 1
        self._refresh_sessions()

    def _change_page(self, step: int) -> None:
        self._page = max(1, self._page + step)
        self._refresh_sessions()

    def _refresh_sessions(self) -> None:
        if self.analytics is None:
            return
        page = self.analytics.browse(self.hosted_radio.isChecked(), self._criteria(), self._page)
        self.session_list.clear()
        for session in page.items:
            quiz = session.quiz
            title = quiz.title if quiz else "(deleted quiz)"
            created = session.created_at.strftime("%Y-%m-%d") if session.created_at else "-"
            self.session_list.addItem(f"{created}  {title}  [{session.status.value}]  {len(session.participants)} player(s)")
        self.page_label.setText(f"Page {page.page} of {max(page.total_pages, 1)}")
        self.prev_page_button.setEnabled(page.page > 1)
        self.next_page_button.setEnabled(page.page < page.total_pages)
