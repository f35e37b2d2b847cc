"""Dialog for picking an image or GIF from a remote media source."""

from __future__ import annotations

from html import escape

from PySide6.QtCore import Qt
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QDialog,
    QDialogButtonBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from quizlive.core.errors import ApiError
from quizlive.core.services.media_client import MediaItem, MediaPicker, MediaSource
from quizlive.ui.dialog_helpers import show_warning


class MediaPickerDialog(QDialog):
    """Search a media source page by page and return the chosen item."""

    def __init__(self, source: MediaSource, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.picker = MediaPicker(source)
        self.selected_item: MediaItem | None = None

        self.setWindowTitle(f"Pick from {source.name}")
        self.resize(720, 520)
        self._build_ui()
        self._run_search()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        search_row = QHBoxLayout()
        self.search_input = QLineEdit(self)
        self.search_input.setPlaceholderText("Search...")
        self.search_input.returnPressed.connect(self._run_search)
        search_row.addWidget(self.search_input, stretch=1)
        search_button = QPushButton("Search", self)
        search_button.clicked.connect(self._run_search)
        search_row.addWidget(search_button)
        layout.addLayout(search_row)

        body_row = QHBoxLayout()
        self.result_list = QListWidget(self)
        self.result_list.currentItemChanged.connect(self._on_selection_changed)
        self.result_list.itemDoubleClicked.connect(lambda _: self.accept())
        body_row.addWidget(self.result_list, stretch=1)

        self.preview_view = QWebEngineView(self)
        body_row.addWidget(self.preview_view, stretch=2)
        layout.addLayout(body_row, stretch=1)

        footer_row = QHBoxLayout()
        self.count_label = QLabel("", self)
        footer_row.addWidget(self.count_label)
        footer_row.addStretch()
        self.load_more_button = QPushButton("Load more", self)
        self.load_more_button.clicked.connect(self._load_more)
        footer_row.addWidget(self.load_more_button)
        layout.addLayout(footer_row)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel, self)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)

    def _run_search(self) -> None:
        try:
            items = self.picker.search(self.search_input.text())
        except ApiError as exc:
            show_warning(self, "Media search failed", exc.message)
            items = []
        self.result_list.clear()
        self._append_items(items)

    def _load_more(self) -> None:
        try:
            batch = self.picker.load_more()
        except ApiError as exc:
            show_warning(self, "Media search failed", exc.message)
            return
        self._append_items(batch)

    def _append_items(self, items: list[MediaItem]) -> None:
        for item in items:
            entry = QListWidgetItem(item.description or item.id, self.result_list)
            entry.setToolTip(item.url)
            entry.setData(Qt.UserRole, item)
        self.load_more_button.setEnabled(self.picker.has_more)
        self.count_label.setText(f"{len(self.picker.items)} result(s)")

    def _on_selection_changed(self, current: QListWidgetItem | None, _previous: QListWidgetItem | None) -> None:
        self.selected_item = current.data(Qt.UserRole) if current is not None else None
        if self.selected_item is None:
            self.preview_view.setHtml("")
            return
        self.preview_view.setHtml(
            f'<html><body style="margin:0"><img src="{escape(self.selected_item.url)}" '
            'style="max-width:100%;max-height:100%" /></body></html>'
        )
