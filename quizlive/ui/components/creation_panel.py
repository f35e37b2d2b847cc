"""Component for authoring the questions and details of a quiz draft."""

from __future__ import annotations

from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMenu,
    QPlainTextEdit,
    QPushButton,
    QStackedWidget,
    QToolButton,
    QVBoxLayout,
    QWidget,
)

from quizlive.constants.quiz_constants import DIFFICULTIES
from quizlive.constants.ui_constants import (
    EDITOR_ADD_BUTTON,
    EDITOR_ADD_MEDIA_BUTTON,
    EDITOR_CLEAR_MEDIA_BUTTON,
    EDITOR_COVER_BUTTON,
    EDITOR_DELETE_BUTTON,
    EDITOR_IMAGE_BUTTON,
    EDITOR_NEXT_BUTTON,
    EDITOR_PREV_BUTTON,
    EDITOR_SAVE_BUTTON,
    PLACEHOLDER_EXPLANATION,
    PLACEHOLDER_QUESTION,
)
from quizlive.core.errors import QuizValidationError
from quizlive.core.models import ContentItem, ImageOption, Option, Question, QuestionType
from quizlive.core.services.media_client import MediaItem, MediaSource
from quizlive.core.services.quiz_repository import QuizRepository
from quizlive.ui.components.media_picker_dialog import MediaPickerDialog
from quizlive.ui.dialog_helpers import (
    ask_save_question,
    confirm_delete_question,
    show_error,
    show_info,
    show_warning,
)
from quizlive.ui.question_renderer import render_question

OPTION_LABELS = ("A", "B", "C", "D")

_TYPE_LABELS = {
    QuestionType.MULTIPLE_CHOICE: "Multiple choice",
    QuestionType.TRUE_FALSE: "True / False",
    QuestionType.SHORT_ANSWER: "Short answer",
    QuestionType.FILL_IN_THE_BLANK: "Fill in the blank",
}


class CreationPanel(QWidget):
    """UI component for creating, editing, and navigating quiz questions."""

    def __init__(
        self,
        repository: QuizRepository,
        image_source: MediaSource | None = None,
        gif_source: MediaSource | None = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.repository = repository
        self.image_source = image_source
        self.gif_source = gif_source
        self._current_question_index: int = -1
        self._has_unsaved_changes: bool = False
        self._image_options: list[ImageOption | None] = [None] * len(OPTION_LABELS)
        self._content: list[ContentItem] = []
        self._loading_fields = False

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        details_form = QFormLayout()
        self.title_input = QLineEdit(self)
        self.title_input.editingFinished.connect(self._store_details)
        details_form.addRow("Title:", self.title_input)

        self.subject_input = QLineEdit(self)
        self.subject_input.editingFinished.connect(self._store_details)
        details_form.addRow("Subject:", self.subject_input)

        difficulty_row = QHBoxLayout()
        self.difficulty_combo = QComboBox(self)
        for difficulty in DIFFICULTIES:
            self.difficulty_combo.addItem(difficulty.capitalize(), userData=difficulty)
        self.difficulty_combo.currentIndexChanged.connect(lambda _: self._store_details())
        difficulty_row.addWidget(self.difficulty_combo)
        difficulty_row.addStretch()
        self.cover_button = QPushButton(EDITOR_COVER_BUTTON, self)
        self.cover_button.clicked.connect(self._handle_pick_cover)
        difficulty_row.addWidget(self.cover_button)
        details_form.addRow("Difficulty:", difficulty_row)

        self.description_input = QLineEdit(self)
        self.description_input.editingFinished.connect(self._store_details)
        details_form.addRow("Description:", self.description_input)
        layout.addLayout(details_form)

        action_row = QHBoxLayout()
        self.insert_button = QPushButton(EDITOR_ADD_BUTTON, self)
        self.insert_button.clicked.connect(self._handle_insert_new_draft)
        action_row.addWidget(self.insert_button)

        self.save_button = QPushButton(EDITOR_SAVE_BUTTON, self)
        self.save_button.clicked.connect(self._handle_save_draft)
        action_row.addWidget(self.save_button)

        self.delete_button = QPushButton(EDITOR_DELETE_BUTTON, self)
        self.delete_button.clicked.connect(self._handle_delete_draft)
        action_row.addWidget(self.delete_button)

        self.prev_button = QPushButton(EDITOR_PREV_BUTTON, self)
        self.prev_button.clicked.connect(lambda: self._navigate_drafts(-1))
        action_row.addWidget(self.prev_button)

        self.next_button = QPushButton(EDITOR_NEXT_BUTTON, self)
        self.next_button.clicked.connect(lambda: self._navigate_drafts(1))
        action_row.addWidget(self.next_button)
        layout.addLayout(action_row)

        type_row = QHBoxLayout()
        type_row.addWidget(QLabel("Question type:", self))
        self.type_combo = QComboBox(self)
        for question_type, label in _TYPE_LABELS.items():
            self.type_combo.addItem(label, userData=question_type)
        self.type_combo.currentIndexChanged.connect(self._on_type_changed)
        type_row.addWidget(self.type_combo)
        type_row.addStretch()

        self.media_button = QToolButton(self)
        self.media_button.setText(EDITOR_ADD_MEDIA_BUTTON)
        self.media_button.setPopupMode(QToolButton.InstantPopup)
        media_menu = QMenu(self.media_button)
        media_menu.addAction("Image", lambda: self._handle_attach_media(self.image_source, "image"))
        media_menu.addAction("GIF", lambda: self._handle_attach_media(self.gif_source, "gif"))
        self.media_button.setMenu(media_menu)
        type_row.addWidget(self.media_button)

        self.clear_media_button = QPushButton(EDITOR_CLEAR_MEDIA_BUTTON, self)
        self.clear_media_button.clicked.connect(self._handle_clear_media)
        type_row.addWidget(self.clear_media_button)
        layout.addLayout(type_row)

        self.question_input = QPlainTextEdit(self)
        self.question_input.setPlaceholderText(PLACEHOLDER_QUESTION)
        self.question_input.textChanged.connect(self._on_input_changed)
        layout.addWidget(self.question_input)

        # Answer editors, one page per question type family.
        self.answer_stack = QStackedWidget(self)
        self.answer_stack.addWidget(self._build_choice_page())
        self.answer_stack.addWidget(self._build_true_false_page())
        self.answer_stack.addWidget(self._build_text_answer_page())
        layout.addWidget(self.answer_stack)

        self.explanation_input = QLineEdit(self)
        self.explanation_input.setPlaceholderText(PLACEHOLDER_EXPLANATION)
        self.explanation_input.textChanged.connect(self._on_input_changed)
        layout.addWidget(self.explanation_input)

        self.preview_view = QWebEngineView(self)
        layout.addWidget(self.preview_view, stretch=1)

        self.status_label = QLabel("No draft questions yet.", self)
        layout.addWidget(self.status_label)

    def _build_choice_page(self) -> QWidget:
        page = QWidget(self)
        page_layout = QVBoxLayout(page)
        page_layout.setContentsMargins(0, 0, 0, 0)

        self.option_inputs: list[QLineEdit] = []
        for index, label in enumerate(OPTION_LABELS):
            row = QHBoxLayout()
            option_input = QLineEdit(page)
            option_input.setPlaceholderText(f"Option {label}")
            option_input.textChanged.connect(self._on_input_changed)
            row.addWidget(option_input, stretch=1)
            image_button = QPushButton(EDITOR_IMAGE_BUTTON, page)
            image_button.clicked.connect(lambda _=False, i=index: self._handle_pick_option_image(i))
            row.addWidget(image_button)
            page_layout.addLayout(row)
            self.option_inputs.append(option_input)

        selector_row = QHBoxLayout()
        selector_row.addWidget(QLabel("Correct option:", page))
        self.correct_option_combo = QComboBox(page)
        self.correct_option_combo.addItem("Select...", userData=None)
        for index, label in enumerate(OPTION_LABELS):
            self.correct_option_combo.addItem(label, userData=index)
        self.correct_option_combo.currentIndexChanged.connect(self._on_input_changed)
        selector_row.addWidget(self.correct_option_combo)
        selector_row.addStretch()
        page_layout.addLayout(selector_row)
        return page

    def _build_true_false_page(self) -> QWidget:
        page = QWidget(self)
        row = QHBoxLayout(page)
        row.setContentsMargins(0, 0, 0, 0)
        row.addWidget(QLabel("Correct answer:", page))
        self.true_false_combo = QComboBox(page)
        self.true_false_combo.addItem("True", userData=True)
        self.true_false_combo.addItem("False", userData=False)
        self.true_false_combo.currentIndexChanged.connect(self._on_input_changed)
        row.addWidget(self.true_false_combo)
        row.addStretch()
        return page

    def _build_text_answer_page(self) -> QWidget:
        page = QWidget(self)
        row = QHBoxLayout(page)
        row.setContentsMargins(0, 0, 0, 0)
        row.addWidget(QLabel("Correct answer:", page))
        self.text_answer_input = QLineEdit(page)
        self.text_answer_input.textChanged.connect(self._on_input_changed)
        row.addWidget(self.text_answer_input, stretch=1)
        return page

    # --- Input tracking ---

    def _selected_type(self) -> QuestionType:
        return self.type_combo.currentData()

    def _on_type_changed(self) -> None:
        question_type = self._selected_type()
        if question_type == QuestionType.MULTIPLE_CHOICE:
            self.answer_stack.setCurrentIndex(0)
        elif question_type == QuestionType.TRUE_FALSE:
            self.answer_stack.setCurrentIndex(1)
        else:
            self.answer_stack.setCurrentIndex(2)
        self._on_input_changed()

    def _on_input_changed(self) -> None:
        if self._loading_fields:
            return
        self._has_unsaved_changes = True
        self._refresh_preview()

    def _store_details(self) -> None:
        if self._loading_fields:
            return
        self.repository.update_details(
            self.title_input.text(),
            self.subject_input.text(),
            self.difficulty_combo.currentData(),
            self.description_input.text(),
        )

    # --- Media ---

    def _pick_media(self, source: MediaSource | None) -> MediaItem | None:
        if source is None:
            show_info(self, "Media unavailable", "No media API key is configured.")
            return None
        dialog = MediaPickerDialog(source, self)
        if dialog.exec() != QDialog.Accepted:
            return None
        return dialog.selected_item

    def _handle_pick_option_image(self, index: int) -> None:
        item = self._pick_media(self.image_source)
        if item is None:
            return
        self._image_options[index] = ImageOption(url=item.url, description=item.description)
        if not self.option_inputs[index].text().strip():
            self.option_inputs[index].setText(item.description)
        self._on_input_changed()

    def _handle_attach_media(self, source: MediaSource | None, media_type: str) -> None:
        item = self._pick_media(source)
        if item is None:
            return
        self._content.append(ContentItem(type=media_type, url=item.url))
        self._on_input_changed()

    def _handle_clear_media(self) -> None:
        self._content = []
        self._image_options = [None] * len(OPTION_LABELS)
        self._on_input_changed()

    def _handle_pick_cover(self) -> None:
        item = self._pick_media(self.image_source)
        if item is None:
            return
        self.repository.set_cover_image(item.url)
        self.status_label.setText("Cover image updated.")

    # --- Draft actions ---

    def _handle_insert_new_draft(self) -> None:
        if not self.check_unsaved_changes():
            return
        self._current_question_index = self.repository.question_count()
        self.clear_fields()
        self.status_label.setText("Ready to insert a new question.")

    def _handle_save_draft(self) -> None:
        draft = self._build_draft_from_inputs()
        try:
            if self._current_question_index == -1 or self._current_question_index >= self.repository.question_count():
                self._current_question_index = self.repository.add_question(draft)
            else:
                self.repository.update_question(self._current_question_index, draft)
        except QuizValidationError as exc:
            show_warning(self, "Invalid question", exc.message)
            return
        except IndexError as exc:
            show_error(self, "Save failed", f"Could not save question: {exc}")
            return

        self._has_unsaved_changes = False
        self.status_label.setText(
            f"Saved question {self._current_question_index + 1} of {self.repository.question_count()}."
        )

    def _handle_delete_draft(self) -> None:
        if self._current_question_index == -1:
            show_info(self, "No selection", "Select a question before deleting.")
            return

        if self._current_question_index >= self.repository.question_count():
            self.clear_fields()
            self.status_label.setText("Discarded unsaved question.")
            self._current_question_index = -1
            return

        if not confirm_delete_question(self, self._current_question_index + 1):
            return

        self.repository.delete_question(self._current_question_index)
        count = self.repository.question_count()
        if count == 0:
            self._current_question_index = -1
            self.clear_fields()
            self.status_label.setText("All questions removed.")
            return

        self._current_question_index = min(self._current_question_index, count - 1)
        self.populate_fields(self.repository.question_at(self._current_question_index))
        self.status_label.setText(f"Deleted question. Now viewing {self._current_question_index + 1} of {count}.")

    def _navigate_drafts(self, step: int) -> None:
        if not self.check_unsaved_changes():
            return
        count = self.repository.question_count()
        if count == 0:
            return
        target = self._current_question_index + step if self._current_question_index != -1 else 0
        target = max(0, min(count - 1, target))
        self._current_question_index = target
        self.populate_fields(self.repository.question_at(target))
        self.status_label.setText(f"Viewing question {target + 1} of {count}.")

    def check_unsaved_changes(self) -> bool:
        """Prompt about unsaved edits. Returns True if it is ok to proceed."""
        if not self._has_unsaved_changes:
            return True
        result = ask_save_question(self)
        if result is True:
            self._handle_save_draft()
            return not self._has_unsaved_changes
        if result is False:
            self._has_unsaved_changes = False
            return True
        return False

    # --- Field population ---

    def clear_fields(self) -> None:
        self._loading_fields = True
        try:
            self.type_combo.setCurrentIndex(0)
            self.answer_stack.setCurrentIndex(0)
            self.question_input.clear()
            for input_field in self.option_inputs:
                input_field.clear()
            self.correct_option_combo.setCurrentIndex(0)
            self.true_false_combo.setCurrentIndex(0)
            self.text_answer_input.clear()
            self.explanation_input.clear()
            self._image_options = [None] * len(OPTION_LABELS)
            self._content = []
        finally:
            self._loading_fields = False
        self._has_unsaved_changes = False
        self._refresh_preview()

    def populate_fields(self, question: Question) -> None:
        self.clear_fields()
        self._loading_fields = True
        try:
            self.type_combo.setCurrentIndex(self.type_combo.findData(question.type))
            self._on_type_changed()
            self.question_input.setPlainText(question.question)
            for index, option in enumerate(question.options[: len(OPTION_LABELS)]):
                if isinstance(option, ImageOption):
                    self._image_options[index] = option
                    self.option_inputs[index].setText(option.description)
                else:
                    self.option_inputs[index].setText(option)
            answer = question.correct_answer
            if question.type == QuestionType.MULTIPLE_CHOICE and isinstance(answer, int) and not isinstance(answer, bool):
                self.correct_option_combo.setCurrentIndex(answer + 1)
            elif question.type == QuestionType.TRUE_FALSE:
                self.true_false_combo.setCurrentIndex(0 if answer is True else 1)
            elif isinstance(answer, str):
                self.text_answer_input.setText(answer)
            self.explanation_input.setText(question.explanation or "")
            self._content = list(question.content)
        finally:
            self._loading_fields = False
        self._has_unsaved_changes = False
        self._refresh_preview()

    def populate_details(self) -> None:
        quiz = self.repository.quiz()
        self._loading_fields = True
        try:
            self.title_input.setText(quiz.title)
            self.subject_input.setText(quiz.subject)
            index = self.difficulty_combo.findData(quiz.difficulty)
            self.difficulty_combo.setCurrentIndex(max(index, 0))
            self.description_input.setText(quiz.description)
        finally:
            self._loading_fields = False

    def _collect_options(self) -> list[Option]:
        options: list[Option] = []
        for index, field in enumerate(self.option_inputs):
            text = field.text().strip()
            image = self._image_options[index]
            if image is not None:
                options.append(ImageOption(url=image.url, description=text or image.description))
            elif text:
                options.append(text)
        return options

    def _build_draft_from_inputs(self) -> Question:
        question_type = self._selected_type()
        options: list[Option] = []
        if question_type == QuestionType.MULTIPLE_CHOICE:
            options = self._collect_options()
            correct = self.correct_option_combo.currentData()
        elif question_type == QuestionType.TRUE_FALSE:
            correct = self.true_false_combo.currentData()
        else:
            correct = self.text_answer_input.text().strip()
        return Question(
            question=self.question_input.toPlainText().strip(),
            type=question_type,
            options=options,
            correct_answer=correct,
            content=list(self._content),
            explanation=self.explanation_input.text().strip() or None,
        )

    def _refresh_preview(self) -> None:
        self.preview_view.setHtml(render_question(self._build_draft_from_inputs(), reveal=True))

    def reset_state(self) -> None:
        """Reload the panel from the repository's current draft."""
        self.populate_details()
        if self.repository.has_questions():
            self._current_question_index = 0
            self.populate_fields(self.repository.question_at(0))
            self.status_label.setText(f"Viewing question 1 of {self.repository.question_count()}.")
        else:
            self._current_question_index = -1
            self.clear_fields()
            self.status_label.setText("Ready to create a new quiz.")

    def set_status_message(self, message: str) -> None:
        self.status_label.setText(message)

    def apply_font_size(self, font_size: int) -> None:
        style = f"font-size: {font_size}pt;"
        for button in (self.insert_button, self.save_button, self.delete_button, self.prev_button, self.next_button):
            button.setStyleSheet(style)
