"""Service holding the quiz draft being authored in the host console."""

from __future__ import annotations

from dataclasses import replace
from threading import Lock

from quizlive.core.models import Question, Quiz
from quizlive.core.quiz_validator import validate_for_create, validate_for_publish, validate_question
from quizlive.core.services.api_client import QuizApiClient


class QuizRepository:
    """Manages the questions and metadata of one quiz draft."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._quiz = Quiz(title="")
        self._dirty = False

    def load(self, quiz: Quiz) -> None:
        """Replace the current draft with ``quiz``."""
        if not quiz.questions:
            raise ValueError("Quiz must contain at least one question.")
        with self._lock:
            self._quiz = quiz
            self._dirty = quiz.id is None

    def load_copy(self, quiz: Quiz) -> None:
        """Start a private draft from a public quiz; saving it creates a new quiz."""
        questions = [replace(question, id=None) for question in quiz.questions]
        self.load(replace(quiz, id=None, is_public=False, questions=questions))

    def quiz(self) -> Quiz:
        with self._lock:
            return self._quiz

    def has_questions(self) -> bool:
        with self._lock:
            return bool(self._quiz.questions)

    def question_count(self) -> int:
        with self._lock:
            return len(self._quiz.questions)

    def question_at(self, index: int) -> Question:
        with self._lock:
            if not 0 <= index < len(self._quiz.questions):
                raise IndexError(f"Question index {index} out of range")
            return self._quiz.questions[index]

    def add_question(self, question: Question) -> int:
        validate_question(question)
        with self._lock:
            self._quiz.questions.append(question)
            self._dirty = True
            return len(self._quiz.questions) - 1

    def update_question(self, index: int, question: Question) -> None:
        validate_question(question, index)
        with self._lock:
            if not 0 <= index < len(self._quiz.questions):
                raise IndexError(f"Question index {index} out of range")
            # Keep the server id so edits update the same question.
            question.id = self._quiz.questions[index].id
            self._quiz.questions[index] = question
            self._dirty = True

    def delete_question(self, index: int) -> None:
        with self._lock:
            if not 0 <= index < len(self._quiz.questions):
                raise IndexError(f"Question index {index} out of range")
            self._quiz.questions.pop(index)
            self._dirty = True

    def update_details(self, title: str, subject: str, difficulty: str, description: str = "") -> None:
        with self._lock:
            self._quiz.title = title.strip()
            self._quiz.subject = subject.strip()
            self._quiz.difficulty = difficulty
            self._quiz.description = description.strip()
            self._dirty = True

    def set_cover_image(self, url: str | None) -> None:
        with self._lock:
            self._quiz.cover_image = url
            self._dirty = True

    def clear(self) -> None:
        with self._lock:
            self._quiz = Quiz(title="")
            self._dirty = False

    def is_dirty(self) -> bool:
        with self._lock:
            return self._dirty

    def save(self, api: QuizApiClient, user_id: str) -> Quiz:
        """Create the quiz on the server, or update it when it already has an id.

        Validation runs first so nothing is sent for an invalid draft.
        """
        quiz = self.quiz()
        validate_for_create(quiz)
        for index, question in enumerate(quiz.questions):
            validate_question(question, index)
        if quiz.id is None:
            saved = api.create_quiz(quiz, user_id)
        else:
            saved = api.edit_quiz(quiz.id, quiz, user_id)
        with self._lock:
            self._quiz = saved
            self._dirty = False
        return saved

    def publish(self, api: QuizApiClient, user_id: str) -> bool:
        """Save if needed, then make the quiz public. Returns the new visibility."""
        quiz = self.quiz()
        validate_for_publish(quiz)
        if quiz.id is None or self.is_dirty():
            quiz = self.save(api, user_id)
        if quiz.is_public:
            return True
        _, is_public = api.toggle_publish(quiz.id, user_id)
        with self._lock:
            self._quiz.is_public = is_public
        return is_public

    def delete(self, api: QuizApiClient, user_id: str) -> bool:
        """Remove the saved quiz from the server and clear the draft.

        An unsaved draft is only cleared. Returns whether the server was asked.
        """
        quiz_id = self.quiz().id
        if quiz_id is not None:
            api.delete_quiz(quiz_id, user_id)
        self.clear()
        return quiz_id is not None
