from __future__ import annotations

from dataclasses import replace

import pytest

from quizlive.core.errors import QuizValidationError
from quizlive.core.models import Question, Quiz
from quizlive.core.services.quiz_repository import QuizRepository


class StubApi:
    def __init__(self) -> None:
        self.deleted: list[str] = []
        self.created: list[Quiz] = []
        self.edited: list[tuple[str, Quiz]] = []
        self.toggled: list[str] = []

    def create_quiz(self, quiz: Quiz, user_id: str) -> Quiz:
        self.created.append(quiz)
        return replace(quiz, id="quiz-1")

    def edit_quiz(self, quiz_id: str, quiz: Quiz, user_id: str) -> Quiz:
        self.edited.append((quiz_id, quiz))
        return replace(quiz)

    def delete_quiz(self, quiz_id: str, user_id: str) -> None:
        self.deleted.append(quiz_id)

    def toggle_publish(self, quiz_id: str, user_id: str) -> tuple[str, bool]:
        self.toggled.append(quiz_id)
        return "Quiz published", True


def _question(text: str = "Capital of France?") -> Question:
    return Question(question=text, options=["Rome", "Paris"], correct_answer=1)


class TestQuizRepository:
    def setup_method(self):
        self.repository = QuizRepository()
        self.api = StubApi()

    def fill(self) -> None:
        self.repository.update_details("Capitals", "Geography", "beginner", "European capitals")
        self.repository.add_question(_question())

    def test_invalid_question_is_not_added(self):
        with pytest.raises(QuizValidationError):
            self.repository.add_question(Question(question="Pick", options=["a"], correct_answer=3))

        assert self.repository.question_count() == 0
        assert not self.repository.is_dirty()

    def test_update_keeps_the_server_id(self):
        self.repository.load(Quiz(title="Capitals", id="quiz-1", questions=[replace(_question(), id="q1")]))

        self.repository.update_question(0, _question("Capital of Spain?"))

        assert self.repository.question_at(0).id == "q1"
        assert self.repository.question_at(0).question == "Capital of Spain?"
        assert self.repository.is_dirty()

    def test_out_of_range_index(self):
        with pytest.raises(IndexError):
            self.repository.delete_question(0)
        with pytest.raises(IndexError):
            self.repository.question_at(3)

    def test_public_copy_is_saved_as_a_new_quiz(self):
        public = Quiz(
            title="Capitals", subject="Geography", id="theirs", is_public=True, questions=[replace(_question(), id="q9")]
        )

        self.repository.load_copy(public)
        saved = self.repository.save(self.api, "u1")

        assert self.repository.is_dirty() is False
        assert saved.id == "quiz-1"
        assert self.api.edited == []
        assert self.api.created[0].questions[0].id is None
        assert not self.api.created[0].is_public
        assert public.id == "theirs"

    def test_loading_an_empty_quiz_is_refused(self):
        with pytest.raises(ValueError):
            self.repository.load(Quiz(title="Empty"))

    def test_first_save_creates(self):
        self.fill()

        saved = self.repository.save(self.api, "u1")

        assert saved.id == "quiz-1"
        assert len(self.api.created) == 1
        assert not self.repository.is_dirty()

    def test_second_save_edits(self):
        self.fill()
        self.repository.save(self.api, "u1")
        self.repository.add_question(_question("Capital of Spain?"))

        self.repository.save(self.api, "u1")

        assert self.api.edited[0][0] == "quiz-1"
        assert len(self.api.edited[0][1].questions) == 2

    def test_invalid_draft_is_not_sent(self):
        self.repository.add_question(_question())

        with pytest.raises(QuizValidationError):
            self.repository.save(self.api, "u1")

        assert self.api.created == []

    def test_publish_saves_then_toggles(self):
        self.fill()

        assert self.repository.publish(self.api, "u1") is True
        assert len(self.api.created) == 1
        assert self.api.toggled == ["quiz-1"]
        assert self.repository.quiz().is_public

    def test_clear(self):
        self.fill()

        self.repository.clear()

        assert not self.repository.has_questions()
        assert self.repository.quiz().title == ""

    def test_delete_saved_quiz(self):
        self.fill()
        self.repository.save(self.api, "u1")

        assert self.repository.delete(self.api, "u1") is True
        assert self.api.deleted == ["quiz-1"]
        assert not self.repository.has_questions()

    def test_delete_unsaved_draft_stays_local(self):
        self.fill()

        assert self.repository.delete(self.api, "u1") is False
        assert self.api.deleted == []
        assert not self.repository.has_questions()
