from __future__ import annotations

import pytest

from quizlive.core.errors import QuizValidationError
from quizlive.core.models import ImageOption, Question, QuestionType, Quiz
from quizlive.core.quiz_validator import (
    is_publishable,
    validate_for_create,
    validate_for_publish,
    validate_question,
    validate_quiz_details,
)


def _valid_quiz() -> Quiz:
    return Quiz(
        title="Capitals",
        subject="Geography",
        description="European capitals",
        questions=[
            Question(question="Capital of France?", options=["Rome", "Paris"], correct_answer=1),
            Question(question="Berlin is in Germany.", type=QuestionType.TRUE_FALSE, correct_answer=True),
            Question(question="Capital of Italy?", type=QuestionType.SHORT_ANSWER, correct_answer="Rome"),
        ],
    )


class TestQuestionValidation:
    def test_empty_text(self):
        with pytest.raises(QuizValidationError):
            validate_question(Question(question="   ", options=["a"], correct_answer=0))

    def test_multiple_choice_answer_must_index_options(self):
        with pytest.raises(QuizValidationError) as excinfo:
            validate_question(Question(question="Pick", options=["a", "b"], correct_answer=2), index=4)

        assert excinfo.value.question_index == 4

    def test_boolean_is_not_an_option_index(self):
        with pytest.raises(QuizValidationError):
            validate_question(Question(question="Pick", options=["a", "b"], correct_answer=True))

    def test_options_need_content(self):
        with pytest.raises(QuizValidationError):
            validate_question(Question(question="Pick", options=["a", " "], correct_answer=0))

    def test_image_option_with_url_counts_as_content(self):
        question = Question(
            question="Pick the cat",
            options=[ImageOption(url="https://img.test/cat.jpg"), "dog"],
            correct_answer=0,
        )

        validate_question(question)

    def test_true_false_needs_a_boolean(self):
        with pytest.raises(QuizValidationError):
            validate_question(Question(question="Sky is blue", type=QuestionType.TRUE_FALSE, correct_answer="true"))

    def test_text_answers_need_text(self):
        with pytest.raises(QuizValidationError):
            validate_question(Question(question="Fill", type=QuestionType.FILL_IN_THE_BLANK, correct_answer=""))


class TestQuizValidation:
    def test_valid_quiz_is_publishable(self):
        quiz = _valid_quiz()

        validate_for_publish(quiz)
        assert is_publishable(quiz)

    def test_details_are_checked_in_order(self):
        quiz = _valid_quiz()
        quiz.title = ""
        quiz.subject = ""

        with pytest.raises(QuizValidationError, match="title"):
            validate_quiz_details(quiz)

    def test_create_needs_questions(self):
        quiz = _valid_quiz()
        quiz.questions = []

        with pytest.raises(QuizValidationError):
            validate_for_create(quiz)

    def test_cover_image_must_be_an_image_reference(self):
        quiz = _valid_quiz()
        quiz.cover_image = "cover.txt"

        with pytest.raises(QuizValidationError, match="cover image"):
            validate_for_create(quiz)

    def test_data_url_cover_is_accepted(self):
        quiz = _valid_quiz()
        quiz.cover_image = "data:image/png;base64,AAAA"

        validate_for_create(quiz)

    def test_publish_reports_the_failing_question(self):
        quiz = _valid_quiz()
        quiz.questions[1].correct_answer = None

        with pytest.raises(QuizValidationError) as excinfo:
            validate_for_publish(quiz)

        assert excinfo.value.question_index == 1
        assert not is_publishable(quiz)
