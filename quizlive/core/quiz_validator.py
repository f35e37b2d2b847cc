"""Local validation of quiz drafts before they are sent to the server.

Validation raises :class:`QuizValidationError` on the first problem found, in
the same order the editor walks a draft: metadata first, then each question
in sequence. Nothing here touches the network.
"""

from __future__ import annotations

from quizlive.core.errors import QuizValidationError
from quizlive.core.models import ImageOption, Question, QuestionType, Quiz


def validate_quiz_details(quiz: Quiz) -> None:
    """Check the first editor step (title, subject, description)."""
    if not quiz.title.strip():
        raise QuizValidationError("Please enter a quiz title.")
    if not quiz.subject.strip():
        raise QuizValidationError("Please select a subject.")
    if not quiz.description.strip():
        raise QuizValidationError("Please enter a description.")


def validate_for_create(quiz: Quiz) -> None:
    """Minimum required to save a draft on the server."""
    if not quiz.title.strip() or not quiz.subject.strip():
        raise QuizValidationError("Title, subject, and description are required")
    if not quiz.questions:
        raise QuizValidationError("Please add at least one question")
    if quiz.cover_image and not _is_supported_image_reference(quiz.cover_image):
        raise QuizValidationError("Invalid cover image format. Must be an image file.")


def validate_for_publish(quiz: Quiz) -> None:
    """Full check run before a draft may be published."""
    if not quiz.questions:
        raise QuizValidationError("Please add at least one question before publishing.")
    for index, question in enumerate(quiz.questions):
        validate_question(question, index)
    validate_for_create(quiz)


def validate_question(question: Question, index: int | None = None) -> None:
    if not question.question.strip():
        raise QuizValidationError("All questions must have non-empty text.", index)

    if question.type == QuestionType.MULTIPLE_CHOICE:
        _validate_multiple_choice(question, index)
    elif question.type == QuestionType.TRUE_FALSE:
        if not isinstance(question.correct_answer, bool):
            raise QuizValidationError("True/false questions must have a valid boolean answer.", index)
    else:
        answer = question.correct_answer
        if not isinstance(answer, str) or not answer.strip():
            raise QuizValidationError(
                f"{question.type.value} questions must have a non-empty correct answer.", index
            )


def is_publishable(quiz: Quiz) -> bool:
    try:
        validate_for_publish(quiz)
    except QuizValidationError:
        return False
    return True


def _validate_multiple_choice(question: Question, index: int | None) -> None:
    if not question.options:
        raise QuizValidationError("Multiple-choice questions must have at least one option.", index)
    if any(_is_empty_option(option) for option in question.options):
        raise QuizValidationError("All options must have content (either text or an image).", index)
    answer = question.correct_answer
    if (
        not isinstance(answer, int)
        or isinstance(answer, bool)
        or not 0 <= answer < len(question.options)
    ):
        raise QuizValidationError("Multiple-choice questions must have a valid correct answer.", index)


def _is_empty_option(option: object) -> bool:
    if option is None:
        return True
    if isinstance(option, ImageOption):
        return not option.description.strip() and not option.url
    return not str(option).strip()


def _is_supported_image_reference(value: str) -> bool:
    return value.startswith(("http://", "https://", "data:image/"))
