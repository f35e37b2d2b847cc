"""Utilities for exporting quiz drafts to the plain-text format used for imports."""

from __future__ import annotations

from pathlib import Path

from quizlive.core.models import ImageOption, Question, QuestionType, Quiz

_OPTION_LETTERS = ("A", "B", "C", "D", "E", "F")


def save_quiz_to_file(file_path: Path, quiz: Quiz) -> None:
    """Persist the quiz draft to disk in the text import format."""

    if not quiz.questions:
        raise ValueError("Cannot export an empty quiz.")

    file_path = file_path.resolve()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(serialize_quiz(quiz), encoding="utf-8")


def serialize_quiz(quiz: Quiz) -> str:
    blocks = [_serialize_header(quiz)] if quiz.title or quiz.subject else []
    blocks.extend(_serialize_question(question) for question in quiz.questions)
    return "\n\n---\n\n".join(blocks) + "\n"


def _serialize_header(quiz: Quiz) -> str:
    lines = [f"TITLE: {quiz.title}"]
    if quiz.subject:
        lines.append(f"SUBJECT: {quiz.subject}")
    if quiz.difficulty:
        lines.append(f"DIFFICULTY: {quiz.difficulty}")
    if quiz.description:
        lines.append(f"DESCRIPTION: {' '.join(quiz.description.split())}")
    return "\n".join(lines)


def _serialize_question(question: Question) -> str:
    lines: list[str] = [f"TYPE: {question.type.value}"]

    question_lines = question.question.splitlines() or [question.question]
    lines.append(f"Q: {question_lines[0] if question_lines else ''}")
    lines.extend(question_lines[1:])

    if question.type == QuestionType.MULTIPLE_CHOICE:
        if len(question.options) > len(_OPTION_LETTERS):
            raise ValueError(f"Cannot export more than {len(_OPTION_LETTERS)} options per question.")
        for letter, option in zip(_OPTION_LETTERS, question.options):
            # Image options round-trip as their URL only.
            option_text = option.url if isinstance(option, ImageOption) else option
            option_lines = option_text.splitlines() or [option_text]
            lines.append(f"{letter}: {option_lines[0] if option_lines else ''}")
            lines.extend(option_lines[1:])
        answer = question.correct_answer
        if isinstance(answer, int) and not isinstance(answer, bool) and 0 <= answer < len(question.options):
            lines.append(f"CORRECT: {_OPTION_LETTERS[answer]}")
    elif question.type == QuestionType.TRUE_FALSE:
        if isinstance(question.correct_answer, bool):
            lines.append(f"CORRECT: {'TRUE' if question.correct_answer else 'FALSE'}")
    elif question.correct_answer:
        lines.append(f"CORRECT: {question.correct_answer}")

    if question.explanation:
        explanation_lines = question.explanation.splitlines()
        lines.append(f"EXPLANATION: {explanation_lines[0]}")
        lines.extend(explanation_lines[1:])

    return "\n".join(lines)
