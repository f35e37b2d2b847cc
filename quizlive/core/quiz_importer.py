"""Utilities for importing quiz drafts from a human-friendly text file.

File format (repeat blocks separated by blank lines or '---'):

    TITLE: Capitals          (optional header block, before the questions)
    SUBJECT: Geography
    DIFFICULTY: beginner

    TYPE: multiple-choice    (optional - defaults to multiple-choice)
    Q: Question text. Additional lines until the next marker are treated
       as part of the question.
    A: First option text
    B: Second option text    (two to six options, A-F)
    CORRECT: B               (letter, TRUE/FALSE, or the expected text)
    EXPLANATION: Optional explanation shown after the reveal.

True/false questions take no options. Short-answer and fill-in-the-blank
questions take the expected answer text after ``CORRECT:``.

The result is a draft only; :mod:`quizlive.core.quiz_validator` still has
to accept it before it can be created or published.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from quizlive.core.models import Question, QuestionType, Quiz


class QuizImportError(Exception):
    """Raised when a quiz draft cannot be parsed."""


@dataclass(slots=True)
class ImportedQuiz:
    """Container for the imported draft and where it came from."""

    source_path: Path
    quiz: Quiz


_OPTION_ORDER = ["A", "B", "C", "D", "E", "F"]
_HEADER_KEYS = ("TITLE:", "SUBJECT:", "DIFFICULTY:", "DESCRIPTION:")


def load_quiz_from_file(file_path: Path) -> ImportedQuiz:
    text = file_path.read_text(encoding="utf-8")
    quiz = parse_quiz_text(text, default_title=file_path.stem)
    if not quiz.questions:
        raise QuizImportError("Quiz file did not contain any questions.")
    return ImportedQuiz(source_path=file_path, quiz=quiz)


def parse_quiz_text(text: str, default_title: str = "") -> Quiz:
    blocks = _split_blocks(text)
    quiz = Quiz(title=default_title)
    if blocks and _is_header(blocks[0]):
        _apply_header(quiz, blocks.pop(0))
    quiz.questions = [_parse_block(block) for block in blocks]
    return quiz


def _split_blocks(text: str) -> list[str]:
    blocks: list[str] = []
    current_block: list[str] = []
    for raw_line in text.splitlines():
        stripped = raw_line.strip()
        if stripped == "---":
            if current_block:
                blocks.append("\n".join(current_block).strip())
                current_block = []
            continue
        if stripped:
            current_block.append(raw_line)
        elif current_block:
            blocks.append("\n".join(current_block).strip())
            current_block = []
    if current_block:
        blocks.append("\n".join(current_block).strip())
    return [block for block in blocks if block]


def _is_header(block: str) -> bool:
    return all(line.strip().upper().startswith(_HEADER_KEYS) for line in block.splitlines() if line.strip())


def _apply_header(quiz: Quiz, block: str) -> None:
    for raw_line in block.splitlines():
        key, _, value = raw_line.strip().partition(":")
        value = value.strip()
        key = key.upper()
        if key == "TITLE":
            quiz.title = value
        elif key == "SUBJECT":
            quiz.subject = value
        elif key == "DIFFICULTY":
            quiz.difficulty = value.lower()
        elif key == "DESCRIPTION":
            quiz.description = value


def _parse_block(block: str) -> Question:
    question_lines: list[str] = []
    options: dict[str, str] = {}
    correct_raw: str | None = None
    explanation: str | None = None
    question_type = QuestionType.MULTIPLE_CHOICE
    current_section: str | None = None

    for raw_line in block.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        upper = line.upper()
        if upper.startswith("TYPE:"):
            raw_type = line.split(":", 1)[1].strip().lower()
            try:
                question_type = QuestionType(raw_type)
            except ValueError as exc:
                raise QuizImportError(f"Unknown question TYPE '{raw_type}'.") from exc
            current_section = None
            continue

        if upper.startswith("Q:"):
            question_lines = [line[2:].strip()]
            current_section = "Q"
            continue

        if upper.startswith("CORRECT:"):
            correct_raw = line.split(":", 1)[1].strip()
            current_section = None
            continue

        if upper.startswith("EXPLANATION:"):
            explanation = line.split(":", 1)[1].strip()
            current_section = "EXPLANATION"
            continue

        if len(line) > 2 and line[0].upper() in _OPTION_ORDER and line[1] == ":":
            letter = line[0].upper()
            options[letter] = line[2:].strip()
            current_section = letter
            continue

        if current_section == "Q":
            question_lines.append(line)
        elif current_section == "EXPLANATION":
            explanation = f"{explanation}\n{line}"
        elif current_section in _OPTION_ORDER:
            options[current_section] = options[current_section] + f"\n{line}"
        else:
            raise QuizImportError(f"Encountered text outside of a known section: '{line}'.")

    question_text = "\n".join(question_lines).strip()
    if not question_text:
        raise QuizImportError("Question text missing (Q: ...)")

    if question_type == QuestionType.MULTIPLE_CHOICE:
        option_list = _ordered_options(options)
        correct = _parse_letter(correct_raw, len(option_list))
    elif question_type == QuestionType.TRUE_FALSE:
        if options:
            raise QuizImportError("True/false questions do not take options.")
        option_list = []
        correct = _parse_bool(correct_raw)
    else:
        if options:
            raise QuizImportError(f"{question_type.value} questions do not take options.")
        option_list = []
        correct = correct_raw or None

    return Question(
        question=question_text,
        type=question_type,
        options=option_list,
        correct_answer=correct,
        explanation=explanation,
    )


def _ordered_options(options: dict[str, str]) -> list[str]:
    letters = _OPTION_ORDER[: len(options)]
    if len(options) < 2 or sorted(options) != letters:
        raise QuizImportError("Options must be consecutive letters starting at A (at least A and B).")
    option_list = [options[letter].strip() for letter in letters]
    if any(not opt for opt in option_list):
        raise QuizImportError("Option text cannot be empty.")
    return option_list


def _parse_letter(raw: str | None, option_count: int) -> int | None:
    if raw is None:
        return None
    letter = raw.upper()
    allowed = _OPTION_ORDER[:option_count]
    if letter not in allowed:
        raise QuizImportError(f"CORRECT must be one of {', '.join(allowed)}.")
    return allowed.index(letter)


def _parse_bool(raw: str | None) -> bool | None:
    if raw is None:
        return None
    value = raw.upper()
    if value not in ("TRUE", "FALSE"):
        raise QuizImportError("CORRECT must be TRUE or FALSE for true/false questions.")
    return value == "TRUE"
