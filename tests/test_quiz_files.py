from __future__ import annotations

import pytest

from quizlive.core.models import ImageOption, Question, QuestionType, Quiz
from quizlive.core.quiz_exporter import save_quiz_to_file, serialize_quiz
from quizlive.core.quiz_importer import QuizImportError, load_quiz_from_file, parse_quiz_text

SAMPLE = """\
TITLE: Capitals
SUBJECT: Geography
DIFFICULTY: Beginner

TYPE: multiple-choice
Q: What is the capital of France?
   Pick one.
A: Berlin
B: Paris
C: Rome
CORRECT: b
EXPLANATION: Paris has been the capital since 987.

---

TYPE: true-false
Q: The Earth orbits the Sun.
CORRECT: TRUE

---

TYPE: short-answer
Q: Chemical symbol for gold?
CORRECT: Au
"""


class TestQuizImporter:
    def test_parses_header_and_each_question_type(self):
        quiz = parse_quiz_text(SAMPLE)

        assert (quiz.title, quiz.subject, quiz.difficulty) == ("Capitals", "Geography", "beginner")
        first, second, third = quiz.questions
        assert first.question == "What is the capital of France?\nPick one."
        assert first.options == ["Berlin", "Paris", "Rome"]
        assert first.correct_answer == 1
        assert first.explanation == "Paris has been the capital since 987."
        assert (second.type, second.correct_answer, second.options) == (QuestionType.TRUE_FALSE, True, [])
        assert (third.type, third.correct_answer) == (QuestionType.SHORT_ANSWER, "Au")

    def test_type_defaults_to_multiple_choice(self):
        quiz = parse_quiz_text("Q: 1+1?\nA: 1\nB: 2\nCORRECT: B", default_title="math")

        assert quiz.title == "math"
        assert quiz.questions[0].type == QuestionType.MULTIPLE_CHOICE

    def test_gaps_in_option_letters_are_rejected(self):
        with pytest.raises(QuizImportError):
            parse_quiz_text("Q: Pick\nA: one\nC: three\nCORRECT: A")

    def test_correct_letter_must_exist(self):
        with pytest.raises(QuizImportError):
            parse_quiz_text("Q: Pick\nA: one\nB: two\nCORRECT: D")

    def test_true_false_takes_no_options(self):
        with pytest.raises(QuizImportError):
            parse_quiz_text("TYPE: true-false\nQ: Really?\nA: yes\nCORRECT: TRUE")

    def test_unknown_type(self):
        with pytest.raises(QuizImportError, match="essay"):
            parse_quiz_text("TYPE: essay\nQ: Discuss.")

    def test_stray_text(self):
        with pytest.raises(QuizImportError):
            parse_quiz_text("hello\nQ: Pick\nA: a\nB: b")

    def test_file_without_questions(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("TITLE: Nothing here\n", encoding="utf-8")

        with pytest.raises(QuizImportError):
            load_quiz_from_file(path)


class TestQuizExporter:
    def test_exported_file_imports_back(self, tmp_path):
        original = parse_quiz_text(SAMPLE)
        path = tmp_path / "nested" / "capitals.txt"

        save_quiz_to_file(path, original)
        imported = load_quiz_from_file(path)

        assert imported.source_path == path
        assert imported.quiz.title == "Capitals"
        assert [q.to_dict() for q in imported.quiz.questions] == [q.to_dict() for q in original.questions]

    def test_image_options_are_written_as_urls(self):
        quiz = Quiz(
            title="Pets",
            questions=[
                Question(
                    question="Which is a cat?",
                    options=[ImageOption(url="https://img.test/cat.jpg"), "dog"],
                    correct_answer=0,
                )
            ],
        )

        text = serialize_quiz(quiz)

        assert "A: https://img.test/cat.jpg" in text
        assert "CORRECT: A" in text

    def test_empty_quiz_cannot_be_exported(self, tmp_path):
        with pytest.raises(ValueError):
            save_quiz_to_file(tmp_path / "x.txt", Quiz(title="Empty"))
