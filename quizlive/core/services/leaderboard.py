"""Leaderboard snapshots and per-question answer statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from quizlive.core.models import LeaderboardEntry, Question, QuestionType


@dataclass(slots=True)
class LeaderboardSnapshot:
    """Latest standings pushed by ``leaderboardUpdate``."""

    players: list[LeaderboardEntry] = field(default_factory=list)
    question_index: int = 0
    total_questions: int = 0
    timestamp: str | int | None = None

    @classmethod
    def from_payload(
        cls,
        leaderboard: dict[str, Any] | list[Any],
        question_index: int = 0,
        total_questions: int = 0,
        timestamp: str | int | None = None,
    ) -> "LeaderboardSnapshot":
        # The gateway sends either a list or an object keyed by user id.
        rows = leaderboard.values() if isinstance(leaderboard, dict) else leaderboard
        return cls(
            players=[LeaderboardEntry.from_dict(row) for row in rows if isinstance(row, dict)],
            question_index=question_index,
            total_questions=total_questions,
            timestamp=timestamp,
        )

    def ranked(self, limit: int | None = None) -> list[LeaderboardEntry]:
        ordered = rank_entries(self.players)
        return ordered if limit is None else ordered[:limit]


@dataclass(slots=True)
class OptionStat:
    count: int
    percentage: int


@dataclass(slots=True)
class QuestionSummary:
    question: str
    accuracy: float


def rank_entries(entries: Iterable[LeaderboardEntry]) -> list[LeaderboardEntry]:
    """Sort by score, then accuracy (both descending), then fastest average time."""
    return sorted(entries, key=lambda e: (-e.score, -e.accuracy, e.average_time))


def _selected(answer: dict[str, Any]) -> Any:
    if "selectedAnswer" in answer:
        return answer["selectedAnswer"]
    return answer.get("selectedOption")


def _stat(count: int, total: int) -> OptionStat:
    percentage = round(count / total * 100) if total > 0 else 0
    return OptionStat(count=count, percentage=percentage)


def answer_distribution(question: Question | None, answers: list[dict[str, Any]]) -> list[OptionStat]:
    """Count submitted answers per option of ``question``.

    True/false questions get two buckets (True, False). Percentages are
    rounded against the number of participants who answered.
    """
    if question is None:
        return []
    answers = [a for a in answers if isinstance(a, dict)]
    total = len(answers)
    picks = [_selected(a) for a in answers]

    if question.type == QuestionType.TRUE_FALSE:
        return [
            _stat(sum(1 for p in picks if p is True), total),
            _stat(sum(1 for p in picks if p is False), total),
        ]
    stats = []
    for idx in range(len(question.options)):
        # bool is an int subclass; True must not count as option 1.
        count = sum(1 for p in picks if p == idx and not isinstance(p, bool))
        stats.append(_stat(count, total))
    return stats


def average_score(entries: list[LeaderboardEntry]) -> float:
    if not entries:
        return 0.0
    return sum(e.score for e in entries) / len(entries)


def average_accuracy(entries: list[LeaderboardEntry]) -> float:
    if not entries:
        return 0.0
    return sum(e.accuracy for e in entries) / len(entries)


def question_summaries(questions: list[Question], entries: list[LeaderboardEntry]) -> list[QuestionSummary]:
    """Share of players who answered each question correctly, in quiz order."""
    summaries = []
    for index, question in enumerate(questions):
        correct = sum(
            1 for e in entries
            if index < len(e.question_stats) and e.question_stats[index].get("isCorrect")
        )
        accuracy = correct / len(entries) * 100 if entries else 0.0
        summaries.append(QuestionSummary(question=question.question, accuracy=accuracy))
    return summaries


def toughest_questions(
    questions: list[Question], entries: list[LeaderboardEntry], limit: int = 3
) -> list[QuestionSummary]:
    return sorted(question_summaries(questions, entries), key=lambda s: s.accuracy)[:limit]


def accuracy_bands(entries: list[LeaderboardEntry]) -> dict[str, int]:
    """Player counts per accuracy band shown on the results page."""
    bands = {"90-100%": 0, "70-89%": 0, "50-69%": 0, "<50%": 0}
    for entry in entries:
        if entry.accuracy >= 90:
            bands["90-100%"] += 1
        elif entry.accuracy >= 70:
            bands["70-89%"] += 1
        elif entry.accuracy >= 50:
            bands["50-69%"] += 1
        else:
            bands["<50%"] += 1
    return bands
