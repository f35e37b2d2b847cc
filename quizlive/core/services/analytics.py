"""Aggregations behind the analytics dashboard."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
import math

from quizlive.constants.quiz_constants import ANALYTICS_SESSIONS_PER_PAGE, DIFFICULTIES, MAX_RATING
from quizlive.core.models import Feedback, Participant, QuizSession
from quizlive.core.services.api_client import SessionHistory

ALL = "all"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class SortField(str, Enum):
    TITLE = "title"
    CREATED_AT = "createdAt"
    DIFFICULTY = "difficulty"


@dataclass(slots=True)
class SessionFilter:
    search: str = ""
    difficulty: str = ALL
    subject: str = ALL
    sort_by: SortField = SortField.CREATED_AT
    descending: bool = True


@dataclass(slots=True)
class Page:
    items: list[QuizSession] = field(default_factory=list)
    page: int = 1
    total_pages: int = 0


@dataclass(slots=True)
class Accuracy:
    correct: int = 0
    total: int = 0

    @property
    def percentage(self) -> float:
        return self.correct / self.total * 100 if self.total else 0.0


def _title(session: QuizSession) -> str:
    return session.quiz.title if session.quiz else ""


def _subject(session: QuizSession) -> str:
    return session.quiz.subject if session.quiz else ""


def _difficulty(session: QuizSession) -> str:
    return session.quiz.difficulty if session.quiz else ""


def _created(session: QuizSession) -> datetime:
    created = session.created_at
    if created is None:
        return _EPOCH
    return created if created.tzinfo else created.replace(tzinfo=timezone.utc)


def _participant(session: QuizSession, user_id: str) -> Participant | None:
    return next((p for p in session.participants if p.user_id == user_id), None)


class SessionAnalytics:
    """Derived statistics for one user's hosted and participated sessions."""

    def __init__(self, history: SessionHistory, user_id: str) -> None:
        self.hosted = history.hosted
        self.participated = history.participated
        self.feedback: list[Feedback] = history.feedback
        self.user_id = user_id

    @property
    def all_sessions(self) -> list[QuizSession]:
        return [*self.hosted, *self.participated]

    def total_quizzes(self) -> int:
        return len({s.quiz.id for s in self.all_sessions if s.quiz is not None})

    def total_sessions(self) -> int:
        return len(self.hosted) + len(self.participated)

    def average_rating(self) -> float | None:
        if not self.feedback:
            return None
        return round(sum(fb.rating for fb in self.feedback) / len(self.feedback), 1)

    def rating_distribution(self) -> list[int]:
        """Counts of 1..5 star ratings; out-of-range ratings are skipped."""
        buckets = [0] * MAX_RATING
        for fb in self.feedback:
            if 1 <= fb.rating <= MAX_RATING:
                buckets[fb.rating - 1] += 1
        return buckets

    def sessions_per_month(self) -> dict[str, list[int]]:
        def by_month(sessions: list[QuizSession]) -> list[int]:
            months = [0] * 12
            for session in sessions:
                if session.created_at is not None:
                    months[session.created_at.month - 1] += 1
            return months

        return {"hosted": by_month(self.hosted), "participated": by_month(self.participated)}

    def difficulty_distribution(self) -> dict[str, int]:
        counts = Counter(_difficulty(s) for s in self.all_sessions)
        return {level: counts.get(level, 0) for level in DIFFICULTIES}

    def subjects(self) -> list[str]:
        seen: list[str] = []
        for session in self.all_sessions:
            subject = _subject(session)
            if subject not in seen:
                seen.append(subject)
        return [ALL, *seen]

    def average_score(self, sessions: list[QuizSession] | None = None) -> float:
        sessions = self.participated if sessions is None else sessions
        if not sessions:
            return 0.0
        total = 0.0
        for session in sessions:
            participant = _participant(session, self.user_id)
            total += participant.score if participant else 0
        return round(total / len(sessions), 1)

    def score_trend(self) -> list[tuple[datetime | None, float]]:
        """(date, score) for every participated session, oldest first."""
        trend = []
        for session in sorted(self.participated, key=_created):
            participant = _participant(session, self.user_id)
            trend.append((session.created_at, participant.score if participant else 0))
        return trend

    def subject_accuracy(self) -> dict[str, Accuracy]:
        return self._accuracy_by(lambda session, question: _subject(session) or "General")

    def question_type_accuracy(self) -> dict[str, Accuracy]:
        return self._accuracy_by(lambda session, question: question.type.value)

    def _accuracy_by(self, key) -> dict[str, Accuracy]:
        stats: dict[str, Accuracy] = {}
        for session in self.participated:
            participant = _participant(session, self.user_id)
            if participant is None or session.quiz is None:
                continue
            questions = {q.id: q for q in session.quiz.questions}
            for answer in participant.answers:
                question = questions.get(str(answer.get("questionId")))
                if question is None:
                    continue
                bucket = stats.setdefault(key(session, question), Accuracy())
                bucket.total += 1
                if answer.get("isCorrect"):
                    bucket.correct += 1
        return stats

    def browse(self, hosted: bool, criteria: SessionFilter, page: int = 1) -> Page:
        sessions = filter_sessions(self.hosted if hosted else self.participated, criteria)
        return paginate(sessions, page)


def filter_sessions(sessions: list[QuizSession], criteria: SessionFilter) -> list[QuizSession]:
    needle = criteria.search.lower()
    matched = [
        s for s in sessions
        if needle in _title(s).lower()
        and (criteria.difficulty == ALL or _difficulty(s) == criteria.difficulty)
        and (criteria.subject == ALL or _subject(s) == criteria.subject)
    ]
    if criteria.sort_by == SortField.TITLE:
        key = lambda s: _title(s).lower()
    elif criteria.sort_by == SortField.DIFFICULTY:
        key = lambda s: DIFFICULTIES.index(_difficulty(s)) if _difficulty(s) in DIFFICULTIES else -1
    else:
        key = _created
    return sorted(matched, key=key, reverse=criteria.descending)


def paginate(sessions: list[QuizSession], page: int, per_page: int = ANALYTICS_SESSIONS_PER_PAGE) -> Page:
    total_pages = math.ceil(len(sessions) / per_page)
    page = max(1, page)
    start = (page - 1) * per_page
    return Page(items=sessions[start:start + per_page], page=page, total_pages=total_pages)
