"""Domain models for the quiz client.

The server owns every one of these records. The client parses them from the
REST/Socket.IO JSON (camelCase keys, Mongo-style ``_id``) and keeps advisory
local copies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Union


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "multiple-choice"
    TRUE_FALSE = "true-false"
    SHORT_ANSWER = "short-answer"
    FILL_IN_THE_BLANK = "fill-in-the-blank"


class SessionStatus(str, Enum):
    LOBBY = "lobby"
    ACTIVE = "active"
    IN_PROGRESS = "in-progress"
    PAUSED = "paused"
    ENDED = "ended"

    @property
    def is_running(self) -> bool:
        return self in (SessionStatus.ACTIVE, SessionStatus.IN_PROGRESS, SessionStatus.PAUSED)


def _parse_datetime(value: Any) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def _record_id(data: dict[str, Any]) -> str | None:
    raw = data.get("_id", data.get("id"))
    return str(raw) if raw is not None else None


def _ref_id(value: Any) -> str:
    """Id of a reference that may or may not have been populated by the server."""
    if isinstance(value, dict):
        return _record_id(value) or ""
    return "" if value is None else str(value)


@dataclass(slots=True)
class ContentItem:
    """Ordered media/text block attached to a question prompt."""

    type: str
    value: str | None = None
    url: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContentItem":
        return cls(type=data.get("type", "text"), value=data.get("value"), url=data.get("url"))

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": self.type}
        if self.value is not None:
            payload["value"] = self.value
        if self.url is not None:
            payload["url"] = self.url
        return payload


@dataclass(slots=True)
class ImageOption:
    """Picture answer option, usually picked from Unsplash or Giphy."""

    url: str = ""
    description: str = ""
    type: str = "image"

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "url": self.url, "description": self.description}


Option = Union[str, ImageOption]
CorrectAnswer = Union[int, bool, str, None]


def _parse_option(raw: Any) -> Option:
    if isinstance(raw, dict):
        return ImageOption(
            url=raw.get("url") or "",
            description=raw.get("description") or "",
            type=raw.get("type", "image"),
        )
    return "" if raw is None else str(raw)


@dataclass(slots=True)
class Question:
    """A quiz question discriminated by ``type``."""

    question: str
    type: QuestionType = QuestionType.MULTIPLE_CHOICE
    options: list[Option] = field(default_factory=list)
    correct_answer: CorrectAnswer = None
    content: list[ContentItem] = field(default_factory=list)
    explanation: str | None = None
    id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Question":
        return cls(
            id=_record_id(data),
            question=data.get("question", ""),
            type=QuestionType(data.get("type", QuestionType.MULTIPLE_CHOICE.value)),
            options=[_parse_option(option) for option in data.get("options") or []],
            correct_answer=data.get("correctAnswer"),
            content=[ContentItem.from_dict(item) for item in data.get("content") or []],
            explanation=data.get("explanation"),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "type": self.type.value,
            "question": self.question,
            "options": [opt.to_dict() if isinstance(opt, ImageOption) else opt for opt in self.options],
            "correctAnswer": self.correct_answer,
            "content": [item.to_dict() for item in self.content],
        }
        if self.explanation is not None:
            payload["explanation"] = self.explanation
        if self.id is not None:
            payload["_id"] = self.id
        return payload

    def display_options(self) -> list[str]:
        """Return option labels in display order; true/false questions get fixed labels."""
        if self.type == QuestionType.TRUE_FALSE:
            return ["True", "False"]
        labels: list[str] = []
        for option in self.options:
            if isinstance(option, ImageOption):
                labels.append(option.description or option.url)
            else:
                labels.append(option)
        return labels

    def describe_correct_answer(self) -> str:
        """Human readable correct answer, e.g. ``"B. Paris"``."""
        if self.type == QuestionType.MULTIPLE_CHOICE:
            index = self.correct_answer
            if isinstance(index, int) and not isinstance(index, bool) and 0 <= index < len(self.options):
                return f"{chr(ord('A') + index)}. {self.display_options()[index]}"
            return "N/A"
        if self.type == QuestionType.TRUE_FALSE:
            return "True" if self.correct_answer else "False"
        return str(self.correct_answer) if self.correct_answer else "N/A"


@dataclass(slots=True)
class QuizSettings:
    """Timer/attempt/randomization/feedback flags stored with a quiz."""

    enable_timer: bool = False
    time_limit: int = 30
    show_timer: bool = False
    max_attempts: str = "1"
    randomize_questions: bool = True
    randomize_answers: bool = True
    show_correct_answers: bool = True
    show_explanations: bool = True
    allow_review: bool = True

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuizSettings":
        defaults = cls()
        return cls(
            enable_timer=bool(data.get("enableTimer", defaults.enable_timer)),
            time_limit=int(data.get("timeLimit", defaults.time_limit)),
            show_timer=bool(data.get("showTimer", defaults.show_timer)),
            max_attempts=str(data.get("maxAttempts", defaults.max_attempts)),
            randomize_questions=bool(data.get("randomizeQuestions", defaults.randomize_questions)),
            randomize_answers=bool(data.get("randomizeAnswers", defaults.randomize_answers)),
            show_correct_answers=bool(data.get("showCorrectAnswers", defaults.show_correct_answers)),
            show_explanations=bool(data.get("showExplanations", defaults.show_explanations)),
            allow_review=bool(data.get("allowReview", defaults.allow_review)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "enableTimer": self.enable_timer,
            "timeLimit": self.time_limit,
            "showTimer": self.show_timer,
            "maxAttempts": self.max_attempts,
            "randomizeQuestions": self.randomize_questions,
            "randomizeAnswers": self.randomize_answers,
            "showCorrectAnswers": self.show_correct_answers,
            "showExplanations": self.show_explanations,
            "allowReview": self.allow_review,
        }


@dataclass(slots=True)
class Quiz:
    """Quiz document as authored by a host."""

    title: str
    description: str = ""
    subject: str = ""
    difficulty: str = "intermediate"
    questions: list[Question] = field(default_factory=list)
    settings: QuizSettings = field(default_factory=QuizSettings)
    cover_image: str | None = None
    is_public: bool = False
    id: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Quiz":
        return cls(
            id=_record_id(data),
            title=data.get("title", ""),
            description=data.get("description", ""),
            subject=data.get("subject", ""),
            difficulty=data.get("difficulty", "intermediate"),
            questions=[Question.from_dict(q) for q in data.get("questions") or []],
            settings=QuizSettings.from_dict(data),
            cover_image=data.get("coverImage"),
            is_public=bool(data.get("isPublic", False)),
        )

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "subject": self.subject,
            "difficulty": self.difficulty,
            "questions": [q.to_dict() for q in self.questions],
            "coverImage": self.cover_image or "",
        }
        payload.update(self.settings.to_dict())
        return payload


@dataclass(slots=True)
class Participant:
    """Participant record inside a quiz session roster."""

    user_id: str
    name: str
    avatar: str | None = None
    score: float = 0
    disconnected: bool = False
    answers_submitted: int = 0
    question_stats: list[dict[str, Any]] = field(default_factory=list)
    answers: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Participant":
        return cls(
            user_id=_ref_id(data.get("userId")),
            name=data.get("name", ""),
            avatar=data.get("avatar"),
            score=data.get("score") or 0,
            disconnected=bool(data.get("disconnected", False)),
            answers_submitted=int(data.get("answersSubmitted") or 0),
            question_stats=list(data.get("questionStats") or []),
            answers=list(data.get("answers") or []),
        )


@dataclass(slots=True)
class QuizSession:
    """Live session snapshot fetched from ``/api/quiz-session/:id``."""

    id: str
    code: str
    status: SessionStatus
    quiz: Quiz | None = None
    host_id: str | None = None
    current_question_index: int = 0
    participants: list[Participant] = field(default_factory=list)
    created_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuizSession":
        quiz_data = data.get("quizId")
        host = data.get("hostId")
        return cls(
            id=_record_id(data) or "",
            code=data.get("code", ""),
            status=SessionStatus(data.get("status", SessionStatus.LOBBY.value)),
            quiz=Quiz.from_dict(quiz_data) if isinstance(quiz_data, dict) else None,
            host_id=_record_id(host) if isinstance(host, dict) else (str(host) if host else None),
            current_question_index=int((data.get("currentQuestion") or {}).get("index", 0)),
            participants=[Participant.from_dict(p) for p in data.get("participants") or []],
            created_at=_parse_datetime(data.get("createdAt")),
        )

    def connected_participants(self, exclude_user_id: str | None = None) -> list[Participant]:
        return [
            p for p in self.participants
            if not p.disconnected and (exclude_user_id is None or p.user_id != exclude_user_id)
        ]

    def current_question(self) -> Question | None:
        if self.quiz is None:
            return None
        if 0 <= self.current_question_index < len(self.quiz.questions):
            return self.quiz.questions[self.current_question_index]
        return None


@dataclass(slots=True)
class LeaderboardEntry:
    """Read-only projection of a participant's standing."""

    user_id: str
    name: str = ""
    score: float = 0
    accuracy: float = 0
    answers_count: int = 0
    correct_answers: int = 0
    average_time: float = 0
    avatar: str | None = None
    question_stats: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LeaderboardEntry":
        return cls(
            user_id=_ref_id(data.get("userId")),
            name=data.get("name", ""),
            score=data.get("score") or 0,
            accuracy=data.get("accuracy") or 0,
            answers_count=int(data.get("answersCount") or 0),
            correct_answers=int(data.get("correctAnswers") or 0),
            average_time=data.get("averageTime") or 0,
            avatar=data.get("avatar"),
            question_stats=list(data.get("questionStats") or []),
        )


@dataclass(slots=True)
class AnswerFeedback:
    """Private verdict the server sends to the submitting participant."""

    is_correct: bool | None = None
    correct_answer: CorrectAnswer = None
    explanation: str | None = None
    points: float = 0
    time_taken: float | None = None
    selected_option: Any = None
    timed_out: bool = False


@dataclass(slots=True)
class Feedback:
    """Participant rating of a finished session."""

    quiz_session_id: str
    user_id: str
    rating: int
    comment: str = ""
    created_at: datetime | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Feedback":
        session = data.get("quizSessionId")
        return cls(
            quiz_session_id=_record_id(session) if isinstance(session, dict) else str(session or ""),
            user_id=_ref_id(data.get("userId")),
            rating=int(data.get("rating") or 0),
            comment=data.get("comment") or "",
            created_at=_parse_datetime(data.get("createdAt")),
        )
