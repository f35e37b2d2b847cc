"""Wire payloads for the realtime session protocol.

Outgoing commands are serialised with camelCase keys; incoming events are
validated into typed models before the view-state objects apply them.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        extra="ignore",
    )

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


# --- Event names ---

JOIN_SESSION = "joinSession"
LEAVE_QUIZ = "leave-quiz"
SUBMIT_ANSWER = "submitAnswer"

START_QUIZ = "startQuiz"
START_QUIZ_COUNTDOWN = "startQuizCountdown"
STOP_QUIZ_COUNTDOWN = "stopQuizCountdown"
PAUSE_QUIZ = "pauseQuiz"
RESUME_QUIZ = "resumeQuiz"
NEXT_QUESTION = "nextQuestion"
RESTART_QUESTION = "restartQuestion"
SKIP_QUESTION = "skipQuestion"
END_QUIZ = "endQuiz"
REMOVE_PARTICIPANT = "removeParticipant"

PARTICIPANT_JOINED = "participantJoined"
PARTICIPANT_LEFT = "participantLeft"
COUNTDOWN_STARTED = "countdownStarted"
COUNTDOWN_STOPPED = "countdownStopped"
COUNTDOWN_UPDATED = "countdownUpdated"
QUIZ_STARTED = "quizStarted"
QUIZ_PAUSED = "quizPaused"
QUIZ_RESUMED = "quizResumed"
LEADERBOARD_UPDATE = "leaderboardUpdate"
ALL_ANSWERS_SUBMITTED = "allAnswersSubmitted"
ANSWER_FEEDBACK = "answerFeedback"
ALL_QUESTIONS_COMPLETED = "allQuestionsCompleted"
SESSION_ENDED = "sessionEnded"
REMOVED = "removed"
ERROR = "error"


# --- Client -> server ---

class HostCommand(WireModel):
    session_id: str
    admin_id: str


class StartQuizCountdownCommand(HostCommand):
    countdown: int


class NextQuestionCommand(HostCommand):
    question_index: int


class RestartQuestionCommand(HostCommand):
    question_id: str | None = None


class RemoveParticipantCommand(HostCommand):
    user_id: str


class SubmitAnswerCommand(WireModel):
    session_id: str
    user_id: str
    question_id: str | None
    selected_option: Any = None


# --- Server -> client ---

class SessionEvent(WireModel):
    session_id: str | None = None

    @model_validator(mode="before")
    @classmethod
    def nulls_take_defaults(cls, data: Any) -> Any:
        """Gateways send ``null`` for fields they have no value for, e.g. ``points`` on a timeout."""
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    def concerns(self, session_id: str) -> bool:
        """Events without a session id are assumed to target the joined room."""
        return self.session_id is None or str(self.session_id) == session_id


class ParticipantJoinedEvent(SessionEvent):
    participant: dict[str, Any]


class ParticipantLeftEvent(SessionEvent):
    user_id: str


class CountdownEvent(SessionEvent):
    countdown: int | None = None


class QuestionEvent(SessionEvent):
    """Shared shape of ``quizStarted``, ``nextQuestion`` and ``quizResumed``."""

    question: dict[str, Any] | None = None
    index: int | None = None
    countdown: int | None = None

    def resolved_index(self) -> int | None:
        if self.index is not None:
            return self.index
        if self.question and isinstance(self.question.get("index"), int):
            return self.question["index"]
        return None


class LeaderboardUpdateEvent(SessionEvent):
    leaderboard: dict[str, Any] | list[Any] = {}
    question_index: int = 0
    total_questions: int = 0
    timestamp: str | int | None = None


class AllAnswersSubmittedEvent(SessionEvent):
    answers: list[dict[str, Any]] = []


class AnswerFeedbackEvent(SessionEvent):
    is_correct: bool | None = None
    correct_answer: Any = None
    explanation: str | None = None
    points: float = 0
    time_taken: float | None = None
    selected_option: Any = None


class CompletionEvent(SessionEvent):
    reason: str = ""


class RemovedEvent(SessionEvent):
    message: str = "You have been removed from the session"


class ErrorEvent(SessionEvent):
    message: str = "Unknown error"
    kind: str | None = None


EVENT_MODELS: dict[str, type[SessionEvent]] = {
    PARTICIPANT_JOINED: ParticipantJoinedEvent,
    PARTICIPANT_LEFT: ParticipantLeftEvent,
    COUNTDOWN_STARTED: CountdownEvent,
    COUNTDOWN_STOPPED: SessionEvent,
    COUNTDOWN_UPDATED: CountdownEvent,
    QUIZ_STARTED: QuestionEvent,
    QUIZ_PAUSED: SessionEvent,
    QUIZ_RESUMED: QuestionEvent,
    NEXT_QUESTION: QuestionEvent,
    LEADERBOARD_UPDATE: LeaderboardUpdateEvent,
    ALL_ANSWERS_SUBMITTED: AllAnswersSubmittedEvent,
    ANSWER_FEEDBACK: AnswerFeedbackEvent,
    ALL_QUESTIONS_COMPLETED: CompletionEvent,
    SESSION_ENDED: CompletionEvent,
    REMOVED: RemovedEvent,
    ERROR: ErrorEvent,
}

BROADCAST_EVENTS: tuple[str, ...] = tuple(EVENT_MODELS)


def parse_event(name: str, payload: Any) -> SessionEvent:
    """Validate a raw Socket.IO payload into the model registered for ``name``."""
    model = EVENT_MODELS.get(name)
    if model is None:
        raise KeyError(f"Unknown session event '{name}'")
    if payload is None:
        payload = {}
    elif not isinstance(payload, dict):
        # Some gateways send a bare message string for error/removed.
        payload = {"message": str(payload)}
    return model.model_validate(payload)
