"""Participant side of a live session: joining, answering and rating."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from threading import RLock
from typing import Any, Callable

from quizlive.constants import ui_constants as text
from quizlive.core import events
from quizlive.core.countdown import Countdown
from quizlive.core.errors import ApiError, QuizValidationError, SessionError
from quizlive.core.models import AnswerFeedback, Participant, Question, QuizSession, SessionStatus
from quizlive.core.notifications import Destination, Navigator, Notifier, ignore_navigation
from quizlive.core.services.api_client import QuizApiClient
from quizlive.core.services.session_client import SessionClient

logger = logging.getLogger(__name__)

ChangeListener = Callable[[], None]


@dataclass(slots=True)
class JoinResult:
    session: QuizSession
    destination: Destination | None
    already_joined: bool = False


class JoinFlow:
    """Code verification followed by an explicit join confirmation."""

    def __init__(self, api: QuizApiClient, notifier: Notifier, user_id: str) -> None:
        self._api = api
        self._notifier = notifier
        self._user_id = user_id
        self.pending: QuizSession | None = None

    def verify(self, code: str, name: str, socket_id: str | None = None) -> JoinResult | None:
        """Check ``code``; a participant who already joined is routed straight in.

        Returns None when verification failed. A result with no destination
        means the details should be shown and :meth:`confirm` called next.
        """
        if not code.strip() or not name.strip():
            self._notifier.error(text.JOIN_DETAILS_REQUIRED)
            return None
        try:
            verification = self._api.verify_code(code, self._user_id, name, socket_id)
        except ApiError as exc:
            self._notifier.error(exc.message)
            return None
        session = verification.session
        if verification.already_joined:
            destination = _destination_for(session.status)
            if destination is not None:
                self._announce(session)
                return JoinResult(session, destination, already_joined=True)
        self.pending = session
        return JoinResult(session, None)

    def confirm(self, name: str, socket_id: str | None = None) -> JoinResult | None:
        if self.pending is None or not self.pending.id:
            self._notifier.error("Session details not available")
            return None
        try:
            session = self._api.join_session(self.pending.id, self._user_id, name, socket_id)
        except ApiError as exc:
            self._notifier.error(exc.message)
            return None
        destination = _destination_for(session.status)
        if destination is None:
            self._notifier.error(text.SESSION_NOT_AVAILABLE)
            return None
        self.pending = None
        self._announce(session)
        return JoinResult(session, destination)

    def _announce(self, session: QuizSession) -> None:
        title = session.quiz.title if session.quiz else session.code
        self._notifier.success(text.JOINING_QUIZ_TEMPLATE.format(title=title))


def _destination_for(status: SessionStatus) -> Destination | None:
    if status == SessionStatus.LOBBY:
        return Destination.WAITING_ROOM
    if status.is_running:
        return Destination.LIVE_QUIZ
    return None


class ParticipantSession:
    """Mirrors the participant's view of a live session."""

    def __init__(
        self,
        client: SessionClient,
        notifier: Notifier,
        navigate: Navigator = ignore_navigation,
    ) -> None:
        self._client = client
        self._notifier = notifier
        self._navigate = navigate
        self._lock = RLock()
        self._listeners: list[ChangeListener] = []

        self.session: QuizSession | None = None
        self.participants: list[Participant] = []
        self.current_question: Question | None = None
        self.question_index = 0
        self.countdown = Countdown()
        self.auto_start = Countdown()
        self.is_quiz_started = False
        self.is_paused = False
        self.selected_answer: Any = None
        self.submitted = False
        self.feedback: AnswerFeedback | None = None
        self.show_correct_answer = False
        self.awaiting_rating = False
        self.last_error: SessionError | None = None

    @property
    def session_id(self) -> str:
        return self._client.session_id

    @property
    def user_id(self) -> str:
        return self._client.user_id

    def attach(self) -> None:
        self._client.on_all(self.apply)

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def load(self, api: QuizApiClient) -> bool:
        try:
            fetched = api.get_session(self.session_id, self.user_id)
        except ApiError as exc:
            self._notifier.error(exc.message)
            return False
        if fetched.ended or fetched.session is None:
            self._notifier.info(text.SESSION_HAS_ENDED_MESSAGE)
            self._navigate(Destination.JOIN)
            return False
        with self._lock:
            self.session = fetched.session
            self.participants = fetched.session.connected_participants(exclude_user_id=fetched.session.host_id)
            self.is_paused = fetched.session.status == SessionStatus.PAUSED
            self.is_quiz_started = fetched.session.status.is_running
            if self.is_quiz_started:
                self.question_index = fetched.session.current_question_index
                self.current_question = fetched.session.current_question()
        self._changed()
        return True

    # --- Answering ---

    @property
    def is_locked(self) -> bool:
        """An answer was already sent for the current question."""
        with self._lock:
            return self.submitted

    def select(self, option: Any) -> bool:
        with self._lock:
            if self.submitted or self.current_question is None:
                return False
            self.selected_answer = option
        self._changed()
        return True

    def submit_answer(self, option: Any = None) -> bool:
        """Send the answer for the current question once; later calls are ignored."""
        with self._lock:
            if self.submitted or self.current_question is None:
                return False
            if option is not None:
                self.selected_answer = option
            self.submitted = True
            self.countdown.clear()
            question_id = self.current_question.id
            selected = self.selected_answer
        self._client.submit_answer(question_id, selected)
        self._changed()
        return True

    def tick(self) -> None:
        timed_out = False
        with self._lock:
            self.auto_start.tick()
            if self.countdown.tick() and not self.submitted and self.current_question is not None:
                timed_out = True
                self.submitted = True
                question_id = self.current_question.id
                selected = self.selected_answer
                if selected is None:
                    self.feedback = AnswerFeedback(timed_out=True)
        if timed_out:
            if selected is None:
                self._notifier.info(text.TIME_EXPIRED_MESSAGE)
            self._client.submit_answer(question_id, selected)
        self._changed()

    def leave(self) -> None:
        self._client.leave()
        self._notifier.success(text.LEFT_SESSION_MESSAGE)
        self._navigate(Destination.JOIN)

    # --- Rating ---

    def submit_feedback(self, api: QuizApiClient, rating: int, comment: str = "") -> bool:
        try:
            api.submit_feedback(self.session_id, self.user_id, rating, comment)
        except QuizValidationError:
            self._notifier.error(text.FEEDBACK_RATING_REQUIRED)
            return False
        except ApiError as exc:
            logger.warning("Feedback for %s not saved: %s", self.session_id, exc.message)
            self._notifier.error("Failed to submit feedback")
            return False
        with self._lock:
            self.awaiting_rating = False
        self._notifier.success(text.FEEDBACK_THANKS)
        self._navigate(Destination.USER_RESULTS)
        return True

    # --- Broadcast handling ---

    def apply(self, name: str, event: events.SessionEvent) -> None:
        handler = self._HANDLERS.get(name)
        if handler is None:
            return
        with self._lock:
            handler(self, event)
        self._changed()

    def _on_participant_joined(self, event: events.ParticipantJoinedEvent) -> None:
        participant = Participant.from_dict(event.participant)
        if any(p.user_id == participant.user_id for p in self.participants):
            return
        self.participants.append(participant)
        self._notifier.success(text.PARTICIPANT_JOINED_TEMPLATE.format(name=participant.name))

    def _on_participant_left(self, event: events.ParticipantLeftEvent) -> None:
        leaving = next((p for p in self.participants if p.user_id == event.user_id), None)
        if leaving is not None:
            self._notifier.success(text.PARTICIPANT_LEFT_TEMPLATE.format(name=leaving.name))
        self.participants = [p for p in self.participants if p.user_id != event.user_id]

    def _on_countdown_started(self, event: events.CountdownEvent) -> None:
        self.auto_start.seed(event.countdown)

    def _on_countdown_stopped(self, event: events.SessionEvent) -> None:
        self.auto_start.clear()
        self._notifier.success(text.PARTICIPANT_COUNTDOWN_STOPPED_MESSAGE)

    def _on_countdown_updated(self, event: events.CountdownEvent) -> None:
        if not self.submitted and event.countdown is not None:
            self.countdown.seed(event.countdown)

    def _on_quiz_started(self, event: events.QuestionEvent) -> None:
        self.is_quiz_started = True
        self.auto_start.clear()
        self._show_question(event)
        self._notifier.success(text.QUIZ_STARTED_TEMPLATE.format(number=self.question_index + 1))

    def _on_next_question(self, event: events.QuestionEvent) -> None:
        self._show_question(event)
        self._notifier.success(text.QUESTION_STARTED_TEMPLATE.format(number=self.question_index + 1))

    def _on_answer_feedback(self, event: events.AnswerFeedbackEvent) -> None:
        self.feedback = AnswerFeedback(
            is_correct=event.is_correct,
            correct_answer=event.correct_answer,
            explanation=event.explanation,
            points=event.points,
            time_taken=event.time_taken,
            selected_option=event.selected_option,
        )
        self.show_correct_answer = True

    def _on_quiz_paused(self, event: events.SessionEvent) -> None:
        self.is_paused = True
        self.countdown.clear()
        self.show_correct_answer = False
        if not self.submitted:
            self.selected_answer = None
        self._notifier.success(text.QUIZ_PAUSED_BY_HOST_MESSAGE)

    def _on_quiz_resumed(self, event: events.QuestionEvent) -> None:
        self.is_paused = False
        if self._is_current_question(event):
            # An answer already sent for this question stays locked.
            self.countdown.seed(event.countdown)
        else:
            self._show_question(event)
        self._notifier.success(text.QUIZ_RESUMED_TEMPLATE.format(number=self.question_index + 1))

    def _on_session_ended(self, event: events.CompletionEvent) -> None:
        self.countdown.clear()
        self._notifier.success(text.SESSION_ENDED_TEMPLATE.format(reason=event.reason))
        self._navigate(Destination.JOIN)

    def _on_removed(self, event: events.RemovedEvent) -> None:
        self.countdown.clear()
        self._notifier.error(event.message)
        self._navigate(Destination.JOIN)

    def _on_all_questions_completed(self, event: events.CompletionEvent) -> None:
        self.countdown.clear()
        self.awaiting_rating = True
        self._notifier.success(event.reason)
        self._client.close()
        self._navigate(Destination.FEEDBACK)

    def _on_error(self, event: events.ErrorEvent) -> None:
        error = SessionError.classify(event.message, event.kind)
        self.last_error = error
        self._notifier.error(error.message)
        if error.kind.leaves_view:
            self._navigate(Destination.JOIN)
        if error.hint:
            self._notifier.error(error.hint)

    _HANDLERS: dict[str, Callable[["ParticipantSession", Any], None]] = {
        events.PARTICIPANT_JOINED: _on_participant_joined,
        events.PARTICIPANT_LEFT: _on_participant_left,
        events.COUNTDOWN_STARTED: _on_countdown_started,
        events.COUNTDOWN_STOPPED: _on_countdown_stopped,
        events.COUNTDOWN_UPDATED: _on_countdown_updated,
        events.QUIZ_STARTED: _on_quiz_started,
        events.NEXT_QUESTION: _on_next_question,
        events.ANSWER_FEEDBACK: _on_answer_feedback,
        events.QUIZ_PAUSED: _on_quiz_paused,
        events.QUIZ_RESUMED: _on_quiz_resumed,
        events.SESSION_ENDED: _on_session_ended,
        events.REMOVED: _on_removed,
        events.ALL_QUESTIONS_COMPLETED: _on_all_questions_completed,
        events.ERROR: _on_error,
    }

    # --- Helpers ---

    def _is_current_question(self, event: events.QuestionEvent) -> bool:
        if self.current_question is None:
            return False
        index = event.resolved_index()
        if index is not None and index != self.question_index:
            return False
        if event.question is not None:
            pushed_id = event.question.get("_id", event.question.get("id"))
            if pushed_id is not None and self.current_question.id and str(pushed_id) != self.current_question.id:
                return False
        return True

    def _show_question(self, event: events.QuestionEvent) -> None:
        """Reset per-question state and display the pushed question."""
        index = event.resolved_index()
        if index is not None:
            self.question_index = index
        if event.question is not None:
            try:
                self.current_question = Question.from_dict(event.question)
            except ValueError as exc:
                logger.warning("Pushed question could not be parsed: %s", exc)
        self.countdown.seed(event.countdown)
        self.selected_answer = None
        self.submitted = False
        self.feedback = None
        self.show_correct_answer = False

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener()
