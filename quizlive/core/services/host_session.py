"""View-state for the host console of a live session.

The server decides scoring, timing and lifecycle; this object only mirrors
what it pushes and turns host actions into commands. All mutations go
through an ``RLock`` because socket events arrive on a background thread
while ticks and button presses come from the GUI thread.
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Callable

from quizlive.constants import ui_constants as text
from quizlive.constants.quiz_constants import REVEAL_DELAY_SECONDS
from quizlive.core import events
from quizlive.core.countdown import Countdown
from quizlive.core.errors import ApiError, SessionError
from quizlive.core.models import Participant, Question, QuizSession, SessionStatus
from quizlive.core.notifications import Destination, Navigator, Notifier, ignore_navigation
from quizlive.core.services.api_client import QuizApiClient
from quizlive.core.services.leaderboard import LeaderboardSnapshot, OptionStat, answer_distribution
from quizlive.core.services.session_client import SessionClient

logger = logging.getLogger(__name__)

ChangeListener = Callable[[], None]


class HostSession:
    """Mirrors one hosted session and issues the host's commands."""

    def __init__(
        self,
        client: SessionClient,
        notifier: Notifier,
        navigate: Navigator = ignore_navigation,
        reveal_delay: int = REVEAL_DELAY_SECONDS,
    ) -> None:
        self._client = client
        self._notifier = notifier
        self._navigate = navigate
        self._reveal_delay = reveal_delay
        self._lock = RLock()
        self._listeners: list[ChangeListener] = []

        self.session: QuizSession | None = None
        self.users: list[dict[str, Any]] = []
        self.participants: list[Participant] = []
        self.questions: list[Question] = []
        self.current_question_index = 0
        self.countdown = Countdown()
        self.auto_start = Countdown()
        self.auto_start_enabled = False
        self.is_paused = False
        self.is_host_control = False
        self.show_correct_answer = False
        self.question_stats: list[OptionStat] = []
        self.leaderboard = LeaderboardSnapshot()
        self.reveal = Countdown()
        self.last_error: SessionError | None = None

    @property
    def session_id(self) -> str:
        return self._client.session_id

    @property
    def host_id(self) -> str:
        return self._client.user_id

    def attach(self) -> None:
        """Route every broadcast of the client into :meth:`apply`."""
        self._client.on_all(self.apply)

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    # --- Loading ---

    def load(self, api: QuizApiClient) -> bool:
        """Fetch the session snapshot. Returns False when the view should close."""
        try:
            fetched = api.get_session(self.session_id, self.host_id)
        except ApiError as exc:
            self._notifier.error(exc.message)
            return False
        if fetched.ended:
            self._notifier.info(text.SESSION_HAS_ENDED_MESSAGE)
            self._navigate(Destination.BACK)
            return False
        with self._lock:
            self.users = fetched.users
            if fetched.session is not None:
                self.load_snapshot(fetched.session)
        self._changed()
        return True

    def load_snapshot(self, session: QuizSession) -> None:
        with self._lock:
            self.session = session
            self.participants = [p for p in session.participants if not p.disconnected]
            self.questions = list(session.quiz.questions) if session.quiz else []
            self.is_paused = session.status == SessionStatus.PAUSED
            self.is_host_control = session.status.is_running
            self.current_question_index = session.current_question_index

    def current_question(self) -> Question | None:
        with self._lock:
            if 0 <= self.current_question_index < len(self.questions):
                return self.questions[self.current_question_index]
            return None

    # --- Host commands ---

    def start_quiz(self) -> bool:
        """Emit ``startQuiz`` if anyone is waiting; otherwise only notify."""
        with self._lock:
            count = len(self.participants)
            if count == 0:
                self._notifier.info(text.NO_PARTICIPANTS_TEMPLATE.format(count=count))
                return False
            self.auto_start_enabled = False
            self.auto_start.clear()
        self._client.start_quiz()
        self._changed()
        return True

    def start_auto_start(self, seconds: int) -> None:
        self._client.start_quiz_countdown(seconds)

    def stop_auto_start(self) -> None:
        self._client.stop_quiz_countdown()

    def toggle_pause(self) -> None:
        with self._lock:
            paused = self.is_paused
        if paused:
            self._client.resume_quiz()
        else:
            self._client.pause_quiz()

    def restart_question(self) -> None:
        question = self.current_question()
        with self._lock:
            self._reset_reveal()
        self._client.restart_question(question.id if question else None)
        self._notifier.success(text.QUESTION_RESTARTED_MESSAGE)
        self._changed()

    def skip_question(self) -> None:
        with self._lock:
            self._reset_reveal()
        self._client.skip_question()
        self._notifier.success(text.QUESTION_SKIPPED_MESSAGE)
        self._changed()

    def end_quiz(self) -> None:
        self._client.end_quiz()
        self._notifier.success(text.SESSION_ENDED_BY_HOST_MESSAGE)
        self._navigate(Destination.BACK)

    def remove_participant(self, user_id: str) -> None:
        with self._lock:
            participant = next((p for p in self.participants if p.user_id == user_id), None)
        if participant is None:
            return
        self._client.remove_participant(user_id)
        self._notifier.success(text.PARTICIPANT_REMOVED_TEMPLATE.format(name=participant.name))

    # --- Ticking ---

    def tick(self) -> None:
        """Advance the local timers by one second; driven by a view timer."""
        fire_start = False
        next_index: int | None = None
        with self._lock:
            if self.auto_start_enabled:
                if self.auto_start.remaining is not None and self.auto_start.remaining <= 0:
                    fire_start = True
                elif self.participants and self.auto_start.tick():
                    fire_start = True
            if not self.show_correct_answer and self.questions:
                self.countdown.tick()
            if self.reveal.tick():
                self.reveal.clear()
                next_index = self.current_question_index + 1
        if fire_start and not self.start_quiz():
            # An expired auto-start with an empty lobby is refused once, not every tick.
            with self._lock:
                self.auto_start_enabled = False
                self.auto_start.clear()
        if next_index is not None:
            self._client.next_question(next_index)
        self._changed()

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
        participant.disconnected = False
        self.participants.append(participant)
        self._notifier.success(text.PARTICIPANT_JOINED_TEMPLATE.format(name=participant.name))

    def _on_participant_left(self, event: events.ParticipantLeftEvent) -> None:
        leaving = next((p for p in self.participants if p.user_id == event.user_id), None)
        if leaving is not None:
            self._notifier.success(text.PARTICIPANT_LEFT_TEMPLATE.format(name=leaving.name))
        self.participants = [p for p in self.participants if p.user_id != event.user_id]

    def _on_countdown_started(self, event: events.CountdownEvent) -> None:
        self.auto_start_enabled = True
        self.auto_start.seed(event.countdown)
        self._notifier.success(text.COUNTDOWN_STARTED_TEMPLATE.format(seconds=event.countdown))

    def _on_countdown_stopped(self, event: events.SessionEvent) -> None:
        self.auto_start_enabled = False
        self.auto_start.clear()
        self._notifier.success(text.COUNTDOWN_STOPPED_MESSAGE)

    def _on_countdown_updated(self, event: events.CountdownEvent) -> None:
        self.countdown.seed(event.countdown)

    def _on_quiz_started(self, event: events.QuestionEvent) -> None:
        self.is_host_control = True
        self.is_paused = False
        self.countdown.seed(event.countdown)
        index = event.resolved_index()
        if index is not None:
            self.current_question_index = index
        if event.question is not None:
            self._store_question(self.current_question_index, event.question)
        self._notifier.success(text.QUIZ_STARTED_TEMPLATE.format(number=self.current_question_index + 1))

    def _on_quiz_paused(self, event: events.SessionEvent) -> None:
        self.is_paused = True
        self.countdown.clear()
        self._notifier.success(text.QUIZ_PAUSED_MESSAGE)

    def _on_quiz_resumed(self, event: events.QuestionEvent) -> None:
        self.is_paused = False
        self.countdown.resume(event.countdown)
        self._notifier.success(text.QUIZ_RESUMED_MESSAGE)

    def _on_next_question(self, event: events.QuestionEvent) -> None:
        index = event.resolved_index()
        if index is None:
            logger.warning("nextQuestion without an index ignored")
            return
        self._reset_reveal()
        self.current_question_index = index
        if event.question is not None:
            self._store_question(index, event.question)
        self.countdown.seed(event.countdown)
        self._notifier.success(text.QUESTION_STARTED_TEMPLATE.format(number=index + 1))

    def _on_leaderboard_update(self, event: events.LeaderboardUpdateEvent) -> None:
        self.leaderboard = LeaderboardSnapshot.from_payload(
            event.leaderboard, event.question_index, event.total_questions, event.timestamp
        )

    def _on_all_answers_submitted(self, event: events.AllAnswersSubmittedEvent) -> None:
        question = self.current_question()
        self.question_stats = answer_distribution(question, event.answers)
        self.show_correct_answer = True
        self.countdown.clear()
        self.reveal.seed(self._reveal_delay)

    def _on_all_questions_completed(self, event: events.CompletionEvent) -> None:
        self.reveal.clear()
        self._notifier.success(event.reason)
        self._navigate(Destination.HOST_RESULTS)

    def _on_session_ended(self, event: events.CompletionEvent) -> None:
        self.reveal.clear()
        self._notifier.success(text.SESSION_ENDED_TEMPLATE.format(reason=event.reason))
        self._navigate(Destination.BACK)

    def _on_error(self, event: events.ErrorEvent) -> None:
        error = SessionError.classify(event.message, event.kind)
        self.last_error = error
        self._notifier.error(error.message)
        if error.kind.leaves_view:
            self._navigate(Destination.BACK)

    _HANDLERS: dict[str, Callable[["HostSession", Any], None]] = {
        events.PARTICIPANT_JOINED: _on_participant_joined,
        events.PARTICIPANT_LEFT: _on_participant_left,
        events.COUNTDOWN_STARTED: _on_countdown_started,
        events.COUNTDOWN_STOPPED: _on_countdown_stopped,
        events.COUNTDOWN_UPDATED: _on_countdown_updated,
        events.QUIZ_STARTED: _on_quiz_started,
        events.QUIZ_PAUSED: _on_quiz_paused,
        events.QUIZ_RESUMED: _on_quiz_resumed,
        events.NEXT_QUESTION: _on_next_question,
        events.LEADERBOARD_UPDATE: _on_leaderboard_update,
        events.ALL_ANSWERS_SUBMITTED: _on_all_answers_submitted,
        events.ALL_QUESTIONS_COMPLETED: _on_all_questions_completed,
        events.SESSION_ENDED: _on_session_ended,
        events.ERROR: _on_error,
    }

    # --- Helpers ---

    def _reset_reveal(self) -> None:
        self.show_correct_answer = False
        self.question_stats = []
        self.reveal.clear()

    def _store_question(self, index: int, raw: dict[str, Any]) -> None:
        try:
            question = Question.from_dict(raw)
        except ValueError as exc:
            logger.warning("Pushed question %s could not be parsed: %s", index, exc)
            return
        while len(self.questions) <= index:
            self.questions.append(Question(question=""))
        self.questions[index] = question

    def _changed(self) -> None:
        for listener in list(self._listeners):
            listener()
