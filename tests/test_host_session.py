from __future__ import annotations

from quizlive.constants import ui_constants as text
from quizlive.core import events
from quizlive.core.models import QuizSession
from quizlive.core.notifications import Destination
from quizlive.core.services.api_client import SessionFetch
from quizlive.core.services.host_session import HostSession


def _participant(user_id: str, name: str) -> dict:
    return {"sessionId": "s1", "participant": {"userId": user_id, "name": name}}


class StubApi:
    def __init__(self, fetch: SessionFetch) -> None:
        self.fetch = fetch

    def get_session(self, session_id: str, user_id: str) -> SessionFetch:
        return self.fetch


class TestHostSession:
    def setup_method(self):
        self.navigation = []

    def make_session(self, host_client, notifier, **kwargs) -> HostSession:
        session = HostSession(host_client, notifier, navigate=self.navigation.append, **kwargs)
        session.attach()
        return session

    def test_start_with_no_participants_only_notifies(self, host_client, fake_socket, notifier):
        session = self.make_session(host_client, notifier)

        assert session.start_quiz() is False
        assert notifier.infos == ["No participants 0"]
        assert events.START_QUIZ not in fake_socket.names()

    def test_start_with_participants_emits(self, host_client, fake_socket, notifier):
        session = self.make_session(host_client, notifier)
        fake_socket.fire(events.PARTICIPANT_JOINED, _participant("u1", "Ada"))

        assert session.start_quiz() is True
        assert fake_socket.payloads(events.START_QUIZ) == [{"sessionId": "s1", "adminId": "host-1"}]

    def test_duplicate_join_is_ignored(self, host_client, fake_socket, notifier):
        session = self.make_session(host_client, notifier)

        fake_socket.fire(events.PARTICIPANT_JOINED, _participant("u1", "Ada"))
        fake_socket.fire(events.PARTICIPANT_JOINED, _participant("u1", "Ada"))

        assert [p.user_id for p in session.participants] == ["u1"]
        assert notifier.successes == ["Ada joined the session!"]

    def test_participant_left_removes_from_roster(self, host_client, fake_socket, notifier):
        session = self.make_session(host_client, notifier)
        fake_socket.fire(events.PARTICIPANT_JOINED, _participant("u1", "Ada"))
        fake_socket.fire(events.PARTICIPANT_JOINED, _participant("u2", "Bo"))

        fake_socket.fire(events.PARTICIPANT_LEFT, {"sessionId": "s1", "userId": "u1"})

        assert [p.user_id for p in session.participants] == ["u2"]
        assert "Ada left the session" in notifier.successes

    def test_quiz_started_stores_question_and_seeds_countdown(self, host_client, fake_socket, notifier, make_question):
        session = self.make_session(host_client, notifier)

        fake_socket.fire(events.QUIZ_STARTED, {"sessionId": "s1", "question": make_question(0), "countdown": 10})

        assert session.is_host_control
        assert session.current_question().id == "q1"
        assert session.countdown.remaining == 10

    def test_reveal_then_next_question_after_delay(self, host_client, fake_socket, notifier, make_question):
        session = self.make_session(host_client, notifier)
        fake_socket.fire(events.QUIZ_STARTED, {"question": make_question(0), "countdown": 10})

        fake_socket.fire(
            events.ALL_ANSWERS_SUBMITTED,
            {"answers": [{"selectedAnswer": 1}, {"selectedAnswer": 0}, {"selectedOption": 1}]},
        )

        assert session.show_correct_answer
        assert session.countdown.remaining is None
        assert [(s.count, s.percentage) for s in session.question_stats] == [(1, 33), (2, 67), (0, 0)]

        for _ in range(4):
            session.tick()
        assert events.NEXT_QUESTION not in fake_socket.names()

        session.tick()
        assert fake_socket.payloads(events.NEXT_QUESTION) == [
            {"sessionId": "s1", "adminId": "host-1", "questionIndex": 1}
        ]

    def test_next_question_resets_reveal(self, host_client, fake_socket, notifier, make_question):
        session = self.make_session(host_client, notifier)
        fake_socket.fire(events.QUIZ_STARTED, {"question": make_question(0), "countdown": 10})
        fake_socket.fire(events.ALL_ANSWERS_SUBMITTED, {"answers": []})

        fake_socket.fire(events.NEXT_QUESTION, {"question": make_question(1), "countdown": 15})

        assert not session.show_correct_answer
        assert session.question_stats == []
        assert session.reveal.remaining is None
        assert session.current_question_index == 1
        assert session.current_question().id == "q2"
        assert session.countdown.remaining == 15

    def test_pause_and_resume(self, host_client, fake_socket, notifier, make_question):
        session = self.make_session(host_client, notifier)
        fake_socket.fire(events.QUIZ_STARTED, {"question": make_question(0), "countdown": 10})

        session.toggle_pause()
        fake_socket.fire(events.QUIZ_PAUSED, {})
        assert session.is_paused
        assert session.countdown.remaining is None

        session.toggle_pause()
        fake_socket.fire(events.QUIZ_RESUMED, {"countdown": 7})
        assert not session.is_paused
        assert session.countdown.remaining == 7
        assert fake_socket.names()[-2:] == [events.PAUSE_QUIZ, events.RESUME_QUIZ]

    def test_auto_start_waits_for_participants(self, host_client, fake_socket, notifier):
        session = self.make_session(host_client, notifier)
        fake_socket.fire(events.COUNTDOWN_STARTED, {"countdown": 2})

        session.tick()
        session.tick()
        assert events.START_QUIZ not in fake_socket.names()
        assert session.auto_start.remaining == 2

        fake_socket.fire(events.PARTICIPANT_JOINED, _participant("u1", "Ada"))
        session.tick()
        session.tick()

        assert fake_socket.names().count(events.START_QUIZ) == 1
        assert not session.auto_start_enabled

    def test_expired_auto_start_with_empty_lobby_is_refused_once(self, host_client, fake_socket, notifier):
        session = self.make_session(host_client, notifier)
        fake_socket.fire(events.COUNTDOWN_STARTED, {"countdown": 0})

        for _ in range(5):
            session.tick()

        assert notifier.infos == ["No participants 0"]
        assert events.START_QUIZ not in fake_socket.names()
        assert not session.auto_start_enabled
        assert session.auto_start.remaining is None

    def test_countdown_stopped_disables_auto_start(self, host_client, fake_socket, notifier):
        session = self.make_session(host_client, notifier)
        fake_socket.fire(events.COUNTDOWN_STARTED, {"countdown": 30})

        fake_socket.fire(events.COUNTDOWN_STOPPED, {})

        assert not session.auto_start_enabled
        assert session.auto_start.remaining is None

    def test_leaderboard_update_replaces_snapshot(self, host_client, fake_socket, notifier):
        session = self.make_session(host_client, notifier)

        fake_socket.fire(
            events.LEADERBOARD_UPDATE,
            {
                "leaderboard": {
                    "u1": {"userId": "u1", "name": "Ada", "score": 10, "accuracy": 50},
                    "u2": {"userId": "u2", "name": "Bo", "score": 20, "accuracy": 100},
                },
                "questionIndex": 1,
                "totalQuestions": 3,
            },
        )

        assert [entry.name for entry in session.leaderboard.ranked()] == ["Bo", "Ada"]
        assert session.leaderboard.total_questions == 3

    def test_completion_routes_to_results(self, host_client, fake_socket, notifier):
        self.make_session(host_client, notifier)

        fake_socket.fire(events.ALL_QUESTIONS_COMPLETED, {"reason": "All questions answered"})

        assert self.navigation == [Destination.HOST_RESULTS]

    def test_session_ended_navigates_back(self, host_client, fake_socket, notifier):
        self.make_session(host_client, notifier)

        fake_socket.fire(events.SESSION_ENDED, {"reason": "Host left"})

        assert self.navigation == [Destination.BACK]
        assert "Quiz ended: Host left" in notifier.successes

    def test_not_found_error_leaves_the_view(self, host_client, fake_socket, notifier):
        session = self.make_session(host_client, notifier)

        fake_socket.fire(events.ERROR, {"message": "Session not found"})

        assert self.navigation == [Destination.BACK]
        assert notifier.errors == ["Session not found"]
        assert session.last_error is not None

    def test_conflict_error_stays(self, host_client, fake_socket, notifier):
        self.make_session(host_client, notifier)

        fake_socket.fire(events.ERROR, {"message": "Session not found", "kind": "conflict"})

        assert self.navigation == []

    def test_end_quiz_navigates_immediately(self, host_client, fake_socket, notifier):
        session = self.make_session(host_client, notifier)

        session.end_quiz()

        assert events.END_QUIZ in fake_socket.names()
        assert self.navigation == [Destination.BACK]
        assert notifier.successes == [text.SESSION_ENDED_BY_HOST_MESSAGE]

    def test_remove_participant(self, host_client, fake_socket, notifier):
        session = self.make_session(host_client, notifier)
        fake_socket.fire(events.PARTICIPANT_JOINED, _participant("u1", "Ada"))

        session.remove_participant("ghost")
        session.remove_participant("u1")

        assert fake_socket.payloads(events.REMOVE_PARTICIPANT) == [
            {"sessionId": "s1", "adminId": "host-1", "userId": "u1"}
        ]

    def test_listeners_are_told_about_changes(self, host_client, fake_socket, notifier):
        session = self.make_session(host_client, notifier)
        calls = []
        session.subscribe(lambda: calls.append(True))

        fake_socket.fire(events.QUIZ_PAUSED, {})

        assert calls == [True]


class TestHostSessionLoad:
    def test_ended_session_navigates_back(self, host_client, notifier):
        navigation = []
        session = HostSession(host_client, notifier, navigate=navigation.append)

        assert session.load(StubApi(SessionFetch(session=None, ended=True))) is False
        assert navigation == [Destination.BACK]

    def test_running_session_snapshot(self, host_client, notifier, make_question):
        snapshot = QuizSession.from_dict(
            {
                "_id": "s1",
                "code": "ABC123",
                "status": "in-progress",
                "quizId": {"_id": "quiz-1", "title": "Capitals", "questions": [make_question(0), make_question(1)]},
                "currentQuestion": {"index": 1},
                "participants": [
                    {"userId": "u1", "name": "Ada"},
                    {"userId": "u2", "name": "Bo", "disconnected": True},
                ],
            }
        )
        session = HostSession(host_client, notifier)

        assert session.load(StubApi(SessionFetch(session=snapshot))) is True
        assert session.is_host_control
        assert session.current_question_index == 1
        assert [p.user_id for p in session.participants] == ["u1"]
        assert len(session.questions) == 2
