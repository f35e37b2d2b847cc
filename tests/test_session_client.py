from __future__ import annotations

import pytest

from quizlive.core import events
from quizlive.core.errors import SessionClosedError


class TestConnection:
    def test_connect_passes_auth_and_joins_the_room(self, host_client, fake_socket):
        host_client.connect()

        url, auth, transports = fake_socket.connect_calls[0]
        assert url == "http://quiz.test"
        assert auth == {"userId": "host-1", "sessionId": "s1"}
        assert transports == ["websocket", "polling"]
        assert fake_socket.emitted == [(events.JOIN_SESSION, "s1")]
        assert host_client.join_count == 1
        assert host_client.socket_id == "sid-1"

    def test_every_reconnect_joins_exactly_once(self, host_client, fake_socket):
        host_client.connect()
        fake_socket.fire("disconnect")
        fake_socket.fire("connect")

        assert fake_socket.payloads(events.JOIN_SESSION) == ["s1", "s1"]
        assert host_client.join_count == 2

    def test_close_disconnects_and_is_idempotent(self, host_client, fake_socket):
        host_client.connect()

        host_client.close()
        host_client.close()

        assert host_client.closed
        assert not fake_socket.connected

    def test_commands_after_close_raise(self, host_client):
        host_client.close()

        with pytest.raises(SessionClosedError):
            host_client.start_quiz()
        with pytest.raises(SessionClosedError):
            host_client.connect()

    def test_context_manager_closes(self, host_client):
        with host_client as client:
            client.pause_quiz()

        assert host_client.closed


class TestDispatch:
    def setup_method(self):
        self.received = []

    def record(self, name, event):
        self.received.append((name, event))

    def test_handlers_receive_typed_events(self, host_client, fake_socket):
        host_client.on(events.PARTICIPANT_LEFT, self.record)

        fake_socket.fire(events.PARTICIPANT_LEFT, {"sessionId": "s1", "userId": "u9"})

        name, event = self.received[0]
        assert name == events.PARTICIPANT_LEFT
        assert isinstance(event, events.ParticipantLeftEvent)
        assert event.user_id == "u9"

    def test_events_for_other_sessions_are_ignored(self, host_client, fake_socket):
        host_client.on(events.QUIZ_PAUSED, self.record)

        fake_socket.fire(events.QUIZ_PAUSED, {"sessionId": "other"})

        assert self.received == []

    def test_events_after_close_are_dropped(self, host_client, fake_socket):
        host_client.on_all(self.record)
        host_client.close()

        fake_socket.fire(events.QUIZ_PAUSED, {"sessionId": "s1"})

        assert self.received == []

    def test_malformed_payloads_are_dropped(self, host_client, fake_socket):
        host_client.on(events.PARTICIPANT_LEFT, self.record)

        fake_socket.fire(events.PARTICIPANT_LEFT, {"sessionId": "s1"})

        assert self.received == []

    def test_unsubscribe(self, host_client, fake_socket):
        off = host_client.on(events.QUIZ_PAUSED, self.record)
        off()

        fake_socket.fire(events.QUIZ_PAUSED, {})

        assert self.received == []

    def test_unknown_event_cannot_be_subscribed(self, host_client):
        with pytest.raises(KeyError):
            host_client.on("mystery", self.record)


class TestCommandPayloads:
    def test_host_commands_carry_session_and_admin(self, host_client, fake_socket):
        host_client.start_quiz()
        host_client.start_quiz_countdown(30)
        host_client.restart_question("q2")
        host_client.remove_participant("u3")

        assert fake_socket.emitted == [
            (events.START_QUIZ, {"sessionId": "s1", "adminId": "host-1"}),
            (events.START_QUIZ_COUNTDOWN, {"sessionId": "s1", "adminId": "host-1", "countdown": 30}),
            (events.RESTART_QUESTION, {"sessionId": "s1", "adminId": "host-1", "questionId": "q2"}),
            (events.REMOVE_PARTICIPANT, {"sessionId": "s1", "adminId": "host-1", "userId": "u3"}),
        ]

    def test_participant_commands(self, participant_client, fake_socket):
        participant_client.submit_answer("q1", 2)
        participant_client.leave()

        assert fake_socket.emitted == [
            (
                events.SUBMIT_ANSWER,
                {"sessionId": "s1", "userId": "user-1", "questionId": "q1", "selectedOption": 2},
            ),
            (events.LEAVE_QUIZ, None),
        ]
