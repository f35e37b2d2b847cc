from __future__ import annotations

import pytest

from quizlive.core import events


class TestCommands:
    def test_host_commands_use_camel_case_keys(self):
        command = events.NextQuestionCommand(session_id="s1", admin_id="host-1", question_index=3)

        assert command.to_wire() == {"sessionId": "s1", "adminId": "host-1", "questionIndex": 3}

    def test_submit_answer_allows_null_selection(self):
        command = events.SubmitAnswerCommand(session_id="s1", user_id="u1", question_id="q1")

        assert command.to_wire() == {
            "sessionId": "s1",
            "userId": "u1",
            "questionId": "q1",
            "selectedOption": None,
        }


class TestParseEvent:
    def test_question_index_is_taken_from_the_question_when_missing(self):
        event = events.parse_event(
            events.QUIZ_STARTED,
            {"sessionId": "s1", "question": {"question": "Q", "index": 2}, "countdown": 10},
        )

        assert isinstance(event, events.QuestionEvent)
        assert event.resolved_index() == 2
        assert event.countdown == 10

    def test_explicit_index_wins(self):
        event = events.parse_event(events.NEXT_QUESTION, {"question": {"index": 2}, "index": 4})

        assert event.resolved_index() == 4

    def test_bare_string_payload_becomes_message(self):
        event = events.parse_event(events.ERROR, "Session not found")

        assert event.message == "Session not found"
        assert event.kind is None

    def test_missing_payload_uses_defaults(self):
        event = events.parse_event(events.ALL_QUESTIONS_COMPLETED, None)

        assert event.reason == ""
        assert event.session_id is None

    def test_null_fields_fall_back_to_defaults(self):
        feedback = events.parse_event(events.ANSWER_FEEDBACK, {"isCorrect": False, "points": None, "timeTaken": None})
        completed = events.parse_event(events.ALL_QUESTIONS_COMPLETED, {"reason": None})
        error = events.parse_event(events.ERROR, {"message": None, "kind": None})
        update = events.parse_event(events.LEADERBOARD_UPDATE, {"leaderboard": None, "questionIndex": None})

        assert feedback.points == 0
        assert feedback.time_taken is None
        assert completed.reason == ""
        assert error.message == "Unknown error"
        assert (update.leaderboard, update.question_index) == ({}, 0)

    def test_unknown_event_name(self):
        with pytest.raises(KeyError):
            events.parse_event("somethingElse", {})

    def test_events_without_session_id_concern_every_session(self):
        event = events.parse_event(events.QUIZ_PAUSED, {})

        assert event.concerns("s1")
        assert event.concerns("s2")

    def test_events_for_another_session(self):
        event = events.parse_event(events.QUIZ_PAUSED, {"sessionId": "s2"})

        assert not event.concerns("s1")

    def test_every_broadcast_has_a_model(self):
        assert set(events.BROADCAST_EVENTS) == set(events.EVENT_MODELS)
        assert events.ANSWER_FEEDBACK in events.BROADCAST_EVENTS
