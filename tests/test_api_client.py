from __future__ import annotations

import json
from datetime import datetime

import pytest
import requests

from quizlive.core.errors import ApiError, ErrorKind, QuizValidationError
from quizlive.core.models import Question, Quiz, SessionStatus
from quizlive.core.services.api_client import QuizApiClient


class TestQuizApiClient:
    @pytest.fixture(autouse=True)
    def _client(self, make_http, make_response):
        self.http = make_http()
        self.response = make_response
        self.api = QuizApiClient("http://quiz.test/", timeout=5, session=self.http)

    def test_base_url_trailing_slash_is_dropped(self):
        self.http.queue(self.response(200, {"user": {"_id": "u1", "name": "Ada"}}))

        user = self.api.get_user("u1")

        assert self.http.calls[0]["url"] == "http://quiz.test/api/user/u1"
        assert self.http.calls[0]["timeout"] == 5
        assert user.id == "u1"
        assert user.name == "Ada"

    def test_create_quiz_sends_questions_as_json_string(self):
        quiz = Quiz(
            title="Capitals",
            subject="Geography",
            questions=[Question(question="Capital of France?", options=["Rome", "Paris"], correct_answer=1)],
        )
        self.http.queue(self.response(201, {"quiz": {"_id": "quiz-1", "title": "Capitals"}}))

        saved = self.api.create_quiz(quiz, "u1")

        payload = self.http.calls[0]["json"]
        assert isinstance(payload["questions"], str)
        assert json.loads(payload["questions"])[0]["correctAnswer"] == 1
        assert payload["userId"] == "u1"
        assert payload["isAICreated"] is False
        assert payload["timeLimit"] == 30
        assert saved.id == "quiz-1"

    def test_server_error_message_is_used(self):
        self.http.queue(self.response(404, {"error": "Quiz not found"}))

        with pytest.raises(ApiError) as excinfo:
            self.api.get_quiz("missing", "u1")

        assert excinfo.value.message == "Quiz not found"
        assert excinfo.value.status_code == 404
        assert excinfo.value.kind == ErrorKind.NOT_FOUND

    def test_fallback_message_when_body_is_not_json(self):
        self.http.queue(self.response(502, None, raw=b"<html>Bad gateway</html>"))

        with pytest.raises(ApiError) as excinfo:
            self.api.get_session("s1", "u1")

        assert excinfo.value.message == "Failed to fetch quiz session"

    def test_transport_failure_is_a_network_error(self):
        self.http.queue(requests.ConnectionError("refused"))

        with pytest.raises(ApiError) as excinfo:
            self.api.list_public_quizzes()

        assert excinfo.value.kind == ErrorKind.NETWORK
        assert excinfo.value.message == "Failed to fetch quizzes"

    def test_ended_session(self):
        self.http.queue(self.response(200, {"ended": True}))

        fetched = self.api.get_session("s1", "u1")

        assert fetched.ended
        assert fetched.session is None
        assert self.http.calls[0]["params"] == {"userId": "u1"}

    def test_session_snapshot(self):
        self.http.queue(
            self.response(
                200,
                {
                    "quizSession": {"_id": "s1", "code": "ABC123", "status": "active", "hostId": {"_id": "h1"}},
                    "users": [{"_id": "u1"}],
                },
            )
        )

        fetched = self.api.get_session("s1", "u1")

        assert fetched.session.status == SessionStatus.ACTIVE
        assert fetched.session.host_id == "h1"
        assert fetched.users == [{"_id": "u1"}]

    def test_host_results(self):
        self.http.queue(
            self.response(
                200,
                {
                    "quizSession": {"_id": "s1", "code": "ABC123", "status": "ended"},
                    "leaderboard": [{"userId": {"_id": "u1"}, "name": "Ada", "score": 40}],
                    "feedbacks": [{"quizSessionId": "s1", "userId": "u1", "rating": 5}],
                },
            )
        )

        results = self.api.get_host_results("s1", "h1")

        assert results.leaderboard[0].user_id == "u1"
        assert results.feedbacks[0].rating == 5

    def test_toggle_publish(self):
        self.http.queue(self.response(200, {"message": "Quiz published", "quiz": {"isPublic": True}}))

        message, is_public = self.api.toggle_publish("quiz-1", "u1")

        assert self.http.calls[0]["method"] == "PATCH"
        assert (message, is_public) == ("Quiz published", True)

    def test_schedule_sends_iso_time(self):
        self.http.queue(self.response(201, {"quizSchedule": {"_id": "sch-1"}}))

        schedule = self.api.schedule_quiz("quiz-1", "u1", datetime(2030, 1, 2, 9, 30))

        assert self.http.calls[0]["json"] == {"userId": "u1", "scheduleTime": "2030-01-02T09:30:00"}
        assert schedule == {"_id": "sch-1"}

    def test_invite_by_email(self):
        self.http.queue(self.response(200, {"message": "sent"}))

        self.api.invite_to_session("s1", "http://web/activity/start-join?code=ABC", "Capitals", "a@b.c")

        payload = self.http.calls[0]["json"]
        assert payload["inviteMethod"] == "email"
        assert payload["inviteeEmail"] == "a@b.c"
        assert payload["inviteeIds"] == []

    def test_invite_without_recipients_is_rejected_locally(self):
        with pytest.raises(QuizValidationError):
            self.api.invite_to_session("s1", "link", "Capitals")

        assert self.http.calls == []

    def test_out_of_range_rating_is_rejected_locally(self):
        with pytest.raises(QuizValidationError):
            self.api.submit_feedback("s1", "u1", 6)

        assert self.http.calls == []

    def test_empty_success_body(self):
        self.http.queue(self.response(204))

        self.api.delete_quiz("quiz-1", "u1")

        assert self.http.calls[0]["method"] == "DELETE"

    def test_close_closes_the_http_session(self):
        self.api.close()

        assert self.http.closed
