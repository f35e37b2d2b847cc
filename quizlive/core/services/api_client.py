"""REST client for the quiz server.

Every call is a single blocking request with no retry. Failures are raised as
:class:`ApiError` carrying the server's ``error`` message when it sent one, or
a per-call fallback message otherwise.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
import json
import logging
from typing import Any

import requests

from quizlive.constants.network_constants import DEFAULT_REQUEST_TIMEOUT_SECONDS
from quizlive.constants.quiz_constants import DEFAULT_MAX_PARTICIPANTS, MAX_RATING, MIN_RATING
from quizlive.core.app_state import CurrentUser
from quizlive.core.errors import ApiError, ErrorKind, QuizValidationError
from quizlive.core.models import Feedback, LeaderboardEntry, Quiz, QuizSession

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SessionFetch:
    """Result of ``GET /api/quiz-session/:id``."""

    session: QuizSession | None
    users: list[dict[str, Any]] = field(default_factory=list)
    ended: bool = False


@dataclass(slots=True)
class JoinVerification:
    session: QuizSession
    already_joined: bool = False


@dataclass(slots=True)
class HostResults:
    session: QuizSession
    leaderboard: list[LeaderboardEntry] = field(default_factory=list)
    feedbacks: list[Feedback] = field(default_factory=list)


@dataclass(slots=True)
class UserResults:
    session: QuizSession
    user_stats: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class SessionHistory:
    """Payload of ``/api/quiz-session/all`` used by the analytics dashboard."""

    hosted: list[QuizSession] = field(default_factory=list)
    participated: list[QuizSession] = field(default_factory=list)
    feedback: list[Feedback] = field(default_factory=list)


class QuizApiClient:
    """Thin wrapper over the quiz server's ``/api`` endpoints."""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = session or requests.Session()

    def close(self) -> None:
        self._http.close()

    # --- Users & notifications ---

    def get_user(self, user_id: str) -> CurrentUser | None:
        data = self._request("GET", f"/api/user/{user_id}", fallback="Failed to fetch user")
        user = data.get("user")
        return CurrentUser.from_dict(user) if user else None

    def get_unread_count(self, user_id: str) -> int:
        data = self._request(
            "GET",
            f"/api/notifications/unread-count/{user_id}",
            fallback="Failed to fetch unread count",
        )
        return int(data.get("count") or 0)

    # --- Quizzes ---

    def create_quiz(self, quiz: Quiz, user_id: str) -> Quiz:
        payload = quiz.to_dict()
        # The server expects the question list as a JSON string.
        payload["questions"] = json.dumps(payload["questions"])
        payload.update({"userId": user_id, "isAICreated": False})
        data = self._request("POST", "/api/quiz/create", json=payload, fallback="Failed to create quiz")
        return Quiz.from_dict(data.get("quiz") or {})

    def get_quiz(self, quiz_id: str, user_id: str) -> Quiz:
        data = self._request(
            "GET", f"/api/quiz/{quiz_id}", params={"userId": user_id}, fallback="Failed to fetch quiz"
        )
        return Quiz.from_dict(data.get("quiz") or {})

    def edit_quiz(self, quiz_id: str, quiz: Quiz, user_id: str) -> Quiz:
        payload = quiz.to_dict()
        payload["questions"] = json.dumps(payload["questions"])
        payload["userId"] = user_id
        data = self._request("PUT", f"/api/quiz/edit/{quiz_id}", json=payload, fallback="Failed to update quiz")
        return Quiz.from_dict(data.get("quiz") or {})

    def delete_quiz(self, quiz_id: str, user_id: str) -> None:
        self._request(
            "DELETE", f"/api/quiz/{quiz_id}", params={"userId": user_id}, fallback="Failed to delete quiz"
        )

    def toggle_publish(self, quiz_id: str, user_id: str) -> tuple[str, bool]:
        """Flip a quiz between public and private; returns (message, is_public)."""
        data = self._request(
            "PATCH",
            f"/api/quiz/{quiz_id}/publish",
            json={"userId": user_id},
            fallback="Failed to toggle quiz status.",
        )
        return data.get("message", ""), bool((data.get("quiz") or {}).get("isPublic", False))

    def list_public_quizzes(self) -> list[Quiz]:
        data = self._request("GET", "/api/quiz/public", fallback="Failed to fetch quizzes")
        return [Quiz.from_dict(item) for item in data.get("quizzes") or []]

    def get_public_quiz(self, quiz_id: str) -> Quiz:
        data = self._request("GET", f"/api/quiz/public/{quiz_id}", fallback="Failed to fetch quiz")
        return Quiz.from_dict(data.get("quiz") or {})

    # --- Quiz sessions ---

    def create_session(
        self,
        quiz_id: str,
        user_id: str,
        socket_id: str | None = None,
        is_public: bool = True,
        max_participants: int = DEFAULT_MAX_PARTICIPANTS,
    ) -> QuizSession:
        data = self._request(
            "POST",
            f"/api/quiz-session/create/{quiz_id}",
            json={
                "userId": user_id,
                "isPublic": is_public,
                "maxParticipants": max_participants,
                "socketId": socket_id,
            },
            fallback="Failed to start live quiz",
        )
        return QuizSession.from_dict(data.get("quizSession") or {})

    def get_session(self, session_id: str, user_id: str) -> SessionFetch:
        data = self._request(
            "GET",
            f"/api/quiz-session/{session_id}",
            params={"userId": user_id},
            fallback="Failed to fetch quiz session",
        )
        if data.get("ended"):
            return SessionFetch(session=None, ended=True)
        raw = data.get("quizSession")
        return SessionFetch(
            session=QuizSession.from_dict(raw) if raw else None,
            users=list(data.get("users") or []),
        )

    def verify_code(self, code: str, user_id: str, name: str, socket_id: str | None = None) -> JoinVerification:
        data = self._request(
            "POST",
            "/api/quiz-session/verify",
            json={"code": code.strip().upper(), "userId": user_id, "socketId": socket_id, "name": name},
            fallback="Invalid quiz code or quiz not found",
        )
        return JoinVerification(
            session=QuizSession.from_dict(data.get("quizSession") or {}),
            already_joined=bool(data.get("alreadyJoined", False)),
        )

    def join_session(self, session_id: str, user_id: str, name: str, socket_id: str | None = None) -> QuizSession:
        data = self._request(
            "POST",
            "/api/quiz-session/join",
            json={"sessionId": session_id, "userId": user_id, "socketId": socket_id, "name": name},
            fallback="Failed to join quiz",
        )
        return QuizSession.from_dict(data.get("quizSession") or {})

    def get_host_results(self, session_id: str, user_id: str) -> HostResults:
        data = self._request(
            "GET",
            f"/api/quiz-session/host-results/{session_id}",
            params={"userId": user_id},
            fallback="Failed to load results",
        )
        return HostResults(
            session=QuizSession.from_dict(data.get("quizSession") or {}),
            leaderboard=[LeaderboardEntry.from_dict(e) for e in data.get("leaderboard") or []],
            feedbacks=[Feedback.from_dict(f) for f in data.get("feedbacks") or []],
        )

    def get_user_results(self, session_id: str, user_id: str) -> UserResults:
        data = self._request(
            "GET",
            f"/api/quiz-session/user-results/{session_id}",
            params={"userId": user_id},
            fallback="Failed to fetch quiz results",
        )
        return UserResults(
            session=QuizSession.from_dict(data.get("quizSession") or {}),
            user_stats=dict(data.get("userStats") or {}),
        )

    def get_all_sessions(self, user_id: str) -> SessionHistory:
        data = self._request(
            "GET", "/api/quiz-session/all", params={"userId": user_id}, fallback="Failed to fetch analytics"
        )
        return SessionHistory(
            hosted=[QuizSession.from_dict(s) for s in data.get("hostedSessions") or []],
            participated=[QuizSession.from_dict(s) for s in data.get("participatedSessions") or []],
            feedback=[Feedback.from_dict(f) for f in data.get("feedback") or []],
        )

    # --- Scheduling & invitations ---

    def schedule_quiz(self, quiz_id: str, user_id: str, schedule_time: datetime) -> dict[str, Any]:
        data = self._request(
            "POST",
            f"/api/schedule/create/{quiz_id}",
            json={"userId": user_id, "scheduleTime": schedule_time.isoformat()},
            fallback="Failed to schedule quiz",
        )
        return dict(data.get("quizSchedule") or {})

    def invite_to_session(
        self,
        session_id: str,
        invite_link: str,
        quiz_title: str,
        invitee_email: str | None = None,
        invitee_ids: list[str] | None = None,
    ) -> None:
        if invitee_email:
            method = "email"
        elif invitee_ids:
            method = "userId"
        else:
            raise QuizValidationError("Please enter an email address or select at least one user")
        self._request(
            "POST",
            "/api/schedule/session/invite",
            json={
                "sessionId": session_id,
                "inviteeEmail": invitee_email if method == "email" else None,
                "inviteeIds": invitee_ids if method == "userId" else [],
                "inviteLink": invite_link,
                "quizTitle": quiz_title,
                "inviteMethod": method,
            },
            fallback="Failed to send invitation",
        )

    # --- Feedback ---

    def submit_feedback(self, session_id: str, user_id: str, rating: int, comment: str = "") -> dict[str, Any]:
        if not MIN_RATING <= rating <= MAX_RATING:
            raise QuizValidationError("Please provide a rating before submitting.")
        return self._request(
            "POST",
            "/api/feedback/create",
            json={"quizSessionId": session_id, "userId": user_id, "rating": rating, "comment": comment},
            fallback="Failed to submit feedback",
        )

    # --- Transport ---

    def _request(
        self,
        method: str,
        path: str,
        *,
        fallback: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            resp = self._http.request(method, url, params=params, json=json, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise ApiError(fallback, kind=ErrorKind.NETWORK) from exc

        if not resp.ok:
            message = _server_error_message(resp) or fallback
            logger.warning("%s %s -> %s: %s", method, path, resp.status_code, message)
            raise ApiError(message, status_code=resp.status_code)

        if not resp.content:
            return {}
        try:
            body = resp.json()
        except ValueError as exc:
            raise ApiError(fallback, status_code=resp.status_code) from exc
        return body if isinstance(body, dict) else {"data": body}


def _server_error_message(resp: requests.Response) -> str | None:
    try:
        body = resp.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("error") or body.get("message")
        return str(message) if message else None
    return None
