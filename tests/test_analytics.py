from __future__ import annotations

from quizlive.core.models import Feedback, QuizSession
from quizlive.core.services.analytics import ALL, SessionAnalytics, SessionFilter, SortField, paginate
from quizlive.core.services.api_client import SessionHistory


def _session(
    session_id: str,
    title: str,
    *,
    quiz_id: str | None = None,
    subject: str = "Math",
    difficulty: str = "beginner",
    created: str = "2024-03-05T10:00:00Z",
    participants: list[dict] | None = None,
) -> QuizSession:
    return QuizSession.from_dict(
        {
            "_id": session_id,
            "code": session_id.upper(),
            "status": "ended",
            "createdAt": created,
            "quizId": {
                "_id": quiz_id or f"quiz-{session_id}",
                "title": title,
                "subject": subject,
                "difficulty": difficulty,
                "questions": [
                    {"_id": "q1", "question": "1+1?", "type": "multiple-choice", "options": ["1", "2"], "correctAnswer": 1},
                    {"_id": "q2", "question": "True?", "type": "true-false", "correctAnswer": True},
                ],
            },
            "participants": participants or [],
        }
    )


def _me(score: float, answers: list[dict] | None = None) -> dict:
    return {"userId": "me", "name": "Me", "score": score, "answers": answers or []}


class TestSessionAnalytics:
    def setup_method(self):
        self.hosted = [
            _session("h1", "Algebra", quiz_id="quiz-a", difficulty="advanced", created="2024-01-10T09:00:00Z"),
            _session("h2", "Biology", subject="Science", created="2024-01-20T09:00:00Z"),
        ]
        self.participated = [
            _session(
                "p1",
                "Algebra",
                quiz_id="quiz-a",
                created="2024-02-01T09:00:00Z",
                participants=[
                    _me(80, [{"questionId": "q1", "isCorrect": True}, {"questionId": "q2", "isCorrect": False}]),
                ],
            ),
            _session(
                "p2",
                "Cells",
                subject="Science",
                created="2024-01-15T09:00:00Z",
                participants=[_me(45, [{"questionId": "q1", "isCorrect": True}])],
            ),
        ]
        self.analytics = SessionAnalytics(
            SessionHistory(
                hosted=self.hosted,
                participated=self.participated,
                feedback=[
                    Feedback(quiz_session_id="h1", user_id="x", rating=5),
                    Feedback(quiz_session_id="h1", user_id="y", rating=4),
                    Feedback(quiz_session_id="h2", user_id="z", rating=4),
                    Feedback(quiz_session_id="h2", user_id="w", rating=9),
                ],
            ),
            user_id="me",
        )

    def test_totals(self):
        assert self.analytics.total_sessions() == 4
        assert self.analytics.total_quizzes() == 3

    def test_rating_average_and_distribution(self):
        assert self.analytics.average_rating() == 5.5
        assert self.analytics.rating_distribution() == [0, 0, 0, 2, 1]

    def test_no_feedback_means_no_average(self):
        analytics = SessionAnalytics(SessionHistory(), user_id="me")

        assert analytics.average_rating() is None
        assert analytics.average_score() == 0.0

    def test_sessions_per_month(self):
        months = self.analytics.sessions_per_month()

        assert months["hosted"][0] == 2
        assert months["participated"][:2] == [1, 1]

    def test_difficulty_distribution(self):
        assert self.analytics.difficulty_distribution() == {"beginner": 3, "intermediate": 0, "advanced": 1}

    def test_average_score_and_trend(self):
        assert self.analytics.average_score() == 62.5
        assert [score for _, score in self.analytics.score_trend()] == [45, 80]

    def test_subject_accuracy(self):
        accuracy = self.analytics.subject_accuracy()

        assert accuracy["Math"].percentage == 50.0
        assert accuracy["Science"].percentage == 100.0

    def test_question_type_accuracy(self):
        accuracy = self.analytics.question_type_accuracy()

        assert accuracy["multiple-choice"].correct == 2
        assert accuracy["true-false"].total == 1

    def test_subjects_start_with_all(self):
        assert self.analytics.subjects() == [ALL, "Math", "Science"]

    def test_browse_filters_and_sorts(self):
        page = self.analytics.browse(
            hosted=True, criteria=SessionFilter(subject="Science", sort_by=SortField.TITLE, descending=False)
        )

        assert [s.id for s in page.items] == ["h2"]

    def test_browse_sorts_newest_first_by_default(self):
        page = self.analytics.browse(hosted=False, criteria=SessionFilter())

        assert [s.id for s in page.items] == ["p1", "p2"]

    def test_search_is_case_insensitive(self):
        page = self.analytics.browse(hosted=True, criteria=SessionFilter(search="alg"))

        assert [s.id for s in page.items] == ["h1"]


class TestPaginate:
    def test_six_per_page(self):
        sessions = [_session(f"s{i}", f"Quiz {i}") for i in range(7)]

        first = paginate(sessions, 1)
        second = paginate(sessions, 2)

        assert first.total_pages == 2
        assert len(first.items) == 6
        assert [s.id for s in second.items] == ["s6"]

    def test_empty(self):
        page = paginate([], 1)

        assert page.items == []
        assert page.total_pages == 0
