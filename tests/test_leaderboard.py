from __future__ import annotations

from quizlive.core.models import LeaderboardEntry, Question, QuestionType
from quizlive.core.services.leaderboard import (
    LeaderboardSnapshot,
    accuracy_bands,
    answer_distribution,
    average_score,
    rank_entries,
    toughest_questions,
)


class TestRanking:
    def test_score_then_accuracy_then_fastest(self):
        entries = [
            LeaderboardEntry(user_id="slow", score=10, accuracy=50, average_time=9),
            LeaderboardEntry(user_id="fast", score=10, accuracy=50, average_time=3),
            LeaderboardEntry(user_id="accurate", score=10, accuracy=90, average_time=20),
            LeaderboardEntry(user_id="top", score=30, accuracy=10, average_time=30),
        ]

        assert [e.user_id for e in rank_entries(entries)] == ["top", "accurate", "fast", "slow"]

    def test_snapshot_accepts_a_list_and_limits(self):
        snapshot = LeaderboardSnapshot.from_payload(
            [{"userId": "a", "score": 1}, {"userId": "b", "score": 3}, "junk"], question_index=2
        )

        assert [e.user_id for e in snapshot.ranked(1)] == ["b"]
        assert len(snapshot.players) == 2
        assert snapshot.question_index == 2

    def test_average_score_of_nobody(self):
        assert average_score([]) == 0.0


class TestAnswerDistribution:
    def test_true_false_has_two_buckets(self):
        question = Question(question="Sky is blue?", type=QuestionType.TRUE_FALSE, correct_answer=True)

        stats = answer_distribution(
            question, [{"selectedAnswer": True}, {"selectedAnswer": True}, {"selectedAnswer": False}, {}]
        )

        assert [(s.count, s.percentage) for s in stats] == [(2, 50), (1, 25)]

    def test_booleans_do_not_count_as_option_indexes(self):
        question = Question(question="Pick", options=["a", "b"], correct_answer=1)

        stats = answer_distribution(question, [{"selectedAnswer": True}, {"selectedAnswer": 1}])

        assert [s.count for s in stats] == [0, 1]

    def test_no_answers(self):
        question = Question(question="Pick", options=["a", "b"], correct_answer=0)

        assert [(s.count, s.percentage) for s in answer_distribution(question, [])] == [(0, 0), (0, 0)]

    def test_no_question(self):
        assert answer_distribution(None, [{"selectedAnswer": 0}]) == []


class TestResultsSummaries:
    def test_accuracy_bands(self):
        entries = [LeaderboardEntry(user_id=str(a), accuracy=a) for a in (95, 90, 75, 55, 10)]

        assert accuracy_bands(entries) == {"90-100%": 2, "70-89%": 1, "50-69%": 1, "<50%": 1}

    def test_toughest_questions_come_first(self):
        questions = [Question(question="easy"), Question(question="hard")]
        entries = [
            LeaderboardEntry(user_id="a", question_stats=[{"isCorrect": True}, {"isCorrect": False}]),
            LeaderboardEntry(user_id="b", question_stats=[{"isCorrect": True}, {"isCorrect": True}]),
        ]

        summaries = toughest_questions(questions, entries, limit=1)

        assert [(s.question, s.accuracy) for s in summaries] == [("hard", 50.0)]
