"""
Course quiz service.

Loads quizzes and records attempts. Percentages are rounded half up, and
an attempt passes at or above the quiz's passing score.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, Optional

from common.database.rest_client import RecordNotFoundError, RestClient
from academy.schemas.records import Quiz, QuizAttempt

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def score_percentage(score: int, total_points: int) -> int:
    """score/total as a whole percentage; 0 when the quiz has no points."""
    if total_points <= 0:
        return 0
    return round_half_up(score / total_points * 100)


class QuizService:
    """Course quizzes and attempts."""

    def __init__(self, client: RestClient, default_passing_score: int = 70):
        self._client = client
        self._default_passing_score = default_passing_score

    async def get_quiz(self, quiz_id: str) -> Optional[Quiz]:
        """Quiz with its questions, or None when it does not exist."""
        try:
            row = await (
                self._client.table("quizzes")
                .select("*, questions:quiz_questions(*)")
                .eq("id", quiz_id)
                .single()
            )
        except RecordNotFoundError:
            return None
        quiz = Quiz.model_validate(row)
        quiz.questions.sort(key=lambda q: q.order_index)
        return quiz

    async def _next_attempt_number(self, user_id: str, quiz_id: str) -> int:
        rows = await (
            self._client.table("quiz_attempts")
            .select("attempt_number")
            .eq("user_id", user_id)
            .eq("quiz_id", quiz_id)
            .order("attempt_number", ascending=False)
            .limit(1)
            .execute()
        )
        return rows[0]["attempt_number"] + 1 if rows else 1

    async def _passing_score(self, quiz_id: str) -> int:
        row = await (
            self._client.table("quizzes").select("passing_score").eq("id", quiz_id).maybe_single()
        )
        if row and row.get("passing_score"):
            return row["passing_score"]
        return self._default_passing_score

    async def submit_quiz_attempt(
        self,
        user_id: str,
        quiz_id: str,
        answers: Dict[str, Any],
        score: int,
        total_points: int,
        time_taken: Optional[int] = None,
    ) -> QuizAttempt:
        """
        Record a quiz attempt.

        Args:
            user_id: Learner
            quiz_id: Quiz taken
            answers: Answer per question id
            score: Points scored
            total_points: Points available
            time_taken: Seconds spent

        Returns:
            The stored attempt with attempt number, percentage and pass flag
        """
        attempt_number = await self._next_attempt_number(user_id, quiz_id)
        percentage = score_percentage(score, total_points)
        passed = percentage >= await self._passing_score(quiz_id)

        row = await (
            self._client.table("quiz_attempts")
            .insert({
                "user_id": user_id,
                "quiz_id": quiz_id,
                "score": score,
                "total_points": total_points,
                "percentage": percentage,
                "passed": passed,
                "answers": answers,
                "time_taken_seconds": time_taken,
                "attempt_number": attempt_number,
            })
            .single()
        )

        logger.info(
            f"Quiz attempt {attempt_number} by user {user_id} on {quiz_id}: "
            f"{percentage}% ({'passed' if passed else 'failed'})"
        )
        return QuizAttempt.model_validate(row)
