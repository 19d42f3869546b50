"""
Lesson progress service.

A video lesson counts as completed once 90% of it has been watched.
"""

import logging
from datetime import datetime, timezone

from common.database.rest_client import RestClient
from academy.schemas.records import LessonProgress

logger = logging.getLogger(__name__)

COMPLETION_THRESHOLD = 0.9


def progress_status(watched_seconds: int, total_seconds: int, threshold: float = COMPLETION_THRESHOLD) -> str:
    """completed when watched >= threshold * total, else in_progress."""
    if watched_seconds >= total_seconds * threshold:
        return "completed"
    return "in_progress"


class ProgressService:
    """Tracks per-lesson progress of a learner."""

    def __init__(self, client: RestClient, completion_threshold: float = COMPLETION_THRESHOLD):
        self._client = client
        self._threshold = completion_threshold

    async def get_lesson_progress(self, user_id: str, lesson_id: str) -> LessonProgress:
        """Stored progress, or a not_started record when the lesson was never opened."""
        row = await (
            self._client.table("lesson_progress")
            .select("*")
            .eq("user_id", user_id)
            .eq("lesson_id", lesson_id)
            .maybe_single()
        )
        if not row:
            return LessonProgress(user_id=user_id, lesson_id=lesson_id)
        return LessonProgress.model_validate(row)

    async def update_video_progress(
        self,
        user_id: str,
        lesson_id: str,
        enrollment_id: str,
        watched_seconds: int,
        total_seconds: int,
        last_position: int,
    ) -> LessonProgress:
        """
        Record how far a video was watched.

        Args:
            user_id: Learner
            lesson_id: Video lesson
            enrollment_id: Enrollment the lesson belongs to
            watched_seconds: Seconds watched so far
            total_seconds: Length of the video
            last_position: Playback position to resume from

        Returns:
            The stored progress row
        """
        status = progress_status(watched_seconds, total_seconds, self._threshold)

        row = await (
            self._client.table("lesson_progress")
            .upsert(
                {
                    "user_id": user_id,
                    "lesson_id": lesson_id,
                    "enrollment_id": enrollment_id,
                    "watched_seconds": watched_seconds,
                    "total_seconds": total_seconds,
                    "last_position_seconds": last_position,
                    "status": status,
                    "completed_at": datetime.now(timezone.utc).isoformat() if status == "completed" else None,
                },
                on_conflict="user_id,lesson_id",
            )
            .single()
        )

        logger.debug(f"Progress {status} for user {user_id} lesson {lesson_id}")
        return LessonProgress.model_validate(row)

    async def mark_lesson_complete(self, user_id: str, lesson_id: str, enrollment_id: str) -> LessonProgress:
        row = await (
            self._client.table("lesson_progress")
            .upsert(
                {
                    "user_id": user_id,
                    "lesson_id": lesson_id,
                    "enrollment_id": enrollment_id,
                    "status": "completed",
                    "completed_at": datetime.now(timezone.utc).isoformat(),
                },
                on_conflict="user_id,lesson_id",
            )
            .single()
        )
        logger.info(f"User {user_id} completed lesson {lesson_id}")
        return LessonProgress.model_validate(row)
