"""
Enrollment service.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from common.database.rest_client import DuplicateRecordError, RestClient
from common.utils.exceptions import ConflictException
from academy.schemas.records import Enrollment

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Handles course enrollments."""

    def __init__(self, client: RestClient):
        self._client = client

    async def enroll_course(self, user_id: str, course_id: str) -> Enrollment:
        """
        Enroll a user in a course.

        Raises:
            ConflictException: User is already enrolled
        """
        try:
            row = await (
                self._client.table("enrollments")
                .insert({
                    "user_id": user_id,
                    "course_id": course_id,
                    "started_at": datetime.now(timezone.utc).isoformat(),
                })
                .single()
            )
        except DuplicateRecordError:
            raise ConflictException("Already enrolled in this course", code="ALREADY_ENROLLED")

        logger.info(f"User {user_id} enrolled in course {course_id}")
        return Enrollment.model_validate(row)

    async def get_user_enrollments(self, user_id: str) -> List[Enrollment]:
        """The user's enrollments with their course, newest first."""
        rows = await (
            self._client.table("enrollments")
            .select("*, course:courses(*)")
            .eq("user_id", user_id)
            .order("enrolled_at", ascending=False)
            .execute()
        )
        return [Enrollment.model_validate(row) for row in rows]

    async def get_enrollment(self, user_id: str, course_id: str) -> Optional[Enrollment]:
        row = await (
            self._client.table("enrollments")
            .select("*")
            .eq("user_id", user_id)
            .eq("course_id", course_id)
            .maybe_single()
        )
        return Enrollment.model_validate(row) if row else None

    async def is_enrolled(self, user_id: str, course_id: str) -> bool:
        row = await (
            self._client.table("enrollments")
            .select("id")
            .eq("user_id", user_id)
            .eq("course_id", course_id)
            .maybe_single()
        )
        return row is not None

    async def get_or_create_enrollment(self, user_id: str, course_id: str) -> Enrollment:
        """Existing enrollment for the course, enrolling the user when there is none."""
        enrollment = await self.get_enrollment(user_id, course_id)
        if enrollment:
            return enrollment
        return await self.enroll_course(user_id, course_id)
