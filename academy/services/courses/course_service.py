"""
Course catalogue service.

Published courses with their category, course details with modules and
lessons, and title/description search.
"""

import logging
from typing import List, Optional

from common.database.rest_client import RecordNotFoundError, RestClient
from academy.schemas.records import Course, CourseDetails, CourseModule, Lesson
from academy.tiers import TierLike, has_tier_access

logger = logging.getLogger(__name__)

COURSE_WITH_CATEGORY = "*, category:course_categories(name, slug, icon)"
SEARCH_LIMIT = 20


class CourseService:
    """Read access to the course catalogue."""

    def __init__(self, client: RestClient):
        self._client = client

    async def get_courses(self, tier: TierLike = None) -> List[Course]:
        """
        Published courses in catalogue order.

        Args:
            tier: When given, only courses this tier may open are returned

        Returns:
            List of courses with their category
        """
        rows = await (
            self._client.table("courses")
            .select(COURSE_WITH_CATEGORY)
            .eq("is_published", True)
            .order("order_index")
            .execute()
        )
        courses = [Course.model_validate(row) for row in rows]

        if tier:
            courses = [c for c in courses if has_tier_access(tier, c.tier_required)]

        return courses

    async def get_course(self, course_id: str) -> Optional[Course]:
        """A published course by id, None when there is none."""
        row = await (
            self._client.table("courses")
            .select("*")
            .eq("id", course_id)
            .eq("is_published", True)
            .maybe_single()
        )
        return Course.model_validate(row) if row else None

    async def get_course_details(self, slug: str) -> Optional[CourseDetails]:
        """
        A published course with its published modules and lessons.

        Modules and lessons are ordered by order_index. Returns None when no
        published course has the slug.
        """
        try:
            row = await (
                self._client.table("courses")
                .select(COURSE_WITH_CATEGORY)
                .eq("slug", slug)
                .eq("is_published", True)
                .single()
            )
        except RecordNotFoundError:
            return None

        course = CourseDetails.model_validate(row)

        module_rows = await (
            self._client.table("course_modules")
            .select("*")
            .eq("course_id", course.id)
            .eq("is_published", True)
            .order("order_index")
            .execute()
        )

        modules = []
        for module_row in module_rows:
            module = CourseModule.model_validate(module_row)
            lesson_rows = await (
                self._client.table("lessons")
                .select("*")
                .eq("module_id", module.id)
                .eq("is_published", True)
                .order("order_index")
                .execute()
            )
            module.lessons = [Lesson.model_validate(r) for r in lesson_rows]
            modules.append(module)

        course.modules = modules
        return course

    async def search_courses(self, query: str) -> List[Course]:
        """Published courses whose title or description contains the query."""
        rows = await (
            self._client.table("courses")
            .select("*")
            .eq("is_published", True)
            .ilike_any(("title", "description"), query)
            .limit(SEARCH_LIMIT)
            .execute()
        )
        return [Course.model_validate(row) for row in rows]
