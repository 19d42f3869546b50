"""
Profile service.

Reads and updates rows of `profiles` and computes dashboard stats.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from common.database.rest_client import RestClient
from common.utils.exceptions import BadRequestException
from academy.schemas.records import DashboardStats, Enrollment, Profile
from academy.tiers import Tier

logger = logging.getLogger(__name__)


class ProfileService:
    """Handles learner profile operations."""

    # Columns a learner may change on their own profile
    EDITABLE_FIELDS = ("full_name", "avatar_url", "bio", "whatsapp_number")

    def __init__(self, client: RestClient):
        self._client = client

    async def get_profile(self, user_id: str) -> Optional[Profile]:
        """
        Get a user's profile.

        Args:
            user_id: Auth user ID

        Returns:
            Profile or None when the row does not exist
        """
        row = await self._client.table("profiles").select("*").eq("id", user_id).maybe_single()
        return Profile.model_validate(row) if row else None

    async def update_profile(self, user_id: str, updates: Dict[str, Any]) -> Profile:
        """
        Update editable profile fields.

        Raises:
            BadRequestException: No editable field was given
            RecordNotFoundError: Profile does not exist
        """
        values = {key: value for key, value in updates.items() if key in self.EDITABLE_FIELDS}
        if not values:
            raise BadRequestException("No editable fields provided", code="NO_UPDATES")

        values["updated_at"] = datetime.now(timezone.utc).isoformat()
        row = await self._client.table("profiles").update(values).eq("id", user_id).single()

        logger.info(f"Updated profile for user {user_id}: {sorted(values)}")
        return Profile.model_validate(row)

    async def update_tier(self, user_id: str, tier: Tier) -> Profile:
        row = await (
            self._client.table("profiles")
            .update({"tier": tier.value, "updated_at": datetime.now(timezone.utc).isoformat()})
            .eq("id", user_id)
            .single()
        )
        logger.info(f"User {user_id} moved to tier {tier.value}")
        return Profile.model_validate(row)

    async def link_telegram(self, user_id: str, telegram_user_id: int) -> Profile:
        row = await (
            self._client.table("profiles")
            .update({"telegram_user_id": telegram_user_id})
            .eq("id", user_id)
            .single()
        )
        logger.info(f"Linked Telegram account for user {user_id}")
        return Profile.model_validate(row)

    async def get_dashboard_stats(self, user_id: str) -> DashboardStats:
        """
        Compute dashboard stats from the user's enrollments.

        A course counts as completed at 100%. Lesson and quiz counters are
        not tracked yet and stay at zero.
        """
        rows = await (
            self._client.table("enrollments")
            .select("*, course:courses(*)")
            .eq("user_id", user_id)
            .execute()
        )
        enrollments = [Enrollment.model_validate(row) for row in rows]
        profile = await self.get_profile(user_id)

        enrolled = len(enrollments)
        completed = sum(1 for e in enrollments if e.completion_percentage == 100)
        average = (
            sum(e.completion_percentage for e in enrollments) / enrolled if enrolled else 0
        )

        return DashboardStats(
            user_id=user_id,
            tier=profile.tier if profile else Tier.STARTER.value,
            enrolled_courses_count=enrolled,
            completed_courses_count=completed,
            avg_completion_percentage=average,
        )
