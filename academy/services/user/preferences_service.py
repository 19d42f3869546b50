"""
Notification preferences service.
"""

import logging
from datetime import datetime, timezone

from common.database.rest_client import RestClient
from academy.schemas.records import UserPreferences

logger = logging.getLogger(__name__)


class PreferencesService:
    """Reads and saves rows of `user_preferences`."""

    def __init__(self, client: RestClient):
        self._client = client

    async def get_preferences(self, user_id: str) -> UserPreferences:
        """Saved preferences, or the defaults (everything on) when none are stored."""
        row = await (
            self._client.table("user_preferences").select("*").eq("user_id", user_id).maybe_single()
        )
        if not row:
            return UserPreferences(user_id=user_id)
        return UserPreferences.model_validate(row)

    async def save_preferences(
        self,
        user_id: str,
        email_notifications: bool,
        telegram_notifications: bool,
        weekly_report: bool,
    ) -> UserPreferences:
        row = await (
            self._client.table("user_preferences")
            .upsert(
                {
                    "user_id": user_id,
                    "email_notifications": email_notifications,
                    "telegram_notifications": telegram_notifications,
                    "weekly_report": weekly_report,
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                },
                on_conflict="user_id",
            )
            .single()
        )
        logger.info(f"Saved notification preferences for user {user_id}")
        return UserPreferences.model_validate(row)
