"""
Notification service for in-app notifications.

Handles retrieval and read state of user notifications.
"""

import logging
from datetime import datetime, timezone
from typing import List

from common.database.rest_client import RecordNotFoundError, RestClient
from common.utils.exceptions import NotFoundException
from academy.schemas.records import Notification

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Handles in-app notification management.

    Notification types:
    - course_update: A course the user is enrolled in changed
    - new_lesson: A lesson was published
    - live_session: A live session is coming up
    - achievement: The user reached a milestone
    - payment: Subscription or payment event
    - system: Anything else
    """

    def __init__(self, client: RestClient):
        """
        Initialize NotificationService.

        Args:
            client: Hosted backend client
        """
        self._client = client

    async def get_notifications(self, user_id: str, limit: int = 20) -> List[Notification]:
        """
        Get a user's most recent notifications.

        Args:
            user_id: User ID
            limit: Maximum number of notifications to return

        Returns:
            Notifications, newest first
        """
        rows = await (
            self._client.table("notifications")
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", ascending=False)
            .limit(limit)
            .execute()
        )
        return [Notification.model_validate(row) for row in rows]

    async def mark_as_read(self, user_id: str, notification_id: str) -> Notification:
        """
        Mark a notification as read.

        Args:
            user_id: Owner of the notification
            notification_id: Notification ID

        Raises:
            NotFoundException: If notification not found or not owned by user
        """
        try:
            row = await (
                self._client.table("notifications")
                .update({"is_read": True, "read_at": datetime.now(timezone.utc).isoformat()})
                .eq("id", notification_id)
                .eq("user_id", user_id)
                .single()
            )
        except RecordNotFoundError:
            raise NotFoundException("Notification not found", code="NOTIFICATION_NOT_FOUND")

        logger.debug(f"Marked notification {notification_id} as read")
        return Notification.model_validate(row)

    async def get_unread_count(self, user_id: str) -> int:
        return await (
            self._client.table("notifications")
            .select("id")
            .eq("user_id", user_id)
            .eq("is_read", False)
            .count()
        )
