"""
Notification services.

Handles in-app notification retrieval and read state.
"""

from academy.services.notifications.notification_service import NotificationService

__all__ = ["NotificationService"]
