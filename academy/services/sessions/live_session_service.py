"""
Live session service.

Lists the upcoming group calls, livestreams and webinars a tier may join
and registers learners for them.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from common.database.rest_client import DuplicateRecordError, RestClient
from common.utils.exceptions import ConflictException
from academy.schemas.records import LiveSession, SessionRegistration
from academy.tiers import TierLike, visible_session_tiers

logger = logging.getLogger(__name__)


class LiveSessionService:
    """Handles live session schedule and registrations."""

    def __init__(self, client: RestClient):
        self._client = client

    async def get_upcoming_sessions(
        self,
        tier: TierLike,
        now: Optional[datetime] = None,
    ) -> List[LiveSession]:
        """
        Scheduled sessions that have not started yet, soonest first.

        Args:
            tier: Caller's tier; decides which session tiers are listed
            now: Reference time (defaults to the current UTC time)
        """
        now = now or datetime.now(timezone.utc)

        rows = await (
            self._client.table("live_sessions")
            .select("*")
            .gte("scheduled_at", now.isoformat())
            .eq("status", "scheduled")
            .in_("tier_required", visible_session_tiers(tier))
            .order("scheduled_at")
            .execute()
        )
        return [LiveSession.model_validate(row) for row in rows]

    async def register_for_session(self, user_id: str, session_id: str) -> SessionRegistration:
        """
        Register a learner for a session.

        Raises:
            ConflictException: Learner is already registered
        """
        try:
            row = await (
                self._client.table("session_registrations")
                .insert({"user_id": user_id, "session_id": session_id})
                .single()
            )
        except DuplicateRecordError:
            raise ConflictException("Already registered for this session", code="ALREADY_REGISTERED")

        logger.info(f"User {user_id} registered for session {session_id}")
        return SessionRegistration.model_validate(row)
