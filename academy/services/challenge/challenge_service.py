"""
5-day challenge service.

Registrations are keyed by the lowercased email; no account is needed.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from common.database.rest_client import RestClient
from common.utils.exceptions import NotFoundException
from academy.schemas.challenge import CHALLENGE_DAYS
from academy.schemas.records import ChallengeRegistration

logger = logging.getLogger(__name__)


class ChallengeService:
    """Registration and day-by-day progress of the free challenge."""

    def __init__(self, client: RestClient):
        self._client = client

    async def _find(self, email: str) -> Optional[ChallengeRegistration]:
        row = await (
            self._client.table("challenge_registrations")
            .select("*")
            .eq("email", email.lower())
            .maybe_single()
        )
        return ChallengeRegistration.model_validate(row) if row else None

    async def register(self, full_name: str, email: str) -> ChallengeRegistration:
        """
        Join the challenge.

        Registering an email twice returns the existing registration.

        Args:
            full_name: Participant name (already validated and trimmed)
            email: Participant email

        Returns:
            The registration
        """
        email = email.lower()
        existing = await self._find(email)
        if existing:
            logger.info(f"Challenge registration exists for {email}")
            return existing

        row = await (
            self._client.table("challenge_registrations")
            .insert({"email": email, "full_name": full_name.strip()})
            .single()
        )
        logger.info(f"Challenge registration created for {email}")
        return ChallengeRegistration.model_validate(row)

    async def get_progress(self, email: str) -> ChallengeRegistration:
        """
        Raises:
            NotFoundException: Email is not registered
        """
        registration = await self._find(email)
        if not registration:
            raise NotFoundException("Challenge registration not found", code="CHALLENGE_NOT_REGISTERED")
        return registration

    async def mark_day_complete(self, email: str, day: int) -> ChallengeRegistration:
        """
        Mark a day as done and move on to the next one.

        A day already completed leaves the registration unchanged.
        """
        registration = await self.get_progress(email)
        if day in registration.completed_days:
            return registration

        row = await (
            self._client.table("challenge_registrations")
            .update({
                "completed_days": registration.completed_days + [day],
                "current_day": min(day + 1, CHALLENGE_DAYS),
                "last_accessed_at": datetime.now(timezone.utc).isoformat(),
            })
            .eq("email", registration.email)
            .single()
        )
        logger.info(f"Challenge day {day} completed by {registration.email}")
        return ChallengeRegistration.model_validate(row)

    async def go_to_day(self, email: str, day: int) -> ChallengeRegistration:
        registration = await self.get_progress(email)
        row = await (
            self._client.table("challenge_registrations")
            .update({
                "current_day": day,
                "last_accessed_at": datetime.now(timezone.utc).isoformat(),
            })
            .eq("email", registration.email)
            .single()
        )
        return ChallengeRegistration.model_validate(row)
