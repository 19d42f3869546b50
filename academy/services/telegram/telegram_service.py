"""
Telegram bot query quota.

Starter members get a fixed number of bot questions per 24 hours;
academy and elite members are unlimited.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from common.database.rest_client import RestClient
from academy.schemas.records import Profile
from academy.tiers import Tier

logger = logging.getLogger(__name__)

RESET_WINDOW = timedelta(hours=24)


class TelegramService:
    """Counts bot questions against the daily quota."""

    def __init__(self, client: RestClient, starter_daily_limit: int = 10):
        self._client = client
        self._limits = {
            Tier.STARTER: starter_daily_limit,
            Tier.ACADEMY: None,
            Tier.ELITE: None,
        }

    def daily_limit(self, tier: Tier) -> Optional[int]:
        """Questions per window for a tier; None means unlimited."""
        return self._limits[tier]

    async def check_rate_limit(self, user_id: str, now: Optional[datetime] = None) -> bool:
        """
        Count one question and report whether it is allowed.

        The counter restarts at 1 once 24 hours have passed since the last
        reset. Users without a profile are never allowed.

        Args:
            user_id: Asking user
            now: Reference time (defaults to the current UTC time)

        Returns:
            True if the question may be answered
        """
        now = now or datetime.now(timezone.utc)

        row = await (
            self._client.table("profiles")
            .select("id, email, tier, telegram_queries_today, telegram_queries_reset_at")
            .eq("id", user_id)
            .maybe_single()
        )
        if not row:
            logger.warning(f"Telegram query from user {user_id} without profile")
            return False

        profile = Profile.model_validate(row)
        last_reset = profile.telegram_queries_reset_at
        if last_reset is not None and last_reset.tzinfo is None:
            last_reset = last_reset.replace(tzinfo=timezone.utc)

        if last_reset is None or now - last_reset >= RESET_WINDOW:
            await (
                self._client.table("profiles")
                .update({"telegram_queries_today": 1, "telegram_queries_reset_at": now.isoformat()})
                .eq("id", user_id)
                .execute()
            )
            return True

        limit = self.daily_limit(profile.tier_enum)
        if limit is not None and profile.telegram_queries_today >= limit:
            logger.info(f"Telegram quota reached for user {user_id}")
            return False

        await (
            self._client.table("profiles")
            .update({"telegram_queries_today": profile.telegram_queries_today + 1})
            .eq("id", user_id)
            .execute()
        )
        return True
