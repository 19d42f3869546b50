"""
Subscription tiers and their fixed total order.

starter < academy < elite. Ranks are explicit integers so that adding or
reordering enum members can never silently change who sees what.
"""

import logging
from enum import Enum
from typing import Optional, Tuple, Union

logger = logging.getLogger(__name__)


class Tier(str, Enum):
    """Subscription level gating content access."""

    STARTER = "starter"
    ACADEMY = "academy"
    ELITE = "elite"

    @property
    def rank(self) -> int:
        return TIER_RANKS[self]


TIER_RANKS = {
    Tier.STARTER: 0,
    Tier.ACADEMY: 1,
    Tier.ELITE: 2,
}

TierLike = Union[Tier, str, None]


def parse_tier(value: TierLike) -> Tier:
    """
    Coerce a tier value coming from the backend.

    Missing or unrecognised values fall back to starter.
    """
    if isinstance(value, Tier):
        return value
    if value is None:
        return Tier.STARTER
    try:
        return Tier(value)
    except ValueError:
        logger.warning(f"Unknown tier {value!r}, treating as starter")
        return Tier.STARTER


def tier_rank(value: TierLike) -> int:
    return TIER_RANKS[parse_tier(value)]


def has_tier_access(user_tier: TierLike, required_tier: TierLike) -> bool:
    """True iff the user's rank is at least the required rank."""
    return tier_rank(user_tier) >= tier_rank(required_tier)


def visible_session_tiers(user_tier: TierLike) -> Tuple[str, ...]:
    """
    Live-session tiers listed for a user.

    Elite members see elite sessions on top of academy ones; every other
    tier is shown the academy schedule.
    """
    if parse_tier(user_tier) is Tier.ELITE:
        return (Tier.ACADEMY.value, Tier.ELITE.value)
    return (Tier.ACADEMY.value,)


def optional_tier(value: Optional[str]) -> Optional[Tier]:
    """Parse a query/config value where absence means "no requirement"."""
    if value is None or value == "":
        return None
    return parse_tier(value)
