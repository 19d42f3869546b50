"""
Marketing site content and presentation state.
"""

from academy.site.content import (
    CHALLENGE_DAYS,
    FOOTER_LINKS,
    NAV_ACTIONS,
    NAV_LINKS,
    PLAN_COMPARISON,
    PRICING_TIERS,
    SEVEN_STEPS_PLAN,
    SOCIAL_LINKS,
    TEASER_INTERVAL_SECONDS,
    TEASER_LEVELS,
    TESTIMONIAL_INTERVAL_SECONDS,
    get_challenge_day,
)
from academy.site.presentation import (
    NavbarState,
    format_duration,
    navbar_state,
    plan_selection_target,
    rotating_label_index,
)

__all__ = [
    "CHALLENGE_DAYS",
    "FOOTER_LINKS",
    "NAV_ACTIONS",
    "NAV_LINKS",
    "PLAN_COMPARISON",
    "PRICING_TIERS",
    "SEVEN_STEPS_PLAN",
    "SOCIAL_LINKS",
    "TEASER_INTERVAL_SECONDS",
    "TEASER_LEVELS",
    "TESTIMONIAL_INTERVAL_SECONDS",
    "get_challenge_day",
    "NavbarState",
    "format_duration",
    "navbar_state",
    "plan_selection_target",
    "rotating_label_index",
]
