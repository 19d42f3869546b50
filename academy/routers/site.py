"""
Marketing site API endpoints.

Static content and presentation state for the public pages.
"""

from typing import Annotated, Any, Dict, Optional

from fastapi import APIRouter, Depends, Query

from common.utils import NotFoundException, list_response, success_response

from academy.dependencies import optional_auth
from academy.site import (
    CHALLENGE_DAYS,
    FOOTER_LINKS,
    NAV_ACTIONS,
    PLAN_COMPARISON,
    PRICING_TIERS,
    SEVEN_STEPS_PLAN,
    SOCIAL_LINKS,
    TEASER_INTERVAL_SECONDS,
    TEASER_LEVELS,
    get_challenge_day,
    navbar_state,
    plan_selection_target,
    rotating_label_index,
)


router = APIRouter(prefix="/site", tags=["Site"])


@router.get("/navigation")
async def get_navigation(
    path: str = Query(default="/"),
    scroll_y: float = Query(default=0, alias="scrollY"),
):
    """Navbar state for the current path and scroll offset."""
    state = navbar_state(scroll_y, path)
    return success_response({**state.model_dump(), "actions": NAV_ACTIONS})


@router.get("/footer")
async def get_footer():
    return success_response({"links": FOOTER_LINKS, "social": SOCIAL_LINKS})


@router.get("/pricing")
async def get_pricing(
    user: Annotated[Optional[Dict[str, Any]], Depends(optional_auth)],
):
    """
    Plans, comparison table and where choosing a plan leads.

    Visitors are sent to registration; members have no checkout yet.
    """
    return success_response({
        "tiers": PRICING_TIERS,
        "comparison": PLAN_COMPARISON,
        "selectPlanHref": plan_selection_target(user),
    })


@router.get("/quiz-teaser")
async def get_quiz_teaser(elapsed: float = Query(default=0, ge=0)):
    """Level label the homepage teaser shows after `elapsed` seconds."""
    index = rotating_label_index(elapsed, len(TEASER_LEVELS), TEASER_INTERVAL_SECONDS)
    return success_response({"levels": TEASER_LEVELS, "current": index})


@router.get("/challenge")
async def get_challenge_programme():
    return success_response({"days": CHALLENGE_DAYS, "sevenSteps": SEVEN_STEPS_PLAN})


@router.get("/challenge/days")
async def list_challenge_days():
    return list_response(CHALLENGE_DAYS)


@router.get("/challenge/days/{day}")
async def get_challenge_day_content(day: int):
    challenge_day = get_challenge_day(day)
    if not challenge_day:
        raise NotFoundException("Challenge day not found", code="CHALLENGE_DAY_NOT_FOUND")
    return success_response(challenge_day)
