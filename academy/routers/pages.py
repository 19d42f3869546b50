"""
Guarded learner pages under /academy.

Each page runs the access gate first. A caller who may not see the page
gets the gate's response (loading placeholder, login redirect carrying the
requested path, or pricing redirect); everyone else gets the page payload.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from common.utils import success_response

from academy.access_gate import AccessDecision, AuthState, page_response
from academy.dependencies import (
    get_auth_state,
    get_bot_service,
    get_community_service,
    get_course_service,
    get_enrollment_service,
    get_live_session_service,
    get_preferences_service,
    get_profile_service,
    page_gate,
)
from academy.site.content import PLAN_COMPARISON, PRICING_TIERS
from academy.site.presentation import format_duration
from academy.tiers import Tier

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/academy", tags=["Pages"])


def _page(name: str, data=None):
    return success_response({"page": name, **(data or {})})


# =============================================================================
# Public pages
# =============================================================================

@router.get("/login")
async def login_page():
    return _page("login")


@router.get("/register")
async def register_page():
    return _page("register")


@router.get("/pricing")
async def pricing_page():
    return _page("pricing", {"tiers": PRICING_TIERS, "comparison": PLAN_COMPARISON})


# =============================================================================
# Signed-in pages
# =============================================================================

@router.get("/dashboard")
async def dashboard_page(
    decision: Annotated[AccessDecision, Depends(page_gate())],
    state: Annotated[AuthState, Depends(get_auth_state)],
):
    denied = page_response(decision)
    if denied is not None:
        return denied

    user_id = state.user["user_id"]
    stats = await get_profile_service().get_dashboard_stats(user_id)
    enrollments = await get_enrollment_service().get_user_enrollments(user_id)
    return _page("dashboard", {"profile": state.profile, "stats": stats, "enrollments": enrollments})


@router.get("/courses")
async def courses_page(
    decision: Annotated[AccessDecision, Depends(page_gate())],
    state: Annotated[AuthState, Depends(get_auth_state)],
):
    denied = page_response(decision)
    if denied is not None:
        return denied

    tier = state.profile_tier if state.profile is not None else None
    courses = await get_course_service().get_courses(tier)
    return _page("courses", {
        "courses": [
            {
                **course.model_dump(mode="json"),
                "durationLabel": format_duration(course.duration_minutes * 60) if course.duration_minutes else None,
            }
            for course in courses
        ],
    })


@router.get("/settings")
async def settings_page(
    decision: Annotated[AccessDecision, Depends(page_gate())],
    state: Annotated[AuthState, Depends(get_auth_state)],
):
    denied = page_response(decision)
    if denied is not None:
        return denied

    user_id = state.user["user_id"]
    profile = state.profile or await get_profile_service().get_profile(user_id)
    preferences = await get_preferences_service().get_preferences(user_id)
    return _page("settings", {"profile": profile, "preferences": preferences})


@router.get("/bot")
async def bot_page(
    decision: Annotated[AccessDecision, Depends(page_gate(Tier.ELITE))],
    state: Annotated[AuthState, Depends(get_auth_state)],
):
    """Trading bot download page, elite only."""
    denied = page_response(decision)
    if denied is not None:
        return denied

    licenses = await get_bot_service().get_user_bot_licenses(state.user["user_id"])
    return _page("bot", {"licenses": licenses})


@router.get("/telegram")
async def telegram_page(
    decision: Annotated[AccessDecision, Depends(page_gate())],
    state: Annotated[AuthState, Depends(get_auth_state)],
):
    denied = page_response(decision)
    if denied is not None:
        return denied

    linked = bool(state.profile and state.profile.telegram_user_id)
    return _page("telegram", {"linked": linked})


# =============================================================================
# Academy pages
# =============================================================================

@router.get("/community")
async def community_page(
    decision: Annotated[AccessDecision, Depends(page_gate(Tier.ACADEMY))],
):
    denied = page_response(decision)
    if denied is not None:
        return denied

    posts = await get_community_service().get_posts()
    return _page("community", {"posts": posts})


@router.get("/sessions")
async def sessions_page(
    decision: Annotated[AccessDecision, Depends(page_gate(Tier.ACADEMY))],
    state: Annotated[AuthState, Depends(get_auth_state)],
):
    denied = page_response(decision)
    if denied is not None:
        return denied

    sessions = await get_live_session_service().get_upcoming_sessions(state.profile_tier)
    return _page("sessions", {"sessions": sessions})
