"""
Profile, dashboard and preferences API endpoints.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from common.utils import NotFoundException, success_response

from academy.access_gate import AuthState
from academy.dependencies import (
    get_preferences_service,
    get_profile_service,
    require_member,
)
from academy.schemas.profile import LinkTelegramRequest, PreferencesRequest, UpdateProfileRequest


router = APIRouter(tags=["Profile"])


@router.get("/profile")
async def get_profile(state: Annotated[AuthState, Depends(require_member)]):
    if state.profile is None:
        raise NotFoundException("Profile not found", code="PROFILE_NOT_FOUND")
    return success_response(state.profile)


@router.patch("/profile")
async def update_profile(
    body: UpdateProfileRequest,
    state: Annotated[AuthState, Depends(require_member)],
):
    service = get_profile_service()
    profile = await service.update_profile(state.user["user_id"], body.model_dump(exclude_none=True))
    return success_response(profile, message="Profil aktualisiert")


@router.post("/profile/telegram")
async def link_telegram(
    body: LinkTelegramRequest,
    state: Annotated[AuthState, Depends(require_member)],
):
    service = get_profile_service()
    profile = await service.link_telegram(state.user["user_id"], body.telegramUserId)
    return success_response(profile)


@router.get("/dashboard")
async def get_dashboard(state: Annotated[AuthState, Depends(require_member)]):
    """Enrollment stats for the dashboard header."""
    service = get_profile_service()
    stats = await service.get_dashboard_stats(state.user["user_id"])
    return success_response(stats)


@router.get("/preferences")
async def get_preferences(state: Annotated[AuthState, Depends(require_member)]):
    service = get_preferences_service()
    preferences = await service.get_preferences(state.user["user_id"])
    return success_response(preferences)


@router.put("/preferences")
async def save_preferences(
    body: PreferencesRequest,
    state: Annotated[AuthState, Depends(require_member)],
):
    service = get_preferences_service()
    preferences = await service.save_preferences(
        state.user["user_id"],
        email_notifications=body.emailNotifications,
        telegram_notifications=body.telegramNotifications,
        weekly_report=body.weeklyReport,
    )
    return success_response(preferences, message="Einstellungen gespeichert")
