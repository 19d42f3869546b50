"""
5-day challenge API endpoints.
"""

from fastapi import APIRouter, Query

from common.utils import success_response

from academy.dependencies import get_challenge_service
from academy.schemas.challenge import (
    ChallengeDayRequest,
    ChallengeProgressResponse,
    ChallengeRegistrationRequest,
)
from academy.schemas.records import ChallengeRegistration


router = APIRouter(prefix="/challenge", tags=["Challenge"])


def _progress(registration: ChallengeRegistration) -> dict:
    return ChallengeProgressResponse(
        email=registration.email,
        currentDay=registration.current_day,
        completedDays=registration.completed_days,
    ).model_dump()


@router.post("/register")
async def register(body: ChallengeRegistrationRequest):
    """
    Join the challenge.

    Registering the same email again returns the existing progress.
    """
    service = get_challenge_service()
    registration = await service.register(body.fullName, body.email)
    return success_response(_progress(registration), message="Registrierung erfolgreich")


@router.get("/progress")
async def get_progress(email: str = Query(..., min_length=3)):
    service = get_challenge_service()
    registration = await service.get_progress(email.strip().lower())
    return success_response(_progress(registration))


@router.post("/complete-day")
async def complete_day(body: ChallengeDayRequest):
    service = get_challenge_service()
    registration = await service.mark_day_complete(body.email, body.day)
    return success_response(_progress(registration))


@router.post("/go-to-day")
async def go_to_day(body: ChallengeDayRequest):
    service = get_challenge_service()
    registration = await service.go_to_day(body.email, body.day)
    return success_response(_progress(registration))
