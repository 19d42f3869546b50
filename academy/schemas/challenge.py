"""
Pydantic models for the 5-day challenge request/response validation.
"""

from typing import List

from pydantic import BaseModel, EmailStr, Field, field_validator

CHALLENGE_DAYS = 5


class ChallengeRegistrationRequest(BaseModel):
    """Request body for joining the challenge."""
    fullName: str = Field(..., max_length=100)
    email: EmailStr

    @field_validator("fullName")
    @classmethod
    def validate_name(cls, value: str) -> str:
        value = value.strip()
        if len(value) < 2:
            raise ValueError("Name muss mindestens 2 Zeichen haben")
        return value

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        if isinstance(value, str):
            value = value.strip().lower()
            if len(value) > 255:
                raise ValueError("E-Mail darf höchstens 255 Zeichen haben")
        return value


class ChallengeDayRequest(BaseModel):
    """Request body naming a challenge day."""
    email: EmailStr
    day: int = Field(..., ge=1, le=CHALLENGE_DAYS)

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class ChallengeProgressResponse(BaseModel):
    """GET /api/challenge/progress response."""
    email: str
    currentDay: int
    completedDays: List[int]
