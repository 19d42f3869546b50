"""
Pydantic models for course, progress and quiz requests.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, model_validator


class EnrollRequest(BaseModel):
    courseId: str


class VideoProgressRequest(BaseModel):
    """Request body reported by the video player."""
    enrollmentId: str
    watchedSeconds: int = Field(..., ge=0)
    totalSeconds: int = Field(..., gt=0)
    lastPosition: int = Field(default=0, ge=0)


class LessonCompleteRequest(BaseModel):
    enrollmentId: str


class QuizAttemptRequest(BaseModel):
    """Request body for a finished course quiz."""
    answers: Dict[str, Any] = Field(default_factory=dict)
    score: int = Field(..., ge=0)
    totalPoints: int = Field(..., ge=0)
    timeTakenSeconds: Optional[int] = Field(default=None, ge=0)

    @model_validator(mode="after")
    def check_score(self):
        if self.totalPoints and self.score > self.totalPoints:
            raise ValueError("score cannot exceed totalPoints")
        return self
