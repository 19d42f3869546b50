"""
Pydantic models for the video-funnel endpoints.
"""

from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from academy.funnel.models import AnswerType, AnswerValue, FunnelResponse


class FunnelAnswerRequest(BaseModel):
    """An answer given on a node, e.g. option index 1 of a multiple choice."""
    nodeId: str
    answer: AnswerValue
    answerType: AnswerType


class FunnelLeadRequest(BaseModel):
    nodeId: str = "lead-capture"
    firstName: str = Field(..., min_length=1, max_length=100)
    lastName: Optional[str] = Field(None, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=40)
    age: Optional[int] = Field(None, ge=0, le=120)
    optIn: bool = False
    responses: List[FunnelResponse] = Field(default_factory=list)
