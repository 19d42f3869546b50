"""
Pydantic models for community requests.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field


class CreatePostRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=10000)
    postType: Literal["question", "discussion", "achievement", "setup_share"] = "discussion"
    images: List[str] = Field(default_factory=list)


class AddCommentRequest(BaseModel):
    content: str = Field(..., min_length=1, max_length=5000)
    parentCommentId: Optional[str] = None
