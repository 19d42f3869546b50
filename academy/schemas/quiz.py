"""
Pydantic models for the lead-quiz endpoints.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from academy.quiz.scoring import SCORED_ANSWER_KEYS


class QuizContact(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None


class QuizEvaluateRequest(BaseModel):
    """Answers keyed by question id, e.g. {"2": "months", "9": ["books"]}."""
    answers: Dict[str, Any]
    contact: Optional[QuizContact] = None

    @field_validator("answers")
    @classmethod
    def scored_answers_are_options(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        for key in SCORED_ANSWER_KEYS:
            if key in v and v[key] is not None and not isinstance(v[key], str):
                raise ValueError(f"Antwort auf Frage {key} muss eine Option sein")
        return v
