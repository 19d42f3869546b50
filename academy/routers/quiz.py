"""
Lead quiz API endpoints.
"""

import logging

from fastapi import APIRouter, Query

from common.utils import NotFoundException, list_response, success_response

from academy.quiz import QUIZ_QUESTIONS, calculate_result, format_capital, get_question, progress_percentage
from academy.schemas.quiz import QuizEvaluateRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/quiz", tags=["Quiz"])


@router.get("/questions")
async def get_questions():
    return list_response(QUIZ_QUESTIONS)


@router.get("/questions/{question_id}")
async def get_quiz_question(question_id: int):
    question = get_question(question_id)
    if not question:
        raise NotFoundException("Question not found", code="QUESTION_NOT_FOUND")
    return success_response(question)


@router.get("/progress")
async def get_progress(
    current: int = Query(..., ge=0),
    total: int = Query(default=len(QUIZ_QUESTIONS), ge=0),
):
    """Progress bar width for step `current` (1-based) of `total`."""
    return success_response({"current": current, "total": total, "percentage": progress_percentage(current, total)})


@router.get("/capital-label")
async def get_capital_label(value: int = Query(..., ge=0)):
    return success_response({"value": value, "label": format_capital(value)})


@router.post("/evaluate")
async def evaluate_quiz(body: QuizEvaluateRequest):
    """
    Score a completed quiz.

    Returns:
        Level, description and plan recommendation
    """
    result = calculate_result(body.answers)
    if body.contact:
        logger.info(f"Quiz lead {body.contact.email}: {result.level}")
    return success_response(result)
