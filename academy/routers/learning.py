"""
Course catalogue, enrollment, lesson progress and course quiz endpoints.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, Request

from common.utils import NotFoundException, list_response, success_response

from academy.access_gate import AuthState, raise_for_decision
from academy.dependencies import (
    get_auth_state,
    get_auth_state_resolver,
    get_course_service,
    get_enrollment_service,
    get_progress_service,
    get_quiz_service,
    request_location,
    require_member,
)
from academy.schemas.learning import (
    EnrollRequest,
    LessonCompleteRequest,
    QuizAttemptRequest,
    VideoProgressRequest,
)
from academy.tiers import optional_tier

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Learning"])


# =============================================================================
# Courses
# =============================================================================

@router.get("/courses")
async def list_courses(
    state: Annotated[AuthState, Depends(get_auth_state)],
    search: Optional[str] = Query(None, min_length=1, max_length=100),
    tier: Optional[str] = Query(None),
):
    """
    The published catalogue.

    With `search`, title/description matches are returned instead. The
    catalogue is narrowed to what `tier` may open; without it a signed-in
    caller sees what their own tier may open and anonymous callers see
    everything.
    """
    service = get_course_service()
    if search:
        return list_response(await service.search_courses(search))

    filter_tier = optional_tier(tier)
    if filter_tier is None and state.profile is not None:
        filter_tier = state.profile_tier

    return list_response(await service.get_courses(filter_tier))


@router.get("/courses/{slug}")
async def get_course(
    slug: str,
    request: Request,
    state: Annotated[AuthState, Depends(get_auth_state)],
):
    """
    Course outline with its modules and lessons.

    Callers whose tier does not cover the course (or who are not signed
    in) get the outline without lesson content, free previews excepted.
    """
    service = get_course_service()
    course = await service.get_course_details(slug)
    if not course:
        raise NotFoundException("Course not found", code="COURSE_NOT_FOUND")

    decision = get_auth_state_resolver().evaluate(state, course.tier_required, request_location(request))
    if not decision.granted:
        course = course.locked()
    return success_response(course)


# =============================================================================
# Enrollments
# =============================================================================

@router.get("/enrollments")
async def list_enrollments(state: Annotated[AuthState, Depends(require_member)]):
    service = get_enrollment_service()
    return list_response(await service.get_user_enrollments(state.user["user_id"]))


@router.post("/enrollments")
async def enroll(
    body: EnrollRequest,
    request: Request,
    state: Annotated[AuthState, Depends(require_member)],
):
    course = await get_course_service().get_course(body.courseId)
    if not course:
        raise NotFoundException("Course not found", code="COURSE_NOT_FOUND")
    raise_for_decision(
        get_auth_state_resolver().evaluate(state, course.tier_required, request_location(request))
    )

    service = get_enrollment_service()
    enrollment = await service.enroll_course(state.user["user_id"], body.courseId)
    return success_response(enrollment, message="Erfolgreich eingeschrieben")


@router.get("/enrollments/{course_id}")
async def get_enrollment(
    course_id: str,
    state: Annotated[AuthState, Depends(require_member)],
):
    service = get_enrollment_service()
    enrollment = await service.get_enrollment(state.user["user_id"], course_id)
    if not enrollment:
        raise NotFoundException("Not enrolled in this course", code="ENROLLMENT_NOT_FOUND")
    return success_response(enrollment)


# =============================================================================
# Lesson progress
# =============================================================================

@router.get("/progress/lessons/{lesson_id}")
async def get_lesson_progress(
    lesson_id: str,
    state: Annotated[AuthState, Depends(require_member)],
):
    service = get_progress_service()
    return success_response(await service.get_lesson_progress(state.user["user_id"], lesson_id))


@router.post("/progress/lessons/{lesson_id}/video")
async def update_video_progress(
    lesson_id: str,
    body: VideoProgressRequest,
    state: Annotated[AuthState, Depends(require_member)],
):
    """Periodic report from the video player."""
    service = get_progress_service()
    progress = await service.update_video_progress(
        user_id=state.user["user_id"],
        lesson_id=lesson_id,
        enrollment_id=body.enrollmentId,
        watched_seconds=body.watchedSeconds,
        total_seconds=body.totalSeconds,
        last_position=body.lastPosition,
    )
    return success_response(progress)


@router.post("/progress/lessons/{lesson_id}/complete")
async def complete_lesson(
    lesson_id: str,
    body: LessonCompleteRequest,
    state: Annotated[AuthState, Depends(require_member)],
):
    service = get_progress_service()
    progress = await service.mark_lesson_complete(state.user["user_id"], lesson_id, body.enrollmentId)
    return success_response(progress)


# =============================================================================
# Course quizzes
# =============================================================================

@router.get("/quizzes/{quiz_id}")
async def get_quiz(
    quiz_id: str,
    state: Annotated[AuthState, Depends(require_member)],
):
    service = get_quiz_service()
    quiz = await service.get_quiz(quiz_id)
    if not quiz:
        raise NotFoundException("Quiz not found", code="QUIZ_NOT_FOUND")
    return success_response(quiz)


@router.post("/quizzes/{quiz_id}/attempts")
async def submit_quiz_attempt(
    quiz_id: str,
    body: QuizAttemptRequest,
    state: Annotated[AuthState, Depends(require_member)],
):
    service = get_quiz_service()
    attempt = await service.submit_quiz_attempt(
        user_id=state.user["user_id"],
        quiz_id=quiz_id,
        answers=body.answers,
        score=body.score,
        total_points=body.totalPoints,
        time_taken=body.timeTakenSeconds,
    )
    return success_response(attempt)
