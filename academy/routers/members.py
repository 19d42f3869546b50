"""
Members-area endpoints: trading bot licenses, live sessions, community,
notifications and the Telegram bot rate limit.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from common.utils import NotFoundException, list_response, success_response

from academy.access_gate import AuthState
from academy.dependencies import (
    get_bot_service,
    get_community_service,
    get_live_session_service,
    get_notification_service,
    get_telegram_service,
    require_academy,
    require_member,
)
from academy.schemas.community import AddCommentRequest, CreatePostRequest
from academy.schemas.profile import CreateLicenseRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Members"])


# =============================================================================
# Trading bot
# =============================================================================

@router.get("/bot/licenses")
async def list_bot_licenses(state: Annotated[AuthState, Depends(require_member)]):
    service = get_bot_service()
    return list_response(await service.get_user_bot_licenses(state.user["user_id"]))


@router.post("/bot/licenses")
async def create_bot_license(
    state: Annotated[AuthState, Depends(require_member)],
    body: Optional[CreateLicenseRequest] = None,
):
    """Issue a license; a key is generated when none is supplied."""
    service = get_bot_service()
    license_key = body.licenseKey if body else None
    bot_license = await service.create_bot_license(state.user["user_id"], license_key)
    return success_response(bot_license, message="Lizenz aktiviert")


# =============================================================================
# Live sessions
# =============================================================================

@router.get("/sessions")
async def list_upcoming_sessions(state: Annotated[AuthState, Depends(require_academy)]):
    service = get_live_session_service()
    return list_response(await service.get_upcoming_sessions(state.profile_tier))


@router.post("/sessions/{session_id}/register")
async def register_for_session(
    session_id: str,
    state: Annotated[AuthState, Depends(require_academy)],
):
    service = get_live_session_service()
    registration = await service.register_for_session(state.user["user_id"], session_id)
    return success_response(registration, message="Für die Session angemeldet")


# =============================================================================
# Community
# =============================================================================

@router.get("/community/posts")
async def list_posts(
    state: Annotated[AuthState, Depends(require_member)],
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
):
    service = get_community_service()
    return list_response(await service.get_posts(limit=limit, offset=offset))


@router.post("/community/posts")
async def create_post(
    body: CreatePostRequest,
    state: Annotated[AuthState, Depends(require_academy)],
):
    service = get_community_service()
    post = await service.create_post(
        state.user["user_id"],
        title=body.title,
        content=body.content,
        post_type=body.postType,
        images=body.images,
    )
    return success_response(post)


@router.get("/community/posts/{post_id}")
async def get_post(
    post_id: str,
    state: Annotated[AuthState, Depends(require_member)],
):
    service = get_community_service()
    post = await service.get_post_with_comments(post_id)
    if not post:
        raise NotFoundException("Post not found", code="POST_NOT_FOUND")
    return success_response(post)


@router.post("/community/posts/{post_id}/comments")
async def add_comment(
    post_id: str,
    body: AddCommentRequest,
    state: Annotated[AuthState, Depends(require_academy)],
):
    service = get_community_service()
    comment = await service.add_comment(
        state.user["user_id"],
        post_id,
        body.content,
        parent_comment_id=body.parentCommentId,
    )
    return success_response(comment)


# =============================================================================
# Notifications
# =============================================================================

@router.get("/notifications")
async def list_notifications(
    state: Annotated[AuthState, Depends(require_member)],
    limit: int = Query(20, ge=1, le=100),
):
    service = get_notification_service()
    return list_response(await service.get_notifications(state.user["user_id"], limit=limit))


@router.get("/notifications/count")
async def unread_count(state: Annotated[AuthState, Depends(require_member)]):
    service = get_notification_service()
    return success_response({"unread": await service.get_unread_count(state.user["user_id"])})


@router.post("/notifications/{notification_id}/read")
async def mark_notification_read(
    notification_id: str,
    state: Annotated[AuthState, Depends(require_member)],
):
    service = get_notification_service()
    return success_response(await service.mark_as_read(state.user["user_id"], notification_id))


# =============================================================================
# Telegram bot
# =============================================================================

@router.post("/telegram/rate-limit")
async def check_telegram_rate_limit(state: Annotated[AuthState, Depends(require_member)]):
    """Consume one bot query for the caller; allowed is False once the daily quota is spent."""
    service = get_telegram_service()
    allowed = await service.check_rate_limit(state.user["user_id"])
    return success_response({"allowed": allowed})
