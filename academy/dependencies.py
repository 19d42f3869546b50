"""
FastAPI dependencies for the academy application.

Provides dependency injection for all services.
"""

import logging
from typing import Annotated, Any, Dict, Optional

from fastapi import Depends, Request

from common.auth import (
    AuthProvider,
    JWTAuth,
    SupabaseAuth,
    create_auth_dependency,
    create_optional_auth_dependency,
)
from common.database.rest_client import RestClient
from academy.access_gate import AccessDecision, AuthState, raise_for_decision
from academy.config import Settings
from academy.middleware.auth import AuthStateResolver
from academy.services import (
    AuthService,
    BotService,
    ChallengeService,
    CommunityService,
    CourseService,
    EnrollmentService,
    LiveSessionService,
    NotificationService,
    PreferencesService,
    ProfileService,
    ProgressService,
    QuizService,
    TelegramService,
)
from academy.tiers import Tier, TierLike

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────
# Global service instances
# ─────────────────────────────────────────────────────────────────

# Auth
_auth_provider: Optional[AuthProvider] = None
_auth_service: Optional[AuthService] = None
_auth_state_resolver: Optional[AuthStateResolver] = None

# User
_profile_service: Optional[ProfileService] = None
_preferences_service: Optional[PreferencesService] = None

# Courses
_course_service: Optional[CourseService] = None
_enrollment_service: Optional[EnrollmentService] = None
_progress_service: Optional[ProgressService] = None
_quiz_service: Optional[QuizService] = None

# Members area
_bot_service: Optional[BotService] = None
_live_session_service: Optional[LiveSessionService] = None
_community_service: Optional[CommunityService] = None
_notification_service: Optional[NotificationService] = None
_telegram_service: Optional[TelegramService] = None

# Marketing
_challenge_service: Optional[ChallengeService] = None


# ─────────────────────────────────────────────────────────────────
# Initialization
# ─────────────────────────────────────────────────────────────────

def build_auth_provider(settings: Settings) -> AuthProvider:
    """Auth provider selected by AUTH_PROVIDER."""
    if settings.AUTH_PROVIDER == "supabase":
        return SupabaseAuth(
            url=settings.SUPABASE_URL,
            anon_key=settings.SUPABASE_ANON_KEY or "",
            jwt_secret=settings.SUPABASE_JWT_SECRET or "",
            algorithm=settings.JWT_ALGORITHM,
            audience=settings.JWT_AUDIENCE,
            timeout=settings.BACKEND_TIMEOUT_SECONDS,
        )
    return JWTAuth(
        secret=settings.SUPABASE_JWT_SECRET or "",
        algorithm=settings.JWT_ALGORITHM,
        audience=settings.JWT_AUDIENCE,
        access_token_expire_minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES,
    )


def init_auth_services(provider: AuthProvider, settings: Settings) -> None:
    """Initialize auth services. Requires user services."""
    global _auth_provider, _auth_service, _auth_state_resolver

    _auth_provider = provider
    _auth_service = AuthService(provider=provider, frontend_url=settings.FRONTEND_URL)
    _auth_state_resolver = AuthStateResolver(
        profile_service=_profile_service,
        deny_without_profile=settings.ACCESS_GATE_DENY_WITHOUT_PROFILE,
    )


def init_user_services(client: RestClient) -> None:
    """Initialize user services."""
    global _profile_service, _preferences_service

    _profile_service = ProfileService(client)
    _preferences_service = PreferencesService(client)


def init_course_services(client: RestClient, settings: Settings) -> None:
    """Initialize course services."""
    global _course_service, _enrollment_service, _progress_service, _quiz_service

    _course_service = CourseService(client)
    _enrollment_service = EnrollmentService(client)
    _progress_service = ProgressService(client, completion_threshold=settings.VIDEO_COMPLETION_THRESHOLD)
    _quiz_service = QuizService(client, default_passing_score=settings.PASSING_SCORE_DEFAULT)


def init_member_services(client: RestClient, settings: Settings) -> None:
    """Initialize members-area services."""
    global _bot_service, _live_session_service, _community_service
    global _notification_service, _telegram_service

    _bot_service = BotService(client)
    _live_session_service = LiveSessionService(client)
    _community_service = CommunityService(client)
    _notification_service = NotificationService(client)
    _telegram_service = TelegramService(client, starter_daily_limit=settings.TELEGRAM_STARTER_DAILY_LIMIT)


def init_marketing_services(client: RestClient) -> None:
    """Initialize services behind the public site."""
    global _challenge_service

    _challenge_service = ChallengeService(client)


def init_all_services(client: RestClient, provider: AuthProvider, settings: Settings) -> None:
    """
    Initialize all services at application startup.

    Args:
        client: Connected backend client
        provider: Auth provider
        settings: Application settings
    """
    init_user_services(client)
    init_auth_services(provider, settings)
    init_course_services(client, settings)
    init_member_services(client, settings)
    init_marketing_services(client)
    logger.info("All services initialized")


# ─────────────────────────────────────────────────────────────────
# Auth getters
# ─────────────────────────────────────────────────────────────────

def get_auth_provider() -> AuthProvider:
    """Get auth provider instance."""
    if _auth_provider is None:
        raise RuntimeError("Auth services not initialized.")
    return _auth_provider


def get_auth_service() -> AuthService:
    """Get auth service instance."""
    if _auth_service is None:
        raise RuntimeError("Auth services not initialized.")
    return _auth_service


def get_auth_state_resolver() -> AuthStateResolver:
    """Get auth state resolver instance."""
    if _auth_state_resolver is None:
        raise RuntimeError("Auth services not initialized.")
    return _auth_state_resolver


def request_location(request: Request) -> str:
    """Path and query string the caller asked for, carried through the login redirect."""
    if request.url.query:
        return f"{request.url.path}?{request.url.query}"
    return request.url.path


require_auth = create_auth_dependency(lambda: get_auth_provider())
optional_auth = create_optional_auth_dependency(lambda: get_auth_provider())


async def get_auth_state(
    user: Annotated[Optional[Dict[str, Any]], Depends(optional_auth)],
    resolver: Annotated[AuthStateResolver, Depends(get_auth_state_resolver)],
) -> AuthState:
    """Dependency resolving the caller's explicit auth state."""
    return await resolver.resolve(user)


def require_tier(tier: TierLike = None):
    """
    Dependency factory guarding an API route with the access gate.

    Args:
        tier: Minimum tier, or None for any signed-in user

    Returns:
        Dependency returning the caller's AuthState when access is granted
    """

    async def check_access(
        request: Request,
        state: Annotated[AuthState, Depends(get_auth_state)],
        resolver: Annotated[AuthStateResolver, Depends(get_auth_state_resolver)],
    ) -> AuthState:
        decision = resolver.evaluate(state, tier, request_location(request))
        raise_for_decision(decision)
        return state

    return check_access


def page_gate(tier: TierLike = None):
    """Dependency factory returning the gate decision for a page route."""

    async def decide(
        request: Request,
        state: Annotated[AuthState, Depends(get_auth_state)],
        resolver: Annotated[AuthStateResolver, Depends(get_auth_state_resolver)],
    ) -> AccessDecision:
        return resolver.evaluate(state, tier, request_location(request))

    return decide


require_member = require_tier(None)
require_academy = require_tier(Tier.ACADEMY)
require_elite = require_tier(Tier.ELITE)


# ─────────────────────────────────────────────────────────────────
# User getters
# ─────────────────────────────────────────────────────────────────

def get_profile_service() -> ProfileService:
    """Get profile service instance."""
    if _profile_service is None:
        raise RuntimeError("User services not initialized.")
    return _profile_service


def get_preferences_service() -> PreferencesService:
    """Get preferences service instance."""
    if _preferences_service is None:
        raise RuntimeError("User services not initialized.")
    return _preferences_service


# ─────────────────────────────────────────────────────────────────
# Course getters
# ─────────────────────────────────────────────────────────────────

def get_course_service() -> CourseService:
    """Get course service instance."""
    if _course_service is None:
        raise RuntimeError("Course services not initialized.")
    return _course_service


def get_enrollment_service() -> EnrollmentService:
    """Get enrollment service instance."""
    if _enrollment_service is None:
        raise RuntimeError("Course services not initialized.")
    return _enrollment_service


def get_progress_service() -> ProgressService:
    """Get progress service instance."""
    if _progress_service is None:
        raise RuntimeError("Course services not initialized.")
    return _progress_service


def get_quiz_service() -> QuizService:
    """Get quiz service instance."""
    if _quiz_service is None:
        raise RuntimeError("Course services not initialized.")
    return _quiz_service


# ─────────────────────────────────────────────────────────────────
# Members area getters
# ─────────────────────────────────────────────────────────────────

def get_bot_service() -> BotService:
    """Get bot service instance."""
    if _bot_service is None:
        raise RuntimeError("Member services not initialized.")
    return _bot_service


def get_live_session_service() -> LiveSessionService:
    """Get live session service instance."""
    if _live_session_service is None:
        raise RuntimeError("Member services not initialized.")
    return _live_session_service


def get_community_service() -> CommunityService:
    """Get community service instance."""
    if _community_service is None:
        raise RuntimeError("Member services not initialized.")
    return _community_service


def get_notification_service() -> NotificationService:
    """Get notification service instance."""
    if _notification_service is None:
        raise RuntimeError("Member services not initialized.")
    return _notification_service


def get_telegram_service() -> TelegramService:
    """Get telegram service instance."""
    if _telegram_service is None:
        raise RuntimeError("Member services not initialized.")
    return _telegram_service


# ─────────────────────────────────────────────────────────────────
# Marketing getters
# ─────────────────────────────────────────────────────────────────

def get_challenge_service() -> ChallengeService:
    """Get challenge service instance."""
    if _challenge_service is None:
        raise RuntimeError("Marketing services not initialized.")
    return _challenge_service
