"""
Tier-based access gate for learner pages and API routes.

The decision itself is a pure function of an explicit AuthState, so it can
be evaluated (and tested) without a request, a provider tree or any
ambient context. The FastAPI adapters at the bottom translate a decision
into a redirect, a placeholder or an API error.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional
from urllib.parse import urlencode

from fastapi.responses import JSONResponse, RedirectResponse

from common.utils.exceptions import (
    ForbiddenException,
    ServiceUnavailableException,
    UnauthorizedException,
)
from academy.tiers import Tier, TierLike, has_tier_access, parse_tier

logger = logging.getLogger(__name__)

LOGIN_PATH = "/academy/login"
UPSELL_PATH = "/academy/pricing"
LOADING_MESSAGE = "Laden..."
LOADING_RETRY_SECONDS = 2


class AccessOutcome(str, Enum):
    LOADING = "loading"
    REDIRECT_LOGIN = "redirect_login"
    REDIRECT_UPSELL = "redirect_upsell"
    RENDER = "render"


@dataclass(frozen=True)
class AuthState:
    """
    What is known about the caller when the gate runs.

    user is the verified identity (None when anonymous); profile is the
    caller's profile row when it has been loaded; loading is set while the
    profile cannot be resolved yet.
    """

    user: Optional[Dict[str, Any]] = None
    profile: Optional[Any] = None
    loading: bool = False

    @property
    def profile_tier(self) -> Optional[Tier]:
        if self.profile is None:
            return None
        tier = self.profile.get("tier") if isinstance(self.profile, dict) else getattr(self.profile, "tier", None)
        return parse_tier(tier)


@dataclass(frozen=True)
class AccessDecision:
    outcome: AccessOutcome
    redirect_to: Optional[str] = None
    return_to: Optional[str] = None

    @property
    def granted(self) -> bool:
        return self.outcome is AccessOutcome.RENDER


def evaluate_access(
    auth: AuthState,
    required_tier: TierLike = None,
    location: str = "/",
    *,
    deny_without_profile: bool = False,
) -> AccessDecision:
    """
    Decide between placeholder, login redirect, upsell redirect and render.

    Args:
        auth: The caller's auth state
        required_tier: Minimum tier for the content, None for any signed-in user
        location: Path being requested, carried to the login page
        deny_without_profile: Treat a tier requirement with no loaded profile
            as insufficient instead of letting it through

    Returns:
        AccessDecision
    """
    if auth.loading:
        return AccessDecision(AccessOutcome.LOADING)

    if not auth.user:
        return AccessDecision(AccessOutcome.REDIRECT_LOGIN, redirect_to=LOGIN_PATH, return_to=location)

    if required_tier:
        if auth.profile is not None:
            if not has_tier_access(auth.profile_tier, required_tier):
                logger.warning(
                    f"Tier {auth.profile_tier.value} below {parse_tier(required_tier).value} for {location}"
                )
                return AccessDecision(AccessOutcome.REDIRECT_UPSELL, redirect_to=UPSELL_PATH)
        elif deny_without_profile:
            logger.warning(f"No profile loaded for tier-gated {location}, denying")
            return AccessDecision(AccessOutcome.REDIRECT_UPSELL, redirect_to=UPSELL_PATH)
        else:
            # TODO: switch ACCESS_GATE_DENY_WITHOUT_PROFILE on once every signup is guaranteed a profile row
            logger.warning(f"No profile loaded for tier-gated {location}, allowing")

    return AccessDecision(AccessOutcome.RENDER)


def login_redirect_url(decision: AccessDecision) -> str:
    if decision.return_to:
        return f"{decision.redirect_to}?{urlencode({'from': decision.return_to})}"
    return decision.redirect_to or LOGIN_PATH


# ─────────────────────────────────────────────────────────────────
# HTTP adapters
# ─────────────────────────────────────────────────────────────────

def page_response(decision: AccessDecision):
    """
    Response for a page route that did not get RENDER.

    Returns None when the page should be rendered.
    """
    if decision.outcome is AccessOutcome.LOADING:
        return JSONResponse(
            status_code=503,
            content={"loading": True, "message": LOADING_MESSAGE},
            headers={"Retry-After": str(LOADING_RETRY_SECONDS)},
        )
    if decision.outcome is AccessOutcome.REDIRECT_LOGIN:
        return RedirectResponse(url=login_redirect_url(decision), status_code=307)
    if decision.outcome is AccessOutcome.REDIRECT_UPSELL:
        return RedirectResponse(url=decision.redirect_to or UPSELL_PATH, status_code=307)
    return None


def raise_for_decision(decision: AccessDecision) -> None:
    """API-route flavour of the gate: raise unless the decision is RENDER."""
    if decision.outcome is AccessOutcome.LOADING:
        raise ServiceUnavailableException(
            message=LOADING_MESSAGE,
            code="AUTH_STATE_LOADING",
            retry_after=LOADING_RETRY_SECONDS,
        )
    if decision.outcome is AccessOutcome.REDIRECT_LOGIN:
        raise UnauthorizedException(
            message="Authentication required",
            code="AUTH_REQUIRED",
            details={"redirectTo": decision.redirect_to, "from": decision.return_to},
        )
    if decision.outcome is AccessOutcome.REDIRECT_UPSELL:
        raise ForbiddenException(
            message="Your plan does not include this content",
            code="TIER_REQUIRED",
            details={"redirectTo": decision.redirect_to},
        )
