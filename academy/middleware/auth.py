"""
Auth state resolution for the access gate.

Turns the verified caller identity into the explicit AuthState the gate
decides on, and evaluates the gate with the configured policy.
"""

import logging
from typing import Any, Dict, Optional

from common.database.rest_client import BackendUnavailableError
from academy.access_gate import AccessDecision, AuthState, evaluate_access
from academy.services.user.profile_service import ProfileService
from academy.tiers import TierLike

logger = logging.getLogger(__name__)


class AuthStateResolver:
    """
    Loads the caller's profile and applies the gate policy.
    """

    def __init__(self, profile_service: ProfileService, deny_without_profile: bool = False):
        """
        Initialize AuthStateResolver.

        Args:
            profile_service: For loading the caller's profile row
            deny_without_profile: Gate policy for tier checks without a profile
        """
        self._profile_service = profile_service
        self._deny_without_profile = deny_without_profile

    async def resolve(self, user: Optional[Dict[str, Any]]) -> AuthState:
        """
        Build the auth state for a caller.

        Args:
            user: Verified identity, or None for anonymous callers

        Returns:
            AuthState; loading is set when the backend cannot be reached
            while the profile is fetched
        """
        if not user:
            return AuthState()

        try:
            profile = await self._profile_service.get_profile(user["user_id"])
        except BackendUnavailableError as e:
            logger.warning(f"Profile for {user['user_id']} unavailable, auth state loading: {e.message}")
            return AuthState(user=user, loading=True)

        if profile is None:
            logger.warning(f"No profile row for user {user['user_id']}")

        return AuthState(user=user, profile=profile)

    def evaluate(self, state: AuthState, required_tier: TierLike, location: str) -> AccessDecision:
        return evaluate_access(
            state,
            required_tier,
            location,
            deny_without_profile=self._deny_without_profile,
        )
