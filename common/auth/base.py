"""
Abstract authentication provider interface.

Defines the contract that all auth providers must implement.
This allows swapping between the hosted auth service and plain local JWT
verification without changing application code.

Example:
    from common.auth import AuthProvider, JWTAuth, SupabaseAuth

    def get_auth_provider(settings) -> AuthProvider:
        if settings.AUTH_PROVIDER == "supabase":
            return SupabaseAuth(
                url=settings.SUPABASE_URL,
                anon_key=settings.SUPABASE_ANON_KEY,
                jwt_secret=settings.SUPABASE_JWT_SECRET,
            )
        return JWTAuth(secret=settings.SUPABASE_JWT_SECRET)
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any


class AuthProvider(ABC):
    """
    Abstract authentication provider.

    Account operations act on behalf of the caller, so the ones that change
    an existing account take the caller's access token.
    """

    @abstractmethod
    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: Optional[Dict[str, Any]] = None,
        redirect_to: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Create a new account.

        Args:
            email: User's email address
            password: User's password
            metadata: User metadata stored with the account (full_name, ...)
            redirect_to: Where the confirmation email link should land

        Returns:
            Dict with "user" and, when no confirmation is required, "session"

        Raises:
            ValueError: If email already exists or validation fails
        """
        pass

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        """
        Exchange email and password for a session.

        Returns:
            Dict with access_token, refresh_token, expires_in and user

        Raises:
            ValueError: If credentials are invalid
        """
        pass

    @abstractmethod
    async def sign_out(self, token: str) -> None:
        """Invalidate the session behind an access token."""
        pass

    @abstractmethod
    async def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify an access token.

        Returns:
            Decoded claims (at minimum: sub)

        Raises:
            ValueError: If token is invalid, expired, or revoked
        """
        pass

    @abstractmethod
    async def get_user(self, token: str) -> Optional[Dict[str, Any]]:
        """Account record for the token's owner, or None."""
        pass

    @abstractmethod
    async def update_user(self, token: str, **attributes: Any) -> Dict[str, Any]:
        """
        Update the caller's account (email, password, data).

        Raises:
            ValueError: If the update is rejected
        """
        pass

    @abstractmethod
    async def send_password_reset(
        self,
        email: str,
        redirect_to: Optional[str] = None,
    ) -> None:
        """
        Send a password reset email.

        Does not reveal whether the address has an account.
        """
        pass
