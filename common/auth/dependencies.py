"""
FastAPI authentication dependencies.

Provides factory functions to create auth dependencies that can be
injected into route handlers. Works with any AuthProvider implementation.

Example:
    from common.auth import JWTAuth, create_auth_dependency

    auth = JWTAuth(secret="your-secret")
    require_user = create_auth_dependency(lambda: auth)

    @app.get("/profile")
    async def get_profile(user: dict = Depends(require_user)):
        return {"user_id": user["user_id"]}
"""

from typing import Any, Callable, Dict, Optional
from fastapi import Cookie, Header

from common.auth.base import AuthProvider
from common.utils.exceptions import UnauthorizedException


def extract_bearer_token(authorization: Optional[str], scheme: str = "Bearer") -> Optional[str]:
    """Token part of an Authorization header, or None when absent/malformed."""
    if not authorization:
        return None
    prefix = f"{scheme} "
    if not authorization.startswith(prefix):
        return None
    token = authorization[len(prefix):].strip()
    return token or None


def _identity(payload: Dict[str, Any], token: str) -> Optional[Dict[str, Any]]:
    user_id = payload.get("sub")
    if not user_id:
        return None
    return {
        "user_id": user_id,
        "email": payload.get("email"),
        "claims": payload,
        "token": token,
    }


def create_auth_dependency(
    get_auth_provider: Callable[[], AuthProvider],
    header_name: str = "Authorization",
    scheme: str = "Bearer",
):
    """
    Factory to create FastAPI auth dependencies.

    Args:
        get_auth_provider: Callable that returns the AuthProvider instance
        header_name: Header to extract token from (default: Authorization)
        scheme: Auth scheme prefix (default: Bearer)

    Returns:
        A FastAPI dependency returning {"user_id", "email", "claims", "token"}
    """

    async def get_current_user(
        authorization: Optional[str] = Header(None, alias=header_name),
    ) -> Dict[str, Any]:
        """
        Extract and verify the caller from the authorization header.

        Raises:
            UnauthorizedException: If token is missing, invalid, or expired
        """
        if not authorization:
            raise UnauthorizedException("Missing authorization header", code="AUTH_REQUIRED")

        token = extract_bearer_token(authorization, scheme)
        if not token:
            raise UnauthorizedException(
                f"Invalid authorization scheme. Expected: {scheme}",
                code="INVALID_AUTH_SCHEME",
            )

        auth = get_auth_provider()
        try:
            payload = await auth.verify_token(token)
        except ValueError as e:
            raise UnauthorizedException(str(e), code="INVALID_TOKEN")

        identity = _identity(payload, token)
        if not identity:
            raise UnauthorizedException("Token missing user ID", code="INVALID_TOKEN")
        return identity

    return get_current_user


def create_optional_auth_dependency(
    get_auth_provider: Callable[[], AuthProvider],
    header_name: str = "Authorization",
    scheme: str = "Bearer",
    cookie_name: str = "sb-access-token",
):
    """
    Factory to create optional auth dependency.

    Unlike create_auth_dependency, this returns None instead of raising
    when no valid token is provided. Used by the access gate, which turns
    a missing user into a login redirect itself.

    Page requests may carry the access token in the `cookie_name` cookie
    instead of the header.

    Returns:
        A FastAPI dependency that returns the identity dict or None
    """

    async def get_optional_user(
        authorization: Optional[str] = Header(None, alias=header_name),
        access_cookie: Optional[str] = Cookie(None, alias=cookie_name),
    ) -> Optional[Dict[str, Any]]:
        token = extract_bearer_token(authorization, scheme) or access_cookie
        if not token:
            return None

        auth = get_auth_provider()
        try:
            payload = await auth.verify_token(token)
        except ValueError:
            return None
        return _identity(payload, token)

    return get_optional_user
