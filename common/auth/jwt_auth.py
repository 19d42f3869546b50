"""
Local JWT authentication provider.

Verifies and issues HS256 access tokens with the same claim layout the
hosted auth service uses (sub, email, role, aud). Account management is
not available locally.

Example:
    auth = JWTAuth(
        secret="your-jwt-secret",
        access_token_expire_minutes=60,
    )

    token = await auth.create_token("user-uuid", email="user@example.com")

    claims = await auth.verify_token(token)
    print(claims["sub"])  # user id
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Any, Optional

from jose import jwt, JWTError, ExpiredSignatureError

from common.auth.base import AuthProvider


class JWTAuth(AuthProvider):
    """
    JWT-only authentication provider.

    Suitable for tests and deployments where sessions are issued elsewhere.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        audience: Optional[str] = "authenticated",
        access_token_expire_minutes: int = 60,
    ):
        """
        Initialize JWT auth provider.

        Args:
            secret: Secret key for JWT signing (keep this secure!)
            algorithm: JWT algorithm (default: HS256)
            audience: Expected "aud" claim, None to skip the check
            access_token_expire_minutes: Token expiration time
        """
        self.secret = secret
        self.algorithm = algorithm
        self.audience = audience
        self.access_token_expire = timedelta(minutes=access_token_expire_minutes)

        # Token revocation store (process-local)
        self._revoked_tokens: set = set()

    async def create_token(
        self,
        user_id: str,
        **claims: Any,
    ) -> str:
        """Create a signed access token for the user."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": user_id,
            "role": "authenticated",
            "exp": now + self.access_token_expire,
            "iat": now,
            **claims,
        }
        if self.audience and "aud" not in payload:
            payload["aud"] = self.audience
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    async def verify_token(self, token: str) -> Dict[str, Any]:
        """Verify and decode an access token."""
        if token in self._revoked_tokens:
            raise ValueError("Token has been revoked")

        options = {} if self.audience else {"verify_aud": False}
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                options=options,
            )
        except ExpiredSignatureError:
            raise ValueError("Token has expired")
        except JWTError as e:
            raise ValueError(f"Invalid token: {e}")

    async def sign_out(self, token: str) -> None:
        """Add token to revocation list."""
        self._revoked_tokens.add(token)

    async def get_user(self, token: str) -> Optional[Dict[str, Any]]:
        """Account view built from the token claims."""
        try:
            claims = await self.verify_token(token)
        except ValueError:
            return None
        return {
            "id": claims["sub"],
            "email": claims.get("email"),
            "user_metadata": claims.get("user_metadata", {}),
        }

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: Optional[Dict[str, Any]] = None,
        redirect_to: Optional[str] = None,
    ) -> Dict[str, Any]:
        raise NotImplementedError("Account creation needs the hosted auth service")

    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        raise NotImplementedError("Password sign-in needs the hosted auth service")

    async def update_user(self, token: str, **attributes: Any) -> Dict[str, Any]:
        raise NotImplementedError("Account updates need the hosted auth service")

    async def send_password_reset(
        self,
        email: str,
        redirect_to: Optional[str] = None,
    ) -> None:
        raise NotImplementedError("Password reset needs the hosted auth service")
