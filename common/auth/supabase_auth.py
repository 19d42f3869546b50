"""
Hosted auth service provider (Supabase GoTrue REST API).

Account operations go to `<url>/auth/v1`; access tokens are verified
locally with the project's JWT secret, so a request does not need a
round trip to authenticate.

Example:
    auth = SupabaseAuth(
        url="https://xyz.supabase.co",
        anon_key="public-anon-key",
        jwt_secret="project-jwt-secret",
    )

    session = await auth.sign_in("user@example.com", "Password1")
    claims = await auth.verify_token(session["access_token"])
    print(claims["sub"])  # user id
"""

import logging
from typing import Dict, Any, Optional

import httpx

from common.auth.jwt_auth import JWTAuth
from common.database.rest_client import BackendUnavailableError

logger = logging.getLogger(__name__)


class SupabaseAuth(JWTAuth):
    """
    Hosted auth provider.

    Handles:
    - Email/password sign-up with confirmation redirect
    - Password sign-in (session issuance)
    - Sign-out, email and password changes
    - Password reset emails
    """

    def __init__(
        self,
        url: str,
        anon_key: str,
        jwt_secret: str,
        algorithm: str = "HS256",
        audience: Optional[str] = "authenticated",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize hosted auth provider.

        Args:
            url: Project URL of the hosted backend
            anon_key: Public API key sent with every auth request
            jwt_secret: Secret the service signs access tokens with
            algorithm: JWT algorithm
            audience: Expected "aud" claim
            timeout: Request timeout in seconds
            transport: Optional transport (tests use httpx.MockTransport)
        """
        super().__init__(secret=jwt_secret, algorithm=algorithm, audience=audience)
        self._auth_url = f"{url.rstrip('/')}/auth/v1"
        self._anon_key = anon_key
        self._timeout = timeout
        self._transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, str]] = None,
        token: Optional[str] = None,
    ) -> httpx.Response:
        headers = {"apikey": self._anon_key}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.request(
                    method,
                    f"{self._auth_url}{path}",
                    json=json,
                    params=params,
                    headers=headers,
                )
        except httpx.RequestError as e:
            logger.error(f"Auth request failed: {method} {path}: {e}")
            raise BackendUnavailableError(f"Auth service unreachable: {e}") from e

        if response.status_code >= 500:
            logger.error(f"Auth service error {response.status_code} on {method} {path}")
            raise BackendUnavailableError(f"Auth service returned {response.status_code}")

        return response

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text or "Unknown error"
        return (
            data.get("msg")
            or data.get("error_description")
            or data.get("message")
            or data.get("error")
            or "Unknown error"
        )

    async def sign_up(
        self,
        email: str,
        password: str,
        metadata: Optional[Dict[str, Any]] = None,
        redirect_to: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create an account; a session is returned only if no confirmation is pending."""
        params = {"redirect_to": redirect_to} if redirect_to else None
        response = await self._request(
            "POST",
            "/signup",
            json={"email": email, "password": password, "data": metadata or {}},
            params=params,
        )

        if response.status_code >= 400:
            message = self._error_message(response)
            if "already registered" in message.lower():
                raise ValueError("Email already registered")
            raise ValueError(f"Sign-up failed: {message}")

        data = response.json()
        if "access_token" in data:
            return {"user": data.get("user"), "session": data}
        return {"user": data, "session": None}

    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        """Exchange credentials for a session."""
        response = await self._request(
            "POST",
            "/token",
            json={"email": email, "password": password},
            params={"grant_type": "password"},
        )

        if response.status_code >= 400:
            message = self._error_message(response)
            if response.status_code == 429:
                raise ValueError("Too many failed attempts. Please try again later.")
            if "confirm" in message.lower():
                raise ValueError("Email not confirmed")
            raise ValueError("Invalid email or password")

        data = response.json()
        return {
            "access_token": data.get("access_token"),
            "refresh_token": data.get("refresh_token"),
            "expires_in": data.get("expires_in"),
            "token_type": data.get("token_type", "bearer"),
            "user": data.get("user"),
        }

    async def sign_out(self, token: str) -> None:
        """Revoke the session server-side and locally."""
        response = await self._request("POST", "/logout", token=token)
        if response.status_code >= 400 and response.status_code != 401:
            raise ValueError(f"Sign-out failed: {self._error_message(response)}")
        await super().sign_out(token)

    async def get_user(self, token: str) -> Optional[Dict[str, Any]]:
        """Account record as the auth service sees it."""
        response = await self._request("GET", "/user", token=token)
        if response.status_code in (401, 403, 404):
            return None
        if response.status_code >= 400:
            raise ValueError(f"Failed to get user: {self._error_message(response)}")
        return response.json()

    async def update_user(self, token: str, **attributes: Any) -> Dict[str, Any]:
        """Change email, password or metadata of the caller's account."""
        allowed = {key: value for key, value in attributes.items() if key in ("email", "password", "data")}
        if not allowed:
            raise ValueError("Nothing to update")

        response = await self._request("PUT", "/user", json=allowed, token=token)
        if response.status_code >= 400:
            raise ValueError(f"Failed to update user: {self._error_message(response)}")
        return response.json()

    async def send_password_reset(
        self,
        email: str,
        redirect_to: Optional[str] = None,
    ) -> None:
        """Send a reset email; unknown addresses are not reported."""
        params = {"redirect_to": redirect_to} if redirect_to else None
        response = await self._request("POST", "/recover", json={"email": email}, params=params)
        if response.status_code == 429:
            raise ValueError("Too many reset requests. Please try again later.")
        if response.status_code >= 400:
            logger.warning(f"Password reset request rejected: {self._error_message(response)}")
