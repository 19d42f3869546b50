"""
Account service.

Wraps the configured AuthProvider with the academy's sign-up rules and
error codes. Route handlers never talk to the provider directly.
"""

import logging
from typing import Any, Dict, Optional

from common.auth.base import AuthProvider
from common.utils.exceptions import (
    BadRequestException,
    ConflictException,
    NotImplementedException,
    RateLimitException,
    UnauthorizedException,
    ValidationException,
)
from common.utils.password import validate_password

logger = logging.getLogger(__name__)

UNSUPPORTED_CODE = "AUTH_PROVIDER_UNSUPPORTED"


class AuthService:
    """Sign-up, sign-in and account changes for learners."""

    def __init__(self, provider: AuthProvider, frontend_url: str):
        """
        Initialize AuthService.

        Args:
            provider: Auth provider (hosted service or local JWT)
            frontend_url: Public site URL used for email redirect links
        """
        self._provider = provider
        self._frontend_url = frontend_url.rstrip("/")

    async def sign_up(self, email: str, password: str, full_name: str) -> Dict[str, Any]:
        """
        Create a learner account.

        The full name travels as account metadata; the backend creates the
        profile row from it.

        Raises:
            ValidationException: Password does not meet the requirements
            ConflictException: Email already registered
        """
        is_valid, errors = validate_password(password)
        if not is_valid:
            raise ValidationException("Password does not meet requirements", errors=errors)

        try:
            result = await self._provider.sign_up(
                email,
                password,
                metadata={"full_name": full_name},
                redirect_to=self._frontend_url,
            )
        except NotImplementedError as e:
            raise NotImplementedException(str(e), code=UNSUPPORTED_CODE)
        except ValueError as e:
            if "already registered" in str(e):
                raise ConflictException(str(e), code="EMAIL_EXISTS")
            raise BadRequestException(str(e), code="SIGN_UP_FAILED")

        logger.info(f"Account created for {email}")
        return result

    async def sign_in(self, email: str, password: str) -> Dict[str, Any]:
        """
        Exchange credentials for a session.

        Raises:
            RateLimitException: Too many failed attempts
            UnauthorizedException: Wrong credentials or unconfirmed email
        """
        try:
            return await self._provider.sign_in(email, password)
        except NotImplementedError as e:
            raise NotImplementedException(str(e), code=UNSUPPORTED_CODE)
        except ValueError as e:
            message = str(e)
            if "Too many" in message:
                raise RateLimitException(message, code="TOO_MANY_ATTEMPTS")
            if "not confirmed" in message:
                raise UnauthorizedException(message, code="EMAIL_NOT_CONFIRMED")
            raise UnauthorizedException(message, code="INVALID_CREDENTIALS")

    async def sign_out(self, token: str) -> None:
        try:
            await self._provider.sign_out(token)
        except ValueError as e:
            raise BadRequestException(str(e), code="SIGN_OUT_FAILED")

    async def get_current_user(self, token: str) -> Optional[Dict[str, Any]]:
        return await self._provider.get_user(token)

    async def update_email(self, token: str, new_email: str) -> Dict[str, Any]:
        try:
            return await self._provider.update_user(token, email=new_email)
        except NotImplementedError as e:
            raise NotImplementedException(str(e), code=UNSUPPORTED_CODE)
        except ValueError as e:
            raise BadRequestException(str(e), code="EMAIL_UPDATE_FAILED")

    async def update_password(self, token: str, new_password: str) -> Dict[str, Any]:
        """
        Change the caller's password.

        Raises:
            ValidationException: Password does not meet the requirements
            BadRequestException: The auth service rejected the change
        """
        is_valid, errors = validate_password(new_password)
        if not is_valid:
            raise ValidationException("Password does not meet requirements", errors=errors)

        try:
            return await self._provider.update_user(token, password=new_password)
        except NotImplementedError as e:
            raise NotImplementedException(str(e), code=UNSUPPORTED_CODE)
        except ValueError as e:
            raise BadRequestException(str(e), code="PASSWORD_UPDATE_FAILED")

    async def reset_password(self, email: str) -> None:
        """Send a reset link pointing at the site's reset page."""
        try:
            await self._provider.send_password_reset(
                email, redirect_to=f"{self._frontend_url}/reset-password"
            )
        except NotImplementedError as e:
            raise NotImplementedException(str(e), code=UNSUPPORTED_CODE)
        except ValueError as e:
            raise RateLimitException(str(e), code="RESET_RATE_LIMITED")
        logger.info(f"Password reset requested for {email}")
