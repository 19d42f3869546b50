"""
FastAPI router for Auth endpoints.

Registration, sign-in, sign-out and account changes against the hosted
auth service, plus the auth state the front end's route guard reads.
"""

import logging
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Body, Depends

from common.utils import password_strength, success_response, validate_password

from academy.access_gate import AuthState
from academy.dependencies import get_auth_service, get_auth_state, require_auth
from academy.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    SessionResponse,
    UpdateEmailRequest,
    UpdatePasswordRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register")
async def register(body: RegisterRequest):
    """
    Register a new learner account.

    A confirmation email is sent; a session is only returned when the
    project does not require confirmation.
    """
    service = get_auth_service()
    result = await service.sign_up(body.email, body.password, body.fullName)
    return success_response(
        {"user": result.get("user"), "session": result.get("session")},
        message="Registrierung erfolgreich. Bitte bestätige deine E-Mail.",
    )


@router.post("/login")
async def login(body: LoginRequest):
    service = get_auth_service()
    session = await service.sign_in(body.email, body.password)
    return success_response({
        "session": SessionResponse(
            accessToken=session["access_token"],
            refreshToken=session.get("refresh_token"),
            expiresIn=session.get("expires_in"),
            tokenType=session.get("token_type") or "bearer",
        ),
        "user": session.get("user"),
    })


@router.post("/logout")
async def logout(user: Annotated[Dict[str, Any], Depends(require_auth)]):
    service = get_auth_service()
    await service.sign_out(user["token"])
    return success_response(message="Logged out")


@router.get("/me")
async def get_me(state: Annotated[AuthState, Depends(get_auth_state)]):
    """
    The caller's auth state: user, profile and loading flag.

    Anonymous callers get user null rather than an error.
    """
    user = None
    if state.user:
        user = {"id": state.user["user_id"], "email": state.user.get("email")}
    return success_response({"user": user, "profile": state.profile, "loading": state.loading})


@router.put("/email")
async def update_email(
    body: UpdateEmailRequest,
    user: Annotated[Dict[str, Any], Depends(require_auth)],
):
    service = get_auth_service()
    await service.update_email(user["token"], body.email)
    return success_response(message="Bestätigungslink an die neue E-Mail gesendet")


@router.put("/password")
async def update_password(
    body: UpdatePasswordRequest,
    user: Annotated[Dict[str, Any], Depends(require_auth)],
):
    service = get_auth_service()
    await service.update_password(user["token"], body.newPassword)
    return success_response(message="Passwort aktualisiert")


@router.post("/reset-password")
async def reset_password(body: ResetPasswordRequest):
    """Always succeeds for unknown addresses so it does not reveal which accounts exist."""
    service = get_auth_service()
    await service.reset_password(body.email)
    return success_response(message="Falls ein Konto existiert, wurde eine E-Mail gesendet")


@router.post("/password-strength")
async def check_password_strength(password: str = Body(..., embed=True)):
    """Strength meter for the registration form."""
    is_valid, errors = validate_password(password)
    return success_response({"strength": password_strength(password), "valid": is_valid, "errors": errors})
