"""
Pydantic models for Auth request/response validation.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, model_validator


class RegisterRequest(BaseModel):
    """Request body for learner registration."""
    fullName: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)
    passwordConfirm: str
    acceptTerms: bool = Field(..., description="Terms and privacy policy accepted")

    @model_validator(mode="after")
    def check_confirmation(self):
        if self.password != self.passwordConfirm:
            raise ValueError("Passwörter stimmen nicht überein")
        if not self.acceptTerms:
            raise ValueError("Bitte akzeptiere die AGB")
        return self


class LoginRequest(BaseModel):
    """Request body for password sign-in."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class UpdateEmailRequest(BaseModel):
    email: EmailStr


class UpdatePasswordRequest(BaseModel):
    """Request body for a password change from the settings page."""
    newPassword: str = Field(..., min_length=1, max_length=128)
    confirmPassword: str

    @model_validator(mode="after")
    def check_confirmation(self):
        if self.newPassword != self.confirmPassword:
            raise ValueError("Passwörter stimmen nicht überein")
        return self


class ResetPasswordRequest(BaseModel):
    email: EmailStr


class SessionResponse(BaseModel):
    """POST /api/auth/login response."""
    accessToken: str
    refreshToken: Optional[str] = None
    expiresIn: Optional[int] = None
    tokenType: str = "bearer"
