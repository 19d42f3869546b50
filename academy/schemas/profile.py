"""
Pydantic models for profile, preferences and member-area requests.
"""

from typing import Optional

from pydantic import BaseModel, Field


class UpdateProfileRequest(BaseModel):
    """Editable profile fields; omitted fields stay unchanged."""
    full_name: Optional[str] = Field(default=None, max_length=100)
    avatar_url: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=1000)
    whatsapp_number: Optional[str] = Field(default=None, max_length=32)


class LinkTelegramRequest(BaseModel):
    telegramUserId: int = Field(..., gt=0)


class PreferencesRequest(BaseModel):
    """Notification toggles from the settings page."""
    emailNotifications: bool = True
    telegramNotifications: bool = True
    weeklyReport: bool = True


class CreateLicenseRequest(BaseModel):
    licenseKey: Optional[str] = Field(default=None, pattern=r"^[A-Z0-9]{4}(-[A-Z0-9]{4}){3}$")
