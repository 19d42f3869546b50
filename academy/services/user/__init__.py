"""
User services.

Profiles, dashboard stats and notification preferences.
"""

from academy.services.user.profile_service import ProfileService
from academy.services.user.preferences_service import PreferencesService

__all__ = ["ProfileService", "PreferencesService"]
