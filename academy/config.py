"""
Academy application settings.

Extends the base settings with academy-specific configuration.
"""

from common.config import BaseAppSettings


class Settings(BaseAppSettings):
    """Academy-specific settings."""

    # ==========================================================================
    # Frontend URL (for auth email links)
    # ==========================================================================
    FRONTEND_URL: str = "http://localhost:5173"

    # ==========================================================================
    # Learning Settings
    # ==========================================================================
    # Percentage needed to pass a course quiz when the quiz sets none
    PASSING_SCORE_DEFAULT: int = 70

    # Share of a video that counts as watched
    VIDEO_COMPLETION_THRESHOLD: float = 0.9

    # ==========================================================================
    # Telegram Bot
    # ==========================================================================
    # Daily question limit for starter members; academy and elite are unlimited
    TELEGRAM_STARTER_DAILY_LIMIT: int = 10

    # ==========================================================================
    # Access Gate
    # ==========================================================================
    # Deny tier-gated content when the caller's profile row is missing
    ACCESS_GATE_DENY_WITHOUT_PROFILE: bool = False


# Global settings instance
settings = Settings()
