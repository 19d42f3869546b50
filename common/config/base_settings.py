"""
Base settings class for environment configuration.

Uses Pydantic Settings for automatic environment variable loading.
Extend this class for application-specific settings.

Example:
    from common.config import BaseAppSettings

    class Settings(BaseAppSettings):
        # App-specific settings
        FRONTEND_URL: str = "http://localhost:5173"

    settings = Settings()
    print(settings.SUPABASE_URL)
"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseAppSettings(BaseSettings):
    """
    Base settings class with common configuration options.

    Automatically loads values from environment variables.
    Extend this class for application-specific settings.
    """

    # ==========================================================================
    # Hosted Backend Settings
    # ==========================================================================
    SUPABASE_URL: str = "http://localhost:54321"
    SUPABASE_ANON_KEY: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None
    BACKEND_TIMEOUT_SECONDS: float = 10.0

    # ==========================================================================
    # Authentication Settings
    # ==========================================================================
    AUTH_PROVIDER: str = "supabase"  # "supabase" or "jwt"

    # Token verification (the hosted backend signs access tokens with this secret)
    SUPABASE_JWT_SECRET: Optional[str] = None
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: str = "authenticated"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # ==========================================================================
    # Server Settings
    # ==========================================================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = False
    ENVIRONMENT: str = "development"  # development, staging, production
    LOG_LEVEL: str = "INFO"

    # CORS Settings
    CORS_ORIGINS: str = "*"  # Comma-separated origins or "*"
    CORS_ALLOW_CREDENTIALS: bool = True

    # ==========================================================================
    # Pydantic Settings Configuration
    # ==========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow",  # Allow app-specific settings
        case_sensitive=True,
    )

    def get_cors_origins(self) -> list:
        """Parse CORS_ORIGINS into a list."""
        if self.CORS_ORIGINS == "*":
            return ["*"]
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT.lower() == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT.lower() == "development"

    def validate_required(self) -> None:
        """
        Validate that required settings are configured.

        Raises:
            ValueError: If required settings are missing
        """
        errors = []

        if not self.SUPABASE_URL:
            errors.append("SUPABASE_URL is required")

        if not self.SUPABASE_ANON_KEY:
            errors.append("SUPABASE_ANON_KEY is required to reach the hosted backend")

        if self.AUTH_PROVIDER in ("supabase", "jwt") and not self.SUPABASE_JWT_SECRET:
            errors.append("SUPABASE_JWT_SECRET is required to verify access tokens")

        if self.AUTH_PROVIDER not in ("supabase", "jwt"):
            errors.append(f"Unknown AUTH_PROVIDER: {self.AUTH_PROVIDER}")

        if errors:
            raise ValueError("Configuration errors:\n- " + "\n- ".join(errors))
