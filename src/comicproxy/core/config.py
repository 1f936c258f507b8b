"""Configuration management for the comic upload proxy."""

import logging

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )

    ENV: str = "local"
    SERVICE_NAME: str = "comicproxy"
    SERVICE_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # Bunny storage configuration
    BUNNY_STORAGE_ZONE: str = ""
    BUNNY_STORAGE_API_KEY: str = ""
    BUNNY_CDN_HOSTNAME: str = ""
    BUNNY_STORAGE_REGION: str = ""  # Optional hint, e.g. "de" or "ny"
    BUNNY_STORAGE_DOMAIN: str = "bunnycdn.com"
    STORAGE_REQUEST_TIMEOUT: float = 30.0  # seconds per provider request

    # Token verification
    ADMIN_JWT_SECRET: str = ""

    # CORS
    CORS_ALLOW_ORIGIN: str = "*"

    @property
    def storage_configured(self) -> bool:
        """True when zone, API key and CDN hostname are all set."""
        return bool(
            self.BUNNY_STORAGE_ZONE
            and self.BUNNY_STORAGE_API_KEY
            and self.BUNNY_CDN_HOSTNAME
        )

    @property
    def log_level(self) -> int:
        """Resolve LOG_LEVEL to a logging level, defaulting to INFO."""
        level = logging.getLevelName(self.LOG_LEVEL.upper())
        return level if isinstance(level, int) else logging.INFO


# Singleton settings instance
settings = Settings()
