# fip_control_plane/config.py
"""
Application Configuration
Uses pydantic-settings for environment variable management
"""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables
    Create a .env file for local development
    """

    # === Application ===
    APP_NAME: str = "Floating IP Control Plane"
    APP_VERSION: str = "1.0.0"
    ENV: str = "development"  # development, staging, production
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # === API ===
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    API_PREFIX: str = "/api/v1"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = True

    # === Database ===
    DATABASE_URL: str = "sqlite:///./fip_control_plane.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # === Security ===
    ADMIN_SECRET: str = "change-me-admin-secret"

    # === OpenStack ===
    OS_CLOUD: str = "openstack"  # cloud name in clouds.yaml
    EXTERNAL_NETWORK_ID: Optional[str] = None

    # === Floating IP convergence ===
    FIP_BACKOFF_STEPS: int = 10
    FIP_BACKOFF_DURATION_SECONDS: float = 30.0
    FIP_BACKOFF_FACTOR: float = 1.0
    FIP_BACKOFF_JITTER: float = 0.1

    # === Logging & Audit ===
    ENABLE_AUDIT_LOG: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production"""
        return self.ENV.lower() == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development"""
        return self.ENV.lower() == "development"


@lru_cache()
def get_settings() -> Settings:
    """
    Cached settings instance
    Use this to get settings throughout the application
    """
    return Settings()


settings = get_settings()
