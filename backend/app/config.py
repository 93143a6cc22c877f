"""
Application configuration loaded from environment variables.
"""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # MongoDB
    mongo_uri: str | None = None
    mongo_db_name: str = "users_db"
    mongo_server_selection_timeout_ms: int = 5000

    # Cloudinary
    cloudinary_cloud_name: str | None = None
    cloudinary_api_key: str | None = None
    cloudinary_api_secret: str | None = None
    cloudinary_folder: str = "profiles"

    # Profile images
    image_max_dimension: int = 800
    max_image_bytes: int = 5 * 1024 * 1024

    # Session cookie
    environment: str = "development"
    session_cookie_name: str = "registered"
    session_max_age_days: int = 7

    # Logging
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
