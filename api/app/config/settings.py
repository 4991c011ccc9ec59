from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from typing import List, Any
import os
import json


class Settings(BaseSettings):
    PROJECT_NAME: str = "Party Queue API"
    DEBUG: bool = False
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8080"]

    # Database
    DATABASE_URL: str
    SQLALCHEMY_ECHO: bool = False

    # Spotify (playback control + catalog lookups)
    SPOTIFY_CLIENT_ID: str = ""
    SPOTIFY_CLIENT_SECRET: str = ""
    SPOTIFY_API_BASE_URL: str = "https://api.spotify.com/v1"
    SPOTIFY_TOKEN_URL: str = "https://accounts.spotify.com/api/token"
    PROVIDER_TIMEOUT_SECONDS: float = 15

    model_config = SettingsConfigDict(
        env_file=os.path.join(os.path.dirname(__file__), "../../../.env"),
        case_sensitive=True,
        extra="ignore",
    )

    @field_validator('ALLOWED_ORIGINS', mode='before')
    @classmethod
    def parse_allowed_origins(cls, v: Any) -> List[str]:
        """Parse allowed origins from JSON or a comma-delimited string."""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except (json.JSONDecodeError, TypeError):
                # If not valid JSON, try splitting by comma
                return [origin.strip() for origin in v.split(',')]
        return v

    @field_validator('DATABASE_URL')
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        """Validate that the database URL is present and uses PostgreSQL."""
        if not v:
            raise ValueError("DATABASE_URL must be set")
        if not v.startswith(('postgresql://', 'postgresql+psycopg2://', 'postgresql+asyncpg://')):
            raise ValueError("DATABASE_URL must be a valid PostgreSQL URL")
        return v

    @field_validator('PROVIDER_TIMEOUT_SECONDS')
    @classmethod
    def validate_provider_timeout(cls, v: float) -> float:
        """Reject non-positive provider timeouts."""
        if v <= 0:
            raise ValueError("PROVIDER_TIMEOUT_SECONDS must be positive")
        return v


settings = Settings()
