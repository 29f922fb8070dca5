"""Centralized application settings using pydantic settings."""

from functools import lru_cache
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Load environment variables from .env file
# Look for .env in the backend directory or project root
env_path = Path(__file__).parent.parent.parent / ".env"
if not env_path.exists():
    # Try project root
    env_path = Path(__file__).parent.parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path, override=False)

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "http://localhost:3000",
]


class Settings(BaseSettings):
    """Environment-aware configuration (remote API address, UI defaults)."""

    # Application settings
    app_name: str = "Catalog Manager"
    log_level: str = "INFO"

    # Remote catalog service
    api_base_url: str = Field(
        default="https://dummyjson.com",
        description="Base address of the remote product catalog API",
    )
    page_size: int = Field(
        default=30,
        ge=1,
        description="Number of products fetched by the initial load",
    )
    request_timeout_seconds: float | None = Field(
        default=None,
        description="Optional client timeout; unset means calls never time out",
    )

    # UI defaults
    placeholder_image_url: str = "https://via.placeholder.com/150"
    notification_timer_ms: int = Field(
        default=2000,
        ge=0,
        description="Auto-dismiss delay for success notifications",
    )

    # CORS settings - stored as string, converted to list via property
    cors_origins_raw: str | None = Field(
        default=None,
        alias="CORS_ORIGINS",
        description="Comma-separated list of allowed CORS origins",
        exclude=True,
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,  # Allow case-insensitive env var matching
        extra="ignore",  # Ignore extra env vars not defined in model
        populate_by_name=True,  # Allow both field name and alias
    )

    @property
    def cors_origins(self) -> List[str]:
        """Parse CORS_ORIGINS from comma-separated string to list."""
        if self.cors_origins_raw is None or not self.cors_origins_raw.strip():
            return list(DEFAULT_CORS_ORIGINS)
        origins = [
            origin.strip().rstrip("/")  # Remove trailing slashes
            for origin in self.cors_origins_raw.split(",")
            if origin.strip()
        ]
        return origins if origins else list(DEFAULT_CORS_ORIGINS)

    @field_validator("api_base_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Keep the base URL joinable with the gateway's absolute paths."""
        return v.strip().rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Provide singleton-like access for dependency injection."""
    return Settings()
