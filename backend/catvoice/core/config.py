"""Configuration management using pydantic-settings."""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        protected_namespaces=("settings_",),
    )

    # GCP settings (required)
    gcp_project_id: str
    vertex_ai_location: str

    # Generative model
    model_id: str = "gemini-2.5-flash"
    model_timeout_seconds: float = 60.0
    # Tokens the model may spend on thinking; 0 disables it, unset leaves the model default
    model_thinking_budget: Optional[int] = 0

    # Consultation limits
    video_consult_daily_limit: int = 3
    max_video_frames: int = 10
    # Day boundary used when counting today's video consultations
    quota_timezone: str = "Asia/Tokyo"

    # Application settings
    app_name: str = "catvoice"

    # Server settings
    backend_host: str = "localhost"
    backend_port: int = 8000
    frontend_port: int = 3000


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
