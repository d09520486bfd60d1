"""
Configuration settings for the phishing classification relay.

All settings are loaded from environment variables with sensible defaults.
Use .env file for local development.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CANDIDATE_MODELS = [
    "gemini-1.5-flash-latest",
    "gemini-1.5-flash",
    "gemini-1.5-pro-latest",
    "gemini-1.5-pro",
    "gemini-1.0-pro",
    "gemini-pro",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Application ===
    APP_NAME: str = "Phish Relay"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"
    ENVIRONMENT: str = "development"
    HOST: str = "0.0.0.0"
    PORT: int = 8787

    # === Gemini Configuration ===
    GOOGLE_API_KEY: Optional[str] = None  # Absent key disables classification (503)
    GEMINI_MODEL: Optional[str] = None  # Preferred model, probed before candidates
    CANDIDATE_MODELS: list[str] = DEFAULT_CANDIDATE_MODELS
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com"
    GEMINI_API_VERSION: str = "v1beta"
    GEMINI_TIMEOUT: int = 60  # seconds

    # === HTTP Surface ===
    MAX_BODY_BYTES: int = 1024 * 1024  # 1 MB
    CORS_ALLOW_ORIGINS: list[str] = ["*"]

    # === Monitoring ===
    PROMETHEUS_ENABLED: bool = True


# Global settings instance
settings = Settings()
