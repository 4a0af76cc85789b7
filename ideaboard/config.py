"""
Idea Board – Application configuration.
Reads environment variables from a .env file via pydantic-settings.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── App ──
    APP_NAME: str = "Idea Board"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ── Server ──
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    CORS_ORIGINS: List[str] = ["*"]

    # ── Database ──
    DATABASE_URL: str = "sqlite+aiosqlite:///./ideaboard.db"

    # ── Passwords ──
    BCRYPT_ROUNDS: int = 10
    PASSWORD_MIN_LENGTH: int = 6


settings = Settings()
