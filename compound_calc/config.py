"""
Application settings.
Loaded from environment variables prefixed with COMPOUND_CALC_ (or a .env file).
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the API and its collaborators."""

    APP_NAME: str = "Compound Interest Calculator"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # History (embedded key/value store)
    HISTORY_DB_PATH: Path = Path("data") / "history.db"
    HISTORY_LIMIT: int = 1000

    # CSV export delivery
    EXPORT_DIR: Path = Path("exports")
    EXPORT_FILENAME: str = "compound-interest-result.csv"

    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
    ]

    model_config = SettingsConfigDict(
        env_prefix="COMPOUND_CALC_",
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
