"""
tablefs settings

Values come from environment variables or a ``.env`` file in the working
directory; everything has a sensible default except the database URL, which
only the bootstrap helpers need.
"""
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = Path.cwd() / ".env"


class Settings(BaseSettings):
    """tablefs settings"""

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    # Application
    APP_NAME: str = "tablefs"
    VERSION: str = "0.1.0"
    ENVIRONMENT: str = "development"

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)s - %(message)s"

    # PostgreSQL; credentials belong in .env
    DATABASE_URL: Optional[str] = None

    # Storage
    BINARIES_TABLE_NAME: str = "binaries"  # table holding the files
    PATH_STRATEGY: Literal["flat", "prefixed"] = "flat"
    ENSURE_SCHEMA: bool = True  # create the table on startup if missing


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
