from __future__ import annotations

from typing import Optional

from tablefs.application.filesystem import DatabaseAdapter, create_adapter
from tablefs.infrastructure.database.postgres import PostgresBinaryRepository
from tablefs.settings import Settings, get_settings
from tablefs.utils.logging import get_logger

logger = get_logger("tablefs.bootstrap")


def build_repository(app_settings: Optional[Settings] = None) -> PostgresBinaryRepository:
    """Create the Postgres store using the table settings."""
    app_settings = app_settings or get_settings()
    if not app_settings.DATABASE_URL:
        raise ValueError("DATABASE_URL is not configured")

    return PostgresBinaryRepository(
        database_url=app_settings.DATABASE_URL,
        table_name=app_settings.BINARIES_TABLE_NAME,
        ensure_schema=app_settings.ENSURE_SCHEMA,
    )


def build_adapter(app_settings: Optional[Settings] = None) -> DatabaseAdapter:
    """Wire store + adapter the way a host application would."""
    app_settings = app_settings or get_settings()
    repository = build_repository(app_settings)
    adapter = create_adapter({"store": repository, "path_strategy": app_settings.PATH_STRATEGY})
    logger.info(
        "Database filesystem ready | table=%s paths=%s",
        repository.table_name,
        adapter.paths.name,
    )
    return adapter
