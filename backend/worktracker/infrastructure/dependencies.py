"""Wiring — builds the preferences backend and exposes FastAPI dependencies.

One EntryStore and one WorkEntryService are created per application in the
lifespan and kept on ``app.state``; request handlers only ever receive them.
"""

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine

from worktracker.application.interfaces import PreferencesStore
from worktracker.application.services import WorkEntryService
from worktracker.config import Settings
from worktracker.infrastructure.database import Base, build_engine, build_session_factory
from worktracker.infrastructure.database.repositories import SQLAlchemyPreferences
from worktracker.infrastructure.storage import JsonFilePreferences


async def build_preferences(settings: Settings) -> tuple[PreferencesStore, AsyncEngine | None]:
    """Create the configured preferences backend.

    Returns the backend and, for the database backend, the engine that
    must be disposed on shutdown.
    """
    if settings.storage_backend == "file":
        return JsonFilePreferences(settings.preferences_file), None

    if settings.storage_backend == "database":
        engine = build_engine(settings.database_url, echo=False)
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        return SQLAlchemyPreferences(build_session_factory(engine)), engine

    raise ValueError(f"Unknown storage backend '{settings.storage_backend}'")


def get_work_entry_service(request: Request) -> WorkEntryService:
    """Provides the application's WorkEntryService."""
    return request.app.state.work_entry_service
