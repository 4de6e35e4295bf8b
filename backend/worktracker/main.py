"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from worktracker.application.interfaces import PreferencesStore
from worktracker.application.services import EntryStore, WorkEntryService
from worktracker.config import Settings, get_settings
from worktracker.domain.ids import IdGenerator, build_id_generator
from worktracker.infrastructure.dependencies import build_preferences
from worktracker.infrastructure.logging.log_config import setup_logging
from worktracker.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    preferences: PreferencesStore | None = None,
    id_generator: IdGenerator | None = None,
) -> FastAPI:
    """Factory function that builds and configures the FastAPI application.

    ``preferences`` and ``id_generator`` override the configured backend and
    id strategy (used by tests).
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Application lifespan — open storage, load entries, dispose on shutdown."""
        setup_logging(settings)

        engine = None
        backend = preferences
        if backend is None:
            backend, engine = await build_preferences(settings)

        store = EntryStore(backend, key=settings.entries_key)
        await store.load()
        app.state.entry_store = store
        app.state.work_entry_service = WorkEntryService(
            store,
            id_generator=id_generator or build_id_generator(settings.id_strategy),
        )
        logger.info(
            "Work tracker ready — backend=%s, entries=%d",
            settings.storage_backend if preferences is None else type(backend).__name__,
            len(store),
        )

        yield

        if engine is not None:
            await engine.dispose()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "worktracker.main:app",
        host=_settings.host,
        port=_settings.port,
        reload=_settings.app_env == "development",
    )
