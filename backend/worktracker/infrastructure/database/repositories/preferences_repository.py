"""Concrete PreferencesStore implementation backed by SQLAlchemy."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from worktracker.application.interfaces import PreferencesStore
from worktracker.infrastructure.database.models import PreferenceModel

logger = logging.getLogger(__name__)


class SQLAlchemyPreferences(PreferencesStore):
    """Implements the PreferencesStore port as rows of a 'preferences' table.

    Each call opens its own session; ``set`` replaces the row's value inside
    one transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def get(self, key: str) -> str | None:
        async with self._session_factory() as session:
            model = await session.get(PreferenceModel, key)
            return model.value if model else None

    async def set(self, key: str, value: str) -> bool:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    model = await session.get(PreferenceModel, key)
                    if model is None:
                        session.add(PreferenceModel(key=key, value=value))
                    else:
                        model.value = value
        except SQLAlchemyError as exc:
            logger.error("Could not store preference '%s': %s", key, exc)
            return False
        return True
