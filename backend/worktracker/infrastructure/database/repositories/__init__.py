from .preferences_repository import SQLAlchemyPreferences

__all__ = [
    "SQLAlchemyPreferences",
]
