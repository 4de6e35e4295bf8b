from .preferences_store import PreferencesStore

__all__ = [
    "PreferencesStore",
]
