"""Abstract key-value preferences interface (port) for the entry blob."""

from abc import ABC, abstractmethod


class PreferencesStore(ABC):
    """Port for local string-valued key-value storage — implemented in the infrastructure layer."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Return the stored text for ``key``, or None when absent."""
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> bool:
        """Replace the text stored under ``key``. Returns False if the write failed."""
        ...
