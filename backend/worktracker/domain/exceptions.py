"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class MalformedPersistedDataError(Exception):
    """Raised when a persisted blob is not a JSON array of entry objects."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Malformed persisted data: {reason}")


class PersistenceWriteError(Exception):
    """Raised when the preferences backend fails or rejects a write.

    The caller decides how to surface it; a failed save is never
    reported as successful.
    """

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Could not persist '{key}': {reason}")
