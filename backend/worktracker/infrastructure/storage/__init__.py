from .json_file_preferences import JsonFilePreferences

__all__ = [
    "JsonFilePreferences",
]
