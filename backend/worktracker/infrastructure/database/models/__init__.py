from .preference import PreferenceModel

__all__ = [
    "PreferenceModel",
]
