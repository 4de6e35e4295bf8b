from .base import Base
from .session import build_engine, build_session_factory
from .models import PreferenceModel

__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "PreferenceModel",
]
