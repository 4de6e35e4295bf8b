from .work_entry import WorkEntry

__all__ = [
    "WorkEntry",
]
