from .base import StateStore
from .sqlite_adapter import SQLiteStateStore

__all__ = [
    "StateStore",
    "SQLiteStateStore",
]
