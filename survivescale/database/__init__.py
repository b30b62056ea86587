"""Database layer for Survive & Scale save slots."""

from .base import Base, get_engine, init_db
from .repository import SaveSlotRepository
from .store import KeyValueStore, MemoryStore, SqlStateStore

__all__ = [
    "Base",
    "get_engine",
    "init_db",
    "SaveSlotRepository",
    "KeyValueStore",
    "MemoryStore",
    "SqlStateStore",
]
