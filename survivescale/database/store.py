"""Key-value stores backing the game's save slot."""

import logging
from pathlib import Path
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from survivescale.errors import PersistenceError

from .base import init_db
from .repository import SaveSlotRepository


class KeyValueStore(Protocol):
    """Storage the engine saves serialized state snapshots into.

    Implementations report failures as PersistenceError; file-backed stores
    may also let OSError through. The engine logs both and keeps playing.
    """

    def get(self, key: str) -> str | None:
        """Return the value stored under key, or None."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...


class MemoryStore:
    """In-memory store, used by tests and the terminal demo.

    Attributes:
        data: Stored values by key.
    """

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class SqlStateStore:
    """Store backed by the ``save_slots`` table.

    Every call runs in its own session so a failed write never leaves a
    broken session behind.

    Attributes:
        session_factory: Factory producing database sessions.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        """Initialize the store.

        Args:
            session_factory: Session factory bound to an initialized database.
        """
        self.session_factory = session_factory
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_path(cls, db_path: Path | str | None = None) -> "SqlStateStore":
        """Create a store on a SQLite file, creating tables as needed.

        Args:
            db_path: Path to the SQLite database file. If None, uses
                DATABASE_PATH from env or default.

        Returns:
            A ready-to-use store.
        """
        engine = init_db(db_path)
        return cls(sessionmaker(autocommit=False, autoflush=False, bind=engine))

    def get(self, key: str) -> str | None:
        try:
            with self.session_factory() as session:
                slot = SaveSlotRepository(session).get_slot(key)
                return slot.value if slot else None
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to read save slot {key}: {e}") from e

    def set(self, key: str, value: str) -> None:
        try:
            with self.session_factory() as session:
                SaveSlotRepository(session).save_slot(key, value)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to write save slot {key}: {e}") from e
