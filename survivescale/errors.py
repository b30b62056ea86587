"""Exceptions shared across Survive & Scale."""


class PersistenceError(Exception):
    """A save slot could not be read or written."""


class SnapshotError(PersistenceError):
    """A stored snapshot is corrupt or violates the game state invariants."""
