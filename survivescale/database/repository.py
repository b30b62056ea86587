"""Repository for save slot persistence."""

import logging

from sqlalchemy.orm import Session

from .models import SaveSlotModel


class SaveSlotRepository:
    """Repository for reading and writing save slots.

    Attributes:
        session: SQLAlchemy database session.
    """

    def __init__(self, session: Session) -> None:
        """Initialize repository.

        Args:
            session: Database session.
        """
        self.session = session
        self.logger = logging.getLogger(__name__)

    def get_slot(self, key: str) -> SaveSlotModel | None:
        """Get a save slot by key.

        Args:
            key: Slot key.

        Returns:
            Save slot model or None.
        """
        return self.session.get(SaveSlotModel, key)

    def save_slot(self, key: str, value: str) -> SaveSlotModel:
        """Create or overwrite a save slot.

        Args:
            key: Slot key.
            value: Serialized game state.

        Returns:
            The stored save slot model.
        """
        slot = self.get_slot(key)
        if not slot:
            self.logger.debug(f"Save slot {key} not found, creating new record")
            slot = SaveSlotModel(key=key, value=value)
            self.session.add(slot)
        else:
            slot.value = value

        self.session.commit()
        self.logger.debug(f"Saved slot {key} ({len(value)} bytes)")
        return slot

    def delete_slot(self, key: str) -> bool:
        """Delete a save slot.

        Args:
            key: Slot key.

        Returns:
            True if deleted, False if not found.
        """
        slot = self.get_slot(key)
        if not slot:
            return False

        self.session.delete(slot)
        self.session.commit()
        self.logger.debug(f"Deleted slot {key}")
        return True
