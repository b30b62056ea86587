"""Game engine for Survive & Scale."""

from .game_engine import DEFAULT_STORAGE_KEY, AnswerError, GameEngine
from .rewards import yearly_increment

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "AnswerError",
    "GameEngine",
    "yearly_increment",
]
