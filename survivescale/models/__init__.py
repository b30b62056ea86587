"""Game models for Survive & Scale."""

from .question import Question, load_questions
from .game_state import GameState, YearSummary, MAX_YEARS

__all__ = [
    "Question",
    "load_questions",
    "GameState",
    "YearSummary",
    "MAX_YEARS",
]
