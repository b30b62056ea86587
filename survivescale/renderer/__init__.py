"""Text renderers for Survive & Scale."""

from .formatting import format_money, health_bar, health_percent
from .question_renderer import QuestionRenderer
from .state_renderer import StateRenderer

__all__ = [
    "format_money",
    "health_bar",
    "health_percent",
    "QuestionRenderer",
    "StateRenderer",
]
