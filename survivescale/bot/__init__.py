"""Telegram bot interface for Survive & Scale."""

from .telegram_bot import SurviveScaleBot
from .handlers import CommandHandlers, GameHandlers

__all__ = [
    "SurviveScaleBot",
    "CommandHandlers",
    "GameHandlers",
]
