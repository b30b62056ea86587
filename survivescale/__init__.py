"""Survive & Scale: a 25-year company survival trivia game."""

__version__ = "0.1.0"
