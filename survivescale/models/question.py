"""Question model and loader for Survive & Scale."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

# Bundled question set: 50 questions, two per year
DEFAULT_QUESTIONS_PATH = Path(__file__).parent.parent / "data" / "questions.json"


@dataclass(frozen=True)
class Question:
    """A single multiple-choice question.

    Attributes:
        id: Unique identifier, used for ordering.
        year: Year label the question belongs to.
        text: Prompt shown to the player.
        options: Answer options in display order.
        correct_index: Index into options of the correct answer.
        explanation: Optional text revealed after answering.
    """

    id: int
    year: int
    text: str
    options: tuple[str, ...]
    correct_index: int
    explanation: str | None = None

    def __post_init__(self) -> None:
        if not self.options:
            raise ValueError(f"Question {self.id} has no options")
        if not 0 <= self.correct_index < len(self.options):
            raise ValueError(
                f"Question {self.id} correct index {self.correct_index} "
                f"out of range for {len(self.options)} options"
            )

    def is_correct(self, option_index: int) -> bool:
        """Check whether an option index is the correct answer."""
        return option_index == self.correct_index

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Question":
        """Build a question from a JSON object.

        Accepts both ``correctIndex`` and ``correct_index``.
        """
        correct_index = data.get("correctIndex", data.get("correct_index"))
        if correct_index is None:
            raise ValueError(f"Question {data.get('id')} is missing correctIndex")
        return cls(
            id=int(data["id"]),
            year=int(data["year"]),
            text=str(data["text"]),
            options=tuple(str(option) for option in data["options"]),
            correct_index=int(correct_index),
            explanation=data.get("explanation") or None,
        )


def get_questions_path() -> Path:
    """Get question file path from environment or use the bundled set.

    Returns:
        Path to the questions JSON file.
    """
    path_str = os.getenv("QUESTIONS_PATH")
    if path_str:
        return Path(path_str)
    return DEFAULT_QUESTIONS_PATH


def load_questions(path: Path | str | None = None) -> tuple[Question, ...]:
    """Load questions from a JSON file, sorted by id.

    Args:
        path: Path to the JSON file. If None, uses QUESTIONS_PATH from env or
            the bundled question set.

    Returns:
        Immutable, id-ordered tuple of questions.
    """
    if path is None:
        path = get_questions_path()

    path = Path(path)
    with path.open(encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError(f"{path} must contain a JSON array of questions")

    questions = sorted((Question.from_dict(item) for item in raw), key=lambda q: q.id)
    logger.info(f"Loaded {len(questions)} questions from {path}")
    return tuple(questions)
