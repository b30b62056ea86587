"""Shared fixtures for Survive & Scale tests."""

import pytest

from survivescale.database.store import MemoryStore
from survivescale.models.question import Question

RIGHT = 0
WRONG = 1


def make_questions(count: int = 50) -> tuple[Question, ...]:
    """Build a fixed question list where option 0 is always correct."""
    return tuple(
        Question(
            id=i + 1,
            year=i // 2 + 1,
            text=f"Question {i + 1}?",
            options=("Right", "Wrong", "Also wrong"),
            correct_index=RIGHT,
            explanation=f"Explanation {i + 1}" if i % 2 == 0 else None,
        )
        for i in range(count)
    )


@pytest.fixture
def questions() -> tuple[Question, ...]:
    return make_questions()


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()
