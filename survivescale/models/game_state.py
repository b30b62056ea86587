"""Game state model for Survive & Scale."""

import copy
import json
from dataclasses import asdict, dataclass, field, fields
from typing import Any

from survivescale.errors import SnapshotError

# A full game lasts 25 years of two questions each
MAX_YEARS = 25
QUESTIONS_PER_YEAR = 2

STARTING_HEALTH = 100
MAX_HEALTH = 100
MIN_HEALTH = 0


@dataclass
class YearSummary:
    """Outcome of a completed year, or the bankruptcy record.

    Year-end summaries carry ``correct_this_year`` and ``total_money``;
    bankruptcy records carry ``reason`` instead.

    Attributes:
        year: Year the summary belongs to.
        money_gained: Money earned this year.
        health: Company health after the year's accounting.
        bankrupt: Whether the company went bankrupt.
        correct_this_year: Correct answers this year (0-2).
        total_money: Money accumulated so far.
        reason: Why the game ended early.
    """

    year: int
    money_gained: int
    health: int
    bankrupt: bool
    correct_this_year: int | None = None
    total_money: int | None = None
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize, leaving out fields that do not apply."""
        return {key: value for key, value in asdict(self).items() if value is not None}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "YearSummary":
        """Deserialize a stored summary, ignoring unknown keys."""
        if not isinstance(data, dict):
            raise SnapshotError("last_year_summary must be an object")

        values: dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            if f.name == "bankrupt":
                if not isinstance(value, bool):
                    raise SnapshotError("summary bankrupt must be a boolean")
            elif f.name == "reason":
                if value is not None and not isinstance(value, str):
                    raise SnapshotError("summary reason must be a string")
            elif value is not None and not _is_int(value):
                raise SnapshotError(f"summary {f.name} must be an integer")
            values[f.name] = value

        required = ("year", "money_gained", "health", "bankrupt")
        missing = [name for name in required if values.get(name) is None]
        if missing:
            raise SnapshotError(f"summary missing fields: {missing}")
        return cls(**values)


@dataclass
class GameState:
    """Complete state of a single game.

    Attributes:
        year: Current year, 1..25 while the game is active (26 after victory).
        question_index_in_year: Pending slot within the year, 0 or 1.
        global_question_index: Cursor into the question sequence.
        money: Money accumulated so far.
        health: Company health, 0..100.
        answered_this_year_correct_count: Correct answers this year.
        is_over: Whether the game has ended.
        last_year_summary: Most recent year summary or bankruptcy record.
    """

    year: int = 1
    question_index_in_year: int = 0
    global_question_index: int = 0
    money: int = 0
    health: int = STARTING_HEALTH
    answered_this_year_correct_count: int = 0
    is_over: bool = False
    last_year_summary: YearSummary | None = field(default=None)

    @property
    def is_last_question_of_year(self) -> bool:
        """Check if the pending question is the year's second."""
        return self.question_index_in_year == QUESTIONS_PER_YEAR - 1

    def apply_damage(self, amount: int) -> None:
        """Lower health, floored at zero."""
        self.health = max(MIN_HEALTH, self.health - amount)

    def heal(self, amount: int) -> None:
        """Raise health, capped at the maximum."""
        self.health = min(MAX_HEALTH, self.health + amount)

    def advance_question(self) -> None:
        """Move the cursor to the next question and toggle the slot."""
        self.global_question_index += 1
        self.question_index_in_year = (
            self.question_index_in_year + 1
        ) % QUESTIONS_PER_YEAR

    def snapshot(self) -> "GameState":
        """Get an independent copy safe to hand to collaborators."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the state to plain JSON-compatible values."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        if self.last_year_summary is not None:
            data["last_year_summary"] = self.last_year_summary.to_dict()
        return data

    def to_json(self) -> str:
        """Serialize the state to a JSON string."""
        return json.dumps(self.to_dict())

    def merged_with(self, data: dict[str, Any]) -> "GameState":
        """Build a new state from this one, overridden by a stored snapshot.

        Keys this state does not know are ignored and absent keys keep their
        current value. Known keys must carry the right type, and the result
        must satisfy the state invariants.

        Args:
            data: Decoded snapshot.

        Returns:
            The merged state.

        Raises:
            SnapshotError: If the snapshot is malformed.
        """
        if not isinstance(data, dict):
            raise SnapshotError("snapshot must be a JSON object")

        merged = self.snapshot()
        for f in fields(merged):
            if f.name not in data:
                continue
            value = data[f.name]
            if f.name == "last_year_summary":
                value = None if value is None else YearSummary.from_dict(value)
            elif f.name == "is_over":
                if not isinstance(value, bool):
                    raise SnapshotError("is_over must be a boolean")
            elif not _is_int(value):
                raise SnapshotError(f"{f.name} must be an integer")
            setattr(merged, f.name, value)

        merged.validate()
        return merged

    def validate(self) -> None:
        """Check the state invariants.

        Raises:
            SnapshotError: If any invariant is violated.
        """
        if not MIN_HEALTH <= self.health <= MAX_HEALTH:
            raise SnapshotError(f"health {self.health} outside 0..100")
        if self.money < 0:
            raise SnapshotError(f"money {self.money} is negative")
        if not 1 <= self.year <= MAX_YEARS + 1:
            raise SnapshotError(f"year {self.year} outside 1..{MAX_YEARS + 1}")
        if self.year > MAX_YEARS and not self.is_over:
            raise SnapshotError(f"year {self.year} is past the last year of an active game")
        if self.question_index_in_year not in (0, 1):
            raise SnapshotError(
                f"question_index_in_year {self.question_index_in_year} not 0 or 1"
            )
        if self.answered_this_year_correct_count not in (0, 1, 2):
            raise SnapshotError(
                f"answered_this_year_correct_count "
                f"{self.answered_this_year_correct_count} not in 0..2"
            )
        if self.global_question_index < 0:
            raise SnapshotError("global_question_index is negative")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
