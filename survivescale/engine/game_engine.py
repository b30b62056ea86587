"""Game engine for Survive & Scale."""

import json
import logging
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

from survivescale.database.store import KeyValueStore
from survivescale.errors import PersistenceError, SnapshotError
from survivescale.models.game_state import MAX_YEARS, GameState, YearSummary
from survivescale.models.question import Question

from .rewards import PERFECT_YEAR_HEAL, WRONG_ANSWER_DAMAGE, yearly_increment

# Save slot key for single-player games
DEFAULT_STORAGE_KEY = "survive_scale_v1"

BANKRUPTCY_REASON = "health <= 0 after wrong answer"

StateListener = Callable[[GameState], None]


class AnswerError(Enum):
    """Reasons an answer can be rejected."""

    GAME_OVER = "game_over"
    NO_QUESTION = "no_question"


class GameEngine:
    """Main game engine driving a single game.

    The engine owns the game state. It is only changed through ``answer``,
    ``reset`` and ``load``; after each change the state is saved to the store
    and a snapshot is passed to the listener.

    Attributes:
        questions: Ordered, immutable question sequence.
        state: The current game state.
        store: Key-value store holding the save slot, if any.
        storage_key: Key of the save slot.
    """

    def __init__(
        self,
        questions: Sequence[Question],
        on_state_change: StateListener | None = None,
        store: KeyValueStore | None = None,
        storage_key: str = DEFAULT_STORAGE_KEY,
    ) -> None:
        """Initialize a new game engine.

        Args:
            questions: Questions ordered by id.
            on_state_change: Listener called with a state snapshot after every change.
            store: Store for the save slot. Nothing is persisted if None.
            storage_key: Key of the save slot.
        """
        self.questions: tuple[Question, ...] = tuple(questions)
        self.state = GameState()
        self.store = store
        self.storage_key = storage_key
        self.logger = logging.getLogger(__name__)
        self._listener = on_state_change
        self._notify()

    def set_listener(self, listener: StateListener | None) -> None:
        """Replace the state listener; None removes it."""
        self._listener = listener

    def _notify(self) -> None:
        if self._listener is not None:
            self._listener(self.state.snapshot())

    def _save(self) -> None:
        if self.store is None:
            return
        try:
            self.store.set(self.storage_key, self.state.to_json())
        except (PersistenceError, OSError) as e:
            self.logger.warning(f"Save failed for {self.storage_key}: {e}")

    def load(self) -> bool:
        """Restore the state from the save slot.

        Unknown keys in the snapshot are ignored and missing keys keep their
        current value. A corrupt or invalid snapshot is logged and the state
        is left untouched.

        Returns:
            True if a snapshot was applied.
        """
        if self.store is None:
            return False

        try:
            raw = self.store.get(self.storage_key)
            if not raw:
                return False
            try:
                data = json.loads(raw)
            except ValueError as e:
                raise SnapshotError(f"Snapshot is not valid JSON: {e}") from e
            self.state = self.state.merged_with(data)
        except (PersistenceError, OSError) as e:
            self.logger.warning(f"Load failed for {self.storage_key}: {e}")
            return False

        self.logger.info(
            f"Restored {self.storage_key}: year {self.state.year}, "
            f"health {self.state.health}, over={self.state.is_over}"
        )
        self._notify()
        return True

    def reset(self) -> None:
        """Start over with a fresh game state."""
        self.state = GameState()
        self.logger.info(f"Game {self.storage_key} reset")
        self._save()
        self._notify()

    def current_question(self) -> Question | None:
        """Get the question awaiting an answer.

        Returns:
            The current question, or None once the sequence is exhausted.
        """
        index = self.state.global_question_index
        if 0 <= index < len(self.questions):
            return self.questions[index]
        return None

    @staticmethod
    def yearly_increment(year: int) -> int:
        """Money earned for answering both questions of a year correctly."""
        return yearly_increment(year)

    def answer(self, option_index: int) -> dict[str, Any]:
        """Answer the current question.

        Args:
            option_index: Index of the chosen option.

        Returns:
            Result dictionary. On success it has ``correct``, ``game_over``
            and ``summary`` (a YearSummary when a year ended or the company
            went bankrupt, otherwise None). On failure it has ``error`` (an
            AnswerError) and ``message``, and the state is unchanged.
        """
        if self.state.is_over:
            return {
                "success": False,
                "error": AnswerError.GAME_OVER,
                "message": "The game is over",
            }

        question = self.current_question()
        if question is None:
            return {
                "success": False,
                "error": AnswerError.NO_QUESTION,
                "message": "No question left to answer",
            }

        state = self.state
        correct = question.is_correct(option_index)
        self.logger.debug(
            f"Year {state.year} Q{state.question_index_in_year + 1} "
            f"(#{question.id}): option {option_index}, correct={correct}"
        )

        if correct:
            state.answered_this_year_correct_count += 1
        else:
            state.apply_damage(WRONG_ANSWER_DAMAGE)

        year_complete = state.is_last_question_of_year
        state.advance_question()

        if not correct and state.health <= 0:
            return self._go_bankrupt()

        if year_complete:
            return self._end_year(correct)

        self._save()
        self._notify()
        return {"success": True, "correct": correct, "game_over": False, "summary": None}

    def _go_bankrupt(self) -> dict[str, Any]:
        """End the game right after a wrong answer emptied health."""
        state = self.state
        state.is_over = True
        summary = YearSummary(
            year=state.year,
            money_gained=0,
            health=state.health,
            bankrupt=True,
            reason=BANKRUPTCY_REASON,
        )
        state.last_year_summary = summary
        self.logger.info(f"Bankrupt in year {state.year} with ${state.money}")

        self._save()
        self._notify()
        return {"success": True, "correct": False, "game_over": True, "summary": summary}

    def _end_year(self, correct: bool) -> dict[str, Any]:
        """Apply end-of-year accounting after the year's second answer."""
        state = self.state
        money_gained = 0

        if state.answered_this_year_correct_count == 2:
            money_gained = yearly_increment(state.year)
            state.money += money_gained
            state.heal(PERFECT_YEAR_HEAL)
        elif state.answered_this_year_correct_count == 0:
            # Two wrong answers always trip the bankruptcy check first; re-checked
            # here as an invariant of the year-end accounting.
            if state.health <= 0:
                state.is_over = True

        summary = YearSummary(
            year=state.year,
            money_gained=money_gained,
            health=state.health,
            bankrupt=state.is_over,
            correct_this_year=state.answered_this_year_correct_count,
            total_money=state.money,
        )
        state.last_year_summary = summary
        self.logger.info(
            f"Year {state.year} complete: {summary.correct_this_year}/2 correct, "
            f"+${money_gained}, health {state.health}"
        )

        if not state.is_over:
            state.year += 1
            if state.year > MAX_YEARS:
                state.is_over = True
                self.logger.info(f"Survived all {MAX_YEARS} years with ${state.money}")
            state.answered_this_year_correct_count = 0

        self._save()
        self._notify()
        return {
            "success": True,
            "correct": correct,
            "game_over": state.is_over,
            "summary": summary,
        }

    def has_won(self) -> bool:
        """Check if the company survived every year."""
        return self.state.is_over and self.state.year > MAX_YEARS

    def has_lost(self) -> bool:
        """Check if the company went bankrupt."""
        return self.state.is_over and self.state.health <= 0
