"""State renderer for Survive & Scale."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from survivescale.models.game_state import GameState, YearSummary

from survivescale.models.game_state import MAX_YEARS, QUESTIONS_PER_YEAR

from .formatting import format_money, health_bar, health_percent

RULE = "═══════════════════════════════════"


class StateRenderer:
    """Renders game state snapshots, year summaries and the final result.

    Attributes:
        state: Reference to game state.
        total_questions: Number of questions in the game.
    """

    def __init__(
        self, state: "GameState", total_questions: int = MAX_YEARS * QUESTIONS_PER_YEAR
    ) -> None:
        """Initialize state renderer.

        Args:
            state: The game state to render.
            total_questions: Size of the question sequence.
        """
        self.state = state
        self.total_questions = total_questions

    def render_full_snapshot(self) -> str:
        """Render complete game state snapshot.

        Returns:
            Formatted string with complete game state.
        """
        sections = [
            self._render_header(),
            self._render_health(),
            f"💰 Money: {format_money(self.state.money)}",
            self.render_progress_text(),
        ]

        return "\n".join(sections)

    def _render_header(self) -> str:
        """Render game header."""
        return f"{RULE}\n🏢 Survive & Scale | {self.render_year_text()}\n{RULE}"

    def _render_health(self) -> str:
        """Render company health."""
        return f"❤️ Health: {health_bar(self.state.health)} {health_percent(self.state.health)}%"

    def render_year_text(self) -> str:
        """Render the current year, e.g. ``Year 3 of 25``."""
        return f"Year {min(self.state.year, MAX_YEARS)} of {MAX_YEARS}"

    def render_progress_text(self) -> str:
        """Render progress through the question sequence."""
        return (
            f"📈 Progress: Year {min(self.state.year, MAX_YEARS)} • Questions answered "
            f"{self.state.global_question_index} / {self.total_questions}"
        )

    def render_year_summary(self, summary: "YearSummary") -> str:
        """Render the outcome of a year.

        Args:
            summary: Year-end summary or bankruptcy record.

        Returns:
            Formatted summary.
        """
        lines = [f"📊 Year {summary.year} summary"]

        if summary.correct_this_year is not None:
            lines.append(
                f"Correct answers this year: {summary.correct_this_year} / {QUESTIONS_PER_YEAR}"
            )
        lines.append(f"Money gained this year: {format_money(summary.money_gained)}")
        if summary.total_money is not None:
            lines.append(f"Total money: {format_money(summary.total_money)}")
        lines.append(f"Company health: {summary.health}%")

        if summary.bankrupt:
            lines.append("💥 Bankrupt!")

        return "\n".join(lines)

    def render_answer_error(self, result: dict) -> str:
        """Render a rejected answer.

        Args:
            result: Failed answer result.

        Returns:
            Formatted error message.
        """
        return f"❌ {result.get('message', 'Answer rejected')}"

    def render_game_end(self) -> str:
        """Render game end summary.

        Returns:
            Formatted game end message.
        """
        state = self.state
        if state.is_over and state.year > MAX_YEARS:
            title = "🏆 You Win! Company Survived! 🏆"
            body = [f"Congratulations, you survived {MAX_YEARS} years."]
        elif state.is_over and state.health <= 0:
            title = "💥 Bankrupt! Game Over 💥"
            body = [f"Your company went bankrupt in year {state.year}."]
        else:
            title = "🏁 Game Over 🏁"
            body = []

        lines = [RULE, title, RULE, ""]
        lines.extend(body)
        lines.append(f"Final money: {format_money(state.money)}")
        lines.append(f"Final health: {health_percent(state.health)}%")

        return "\n".join(lines)
