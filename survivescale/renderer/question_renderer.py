"""Question renderer for Survive & Scale."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from survivescale.models.game_state import GameState
    from survivescale.models.question import Question

from survivescale.models.game_state import QUESTIONS_PER_YEAR

OPTION_LABELS = "ABCDEFGH"


class QuestionRenderer:
    """Renders questions and answer feedback.

    Attributes:
        state: Reference to game state.
    """

    def __init__(self, state: "GameState") -> None:
        """Initialize question renderer.

        Args:
            state: The game state, used for the year and slot.
        """
        self.state = state

    @staticmethod
    def option_label(index: int) -> str:
        """Get the letter shown for an option."""
        if index < len(OPTION_LABELS):
            return OPTION_LABELS[index]
        return str(index + 1)

    def render_question(self, question: "Question") -> str:
        """Render a question with its lettered options.

        Args:
            question: The question to render.

        Returns:
            Formatted question prompt.
        """
        slot = self.state.question_index_in_year + 1
        lines = [
            f"📅 Year {question.year} | Question {slot} of {QUESTIONS_PER_YEAR}",
            "",
            f"❓ {question.text}",
            "",
        ]
        for i, option in enumerate(question.options):
            lines.append(f"{self.option_label(i)}. {option}")

        return "\n".join(lines)

    def render_feedback(self, question: "Question", option_index: int) -> str:
        """Render the verdict on an answer, with the explanation if any.

        Args:
            question: The question that was answered.
            option_index: The option the player chose.

        Returns:
            Formatted feedback message.
        """
        correct_option = question.options[question.correct_index]
        if question.is_correct(option_index):
            lines = [f"✅ Correct! {correct_option}"]
        else:
            label = self.option_label(question.correct_index)
            lines = [f"❌ Wrong. The answer was {label}. {correct_option}"]

        if question.explanation:
            lines.append(f"💡 {question.explanation}")

        return "\n".join(lines)
