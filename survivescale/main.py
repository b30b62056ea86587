"""Main entry point for Survive & Scale."""

import logging
import os
import sys

from dotenv import load_dotenv


def setup_logging() -> None:
    """Configure logging for the application."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


def main() -> None:
    """Run the Survive & Scale Telegram bot, or the terminal demo with ``demo``."""
    # Load environment variables
    load_dotenv()

    if len(sys.argv) > 1 and sys.argv[1] == "demo":
        run_demo()
        return

    # Setup logging
    setup_logging()
    logger = logging.getLogger(__name__)

    logger.info("🏢 Starting Survive & Scale Bot...")

    # Check for required environment variables
    token = os.getenv("TELEGRAM_BOT_TOKEN")
    if not token:
        logger.error(
            "TELEGRAM_BOT_TOKEN environment variable is required. "
            "Set it in .env file or environment."
        )
        sys.exit(1)

    # Import and run bot
    from survivescale.bot.telegram_bot import SurviveScaleBot

    try:
        bot = SurviveScaleBot(token)
        bot.setup()
        bot.run()
    except Exception as e:
        logger.exception(f"Failed to start bot: {e}")
        sys.exit(1)


def run_demo() -> None:
    """Play a game in the terminal without Telegram."""
    from survivescale.database.store import MemoryStore
    from survivescale.engine.game_engine import GameEngine
    from survivescale.models.question import load_questions
    from survivescale.renderer.question_renderer import OPTION_LABELS, QuestionRenderer
    from survivescale.renderer.state_renderer import StateRenderer

    print("🏢 Survive & Scale Demo 🏢")
    print("=" * 40)

    questions = load_questions()
    engine = GameEngine(questions, store=MemoryStore())
    renderer = StateRenderer(engine.state, total_questions=len(questions))
    print(renderer.render_full_snapshot())

    while not engine.state.is_over:
        question = engine.current_question()
        if question is None:
            print("📭 No questions left.")
            break

        print()
        print(QuestionRenderer(engine.state).render_question(question))
        try:
            choice = input("Your answer: ").strip().upper()
        except EOFError:
            print()
            return

        if len(choice) != 1 or choice not in OPTION_LABELS[: len(question.options)]:
            print(f"❓ Pick a letter between A and {OPTION_LABELS[len(question.options) - 1]}.")
            continue

        option_index = OPTION_LABELS.index(choice)
        result = engine.answer(option_index)
        print(QuestionRenderer(engine.state).render_feedback(question, option_index))

        if result.get("summary") is not None:
            renderer = StateRenderer(engine.state, total_questions=len(questions))
            print()
            print(renderer.render_year_summary(result["summary"]))
            print(renderer.render_full_snapshot())

    print()
    print(StateRenderer(engine.state, total_questions=len(questions)).render_game_end())


if __name__ == "__main__":
    main()
