"""Telegram bot for Survive & Scale."""

import logging
import os
from collections.abc import Sequence

from telegram import Update
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

from survivescale.database.store import KeyValueStore, SqlStateStore
from survivescale.engine.game_engine import DEFAULT_STORAGE_KEY, GameEngine
from survivescale.models.question import Question, load_questions

from .handlers import CommandHandlers, GameHandlers

logger = logging.getLogger(__name__)


class SurviveScaleBot:
    """Main Telegram bot for Survive & Scale.

    Every chat plays its own game, saved in its own slot.

    Attributes:
        token: Telegram bot token.
        questions: Question sequence shared by all games.
        store: Store holding the save slots.
        app: Telegram Application instance.
        games: Dictionary of game engines by chat ID.
        command_handlers: Handler for bot commands.
        game_handlers: Handler for answers.
    """

    def __init__(
        self,
        token: str | None = None,
        questions: Sequence[Question] | None = None,
        store: KeyValueStore | None = None,
    ) -> None:
        """Initialize the Telegram bot.

        Args:
            token: Telegram bot token. If not provided, reads from env.
            questions: Questions to play with. Loads the configured set if None.
            store: Save slot store. Uses the SQLite database if None.
        """
        self.token = token or os.getenv("TELEGRAM_BOT_TOKEN", "")
        if not self.token:
            raise ValueError(
                "Telegram bot token required. Set TELEGRAM_BOT_TOKEN env var."
            )

        self.questions = tuple(questions) if questions is not None else load_questions()
        self.store = store
        self.games: dict[str, GameEngine] = {}
        self.command_handlers = CommandHandlers(self)
        self.game_handlers = GameHandlers(self)
        self.app: Application | None = None

    def setup(self) -> None:
        """Set up the bot application and handlers."""
        # Initialize database
        if self.store is None:
            self.store = SqlStateStore.from_path()

        # Create application
        self.app = Application.builder().token(self.token).build()

        # Register command handlers
        self.app.add_handler(CommandHandler("start", self.command_handlers.start))
        self.app.add_handler(CommandHandler("help", self.command_handlers.help))
        self.app.add_handler(CommandHandler("play", self.command_handlers.play))
        self.app.add_handler(CommandHandler("status", self.command_handlers.status))
        self.app.add_handler(CommandHandler("reset", self.command_handlers.reset))

        # Register callback query handler for inline buttons
        self.app.add_handler(CallbackQueryHandler(self.game_handlers.handle_callback))

        # Register message handler for typed answers
        self.app.add_handler(
            MessageHandler(
                filters.TEXT & ~filters.COMMAND,
                self.game_handlers.handle_message,
            )
        )

        # Error handler
        self.app.add_error_handler(self.error_handler)

        logger.info(f"Bot setup complete with {len(self.questions)} questions")

    async def error_handler(
        self, update: object, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle errors in the bot."""
        logger.error(f"Exception while handling update: {context.error}")

        if isinstance(update, Update) and update.effective_chat:
            await context.bot.send_message(
                chat_id=update.effective_chat.id,
                text="❌ An error occurred. Please try again.",
            )

    def run(self) -> None:
        """Run the bot (blocking)."""
        if not self.app:
            self.setup()

        logger.info("Starting bot...")
        self.app.run_polling(allowed_updates=Update.ALL_TYPES)

    def get_or_create_game_for_chat(self, chat_id: int) -> GameEngine:
        """Get the game for a chat, resuming its saved slot on first use.

        Args:
            chat_id: Telegram chat ID.

        Returns:
            GameEngine instance.
        """
        game_id = str(chat_id)
        if game_id not in self.games:
            engine = GameEngine(
                self.questions,
                store=self.store,
                storage_key=f"{DEFAULT_STORAGE_KEY}:{game_id}",
            )
            if engine.load():
                logger.info(f"Resumed saved game for chat {game_id}")
            self.games[game_id] = engine
        return self.games[game_id]
