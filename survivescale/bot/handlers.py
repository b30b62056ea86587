"""Command and game handlers for Telegram bot."""

import logging
from typing import TYPE_CHECKING

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.ext import ContextTypes

if TYPE_CHECKING:
    from .telegram_bot import SurviveScaleBot

from survivescale.engine.game_engine import GameEngine
from survivescale.models.question import Question
from survivescale.renderer.question_renderer import OPTION_LABELS, QuestionRenderer
from survivescale.renderer.state_renderer import StateRenderer

logger = logging.getLogger(__name__)

CONTINUE_CALLBACK = "continue"


def _state_renderer(engine: GameEngine) -> StateRenderer:
    return StateRenderer(engine.state, total_questions=len(engine.questions))


def _answer_keyboard(question: Question) -> InlineKeyboardMarkup:
    """Create inline keyboard with one button per option.

    The question id travels with each button so answers to a question that
    is no longer current can be told apart.
    """
    buttons = []
    for i, option in enumerate(question.options):
        label = f"{QuestionRenderer.option_label(i)}. {option}"
        if len(label) > 60:
            label = label[:57] + "..."
        callback_data = f"answer:{question.id}:{i}"
        buttons.append([InlineKeyboardButton(label, callback_data=callback_data)])

    return InlineKeyboardMarkup(buttons)


def _continue_keyboard() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        [[InlineKeyboardButton("Continue ▶️", callback_data=CONTINUE_CALLBACK)]]
    )


async def send_current_question(
    update: Update, context: ContextTypes.DEFAULT_TYPE, engine: GameEngine
) -> None:
    """Send the pending question, or the final result if the game is over."""
    chat_id = update.effective_chat.id

    if engine.state.is_over:
        await context.bot.send_message(
            chat_id=chat_id, text=_state_renderer(engine).render_game_end()
        )
        return

    question = engine.current_question()
    if question is None:
        await context.bot.send_message(
            chat_id=chat_id, text="📭 No questions left. Use /reset to play again."
        )
        return

    await context.bot.send_message(
        chat_id=chat_id,
        text=QuestionRenderer(engine.state).render_question(question),
        reply_markup=_answer_keyboard(question),
    )


class CommandHandlers:
    """Handlers for bot commands.

    Attributes:
        bot: Reference to the main bot instance.
    """

    def __init__(self, bot: "SurviveScaleBot") -> None:
        """Initialize command handlers.

        Args:
            bot: The SurviveScaleBot instance.
        """
        self.bot = bot

    async def start(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /start command."""
        welcome_text = """🏢 Welcome to Survive & Scale! 🏢

Keep your company alive for 25 years. Each year brings two questions:
✅ Both right: earn the year's profit and +10 health
❌ Every wrong answer costs 50 health
💥 Health at 0 means bankruptcy

Commands:
/play - Show the current question
/status - View your company
/reset - Start over
/help - Show this help

Good luck, CEO! 💼"""

        await update.message.reply_text(welcome_text)

    async def help(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /help command."""
        await self.start(update, context)

    async def play(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /play command."""
        engine = self.bot.get_or_create_game_for_chat(update.effective_chat.id)
        await send_current_question(update, context, engine)

    async def status(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /status command."""
        engine = self.bot.get_or_create_game_for_chat(update.effective_chat.id)
        snapshot = _state_renderer(engine).render_full_snapshot()

        await update.message.reply_text(snapshot)

    async def reset(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /reset command."""
        engine = self.bot.get_or_create_game_for_chat(update.effective_chat.id)
        engine.reset()

        await update.message.reply_text(
            "🔄 Progress cleared. A new company is born! Use /play to begin."
        )


class GameHandlers:
    """Handlers for answering questions.

    Attributes:
        bot: Reference to the main bot instance.
    """

    def __init__(self, bot: "SurviveScaleBot") -> None:
        """Initialize game handlers.

        Args:
            bot: The SurviveScaleBot instance.
        """
        self.bot = bot

    async def handle_callback(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle inline keyboard callbacks."""
        query = update.callback_query
        await query.answer()

        engine = self.bot.get_or_create_game_for_chat(update.effective_chat.id)

        data = query.data or ""
        if data == CONTINUE_CALLBACK:
            await query.edit_message_reply_markup(reply_markup=None)
            await send_current_question(update, context, engine)
            return

        if not data.startswith("answer:"):
            logger.warning(f"Unknown callback data: {data}")
            return

        try:
            _, question_id, option_index = data.split(":")
            question_id, option_index = int(question_id), int(option_index)
        except ValueError:
            logger.warning(f"Malformed answer callback: {data}")
            return

        question = engine.current_question()
        if question is None or question.id != question_id:
            await query.edit_message_reply_markup(reply_markup=None)
            await context.bot.send_message(
                chat_id=update.effective_chat.id,
                text="⏳ That question was already answered. Use /play to continue.",
            )
            return

        await self._answer(update, context, engine, question, option_index)

    async def handle_message(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle typed answers such as ``B`` or ``2``."""
        if not update.message or not update.message.text:
            return  # Edited messages and non-text updates
        text = update.message.text.strip().upper()

        engine = self.bot.get_or_create_game_for_chat(update.effective_chat.id)
        question = engine.current_question()
        if question is None or engine.state.is_over:
            return  # Nothing to answer, ignore message

        # Try to parse as option number, then as option letter
        try:
            option_index = int(text) - 1
        except ValueError:
            if len(text) != 1 or text not in OPTION_LABELS:
                await update.message.reply_text(
                    "❓ Didn't understand that. Tap an option or use /play."
                )
                return
            option_index = OPTION_LABELS.index(text)

        if not 0 <= option_index < len(question.options):
            await update.message.reply_text(
                f"❓ Pick one of {len(question.options)} options."
            )
            return

        await self._answer(update, context, engine, question, option_index)

    async def _answer(
        self,
        update: Update,
        context: ContextTypes.DEFAULT_TYPE,
        engine: GameEngine,
        question: Question,
        option_index: int,
    ) -> None:
        """Answer the current question and report what happened."""
        chat_id = update.effective_chat.id
        result = engine.answer(option_index)
        renderer = _state_renderer(engine)

        if not result["success"]:
            await context.bot.send_message(
                chat_id=chat_id, text=renderer.render_answer_error(result)
            )
            return

        feedback = QuestionRenderer(engine.state).render_feedback(question, option_index)
        if update.callback_query:
            await update.callback_query.edit_message_text(
                f"{update.callback_query.message.text}\n\n{feedback}"
            )
        else:
            await update.message.reply_text(feedback)

        summary = result["summary"]
        if summary is None:
            await send_current_question(update, context, engine)
            return

        text = renderer.render_year_summary(summary)
        if result["game_over"]:
            await context.bot.send_message(chat_id=chat_id, text=text)
            await context.bot.send_message(chat_id=chat_id, text=renderer.render_game_end())
        else:
            await context.bot.send_message(
                chat_id=chat_id, text=text, reply_markup=_continue_keyboard()
            )
