"""Telegram bot front end for the workout logger.

Turns Telegram commands into coordinator calls and renders the coordinator's
replies back into the chat. All session and catalog logic lives in the
coordinator; this module only speaks Telegram.
"""

import asyncio
import logging
from typing import Optional

from telegram import (
    ForceReply,
    InlineQueryResultArticle,
    InputTextMessageContent,
    Update,
)
from telegram.ext import (
    Application,
    ApplicationBuilder,
    CommandHandler,
    ContextTypes,
    InlineQueryHandler,
    MessageHandler,
    filters,
)

from lift_logger.config import settings
from lift_logger.coordinator.commands import CommandCoordinator
from lift_logger.coordinator.render import format_number
from lift_logger.models.replies import Reply, ReplyKind
from lift_logger.telegram.parsing import (
    CommandArgumentError,
    channel_key,
    parse_log_args,
    plan_text_from,
)

logger = logging.getLogger(__name__)

# Telegram rejects longer messages
MAX_MESSAGE_LENGTH = 4096

AWAITING_PLAN_KEY = "awaiting_plan"
SKIP_PLAN_WORDS = {"skip", "none", "-"}

UNAUTHORIZED_TEXT = "🔒 Sorry, you don't have access to this bot. This is a private bot."

HELP_TEXT = (
    "🏋️ Lift Logger commands\n\n"
    "/session_start [plan] - Start a session (optionally paste a BOT_MESSAGE plan)\n"
    "/session_plan - Start a session by pasting a multi-line plan\n"
    "/log <exercise> <weight> <reps> [notes] - Log a set\n"
    "/session_end - End the session and get a SESSION_SUMMARY block\n"
    "/exercises [text] - Look up exercise names\n\n"
    "Tip: type @<this bot> bench in any chat to autocomplete exercise names."
)


def _chunks(text: str, size: int = MAX_MESSAGE_LENGTH) -> list[str]:
    if not text:
        return []
    return [text[i : i + size] for i in range(0, len(text), size)]


class LiftLoggerBot:
    """Telegram command handlers backed by a ``CommandCoordinator``."""

    def __init__(self, coordinator: Optional[CommandCoordinator] = None):
        """Initialize the Telegram bot with the shared coordinator."""
        if coordinator is None:
            from lift_logger.dependencies import get_coordinator

            coordinator = get_coordinator()
        self.coordinator = coordinator
        self.application: Optional[Application] = None

    def _is_user_allowed(self, user_id: str) -> bool:
        """Check if user ID is in the whitelist."""
        allowed_users = settings.telegram_allowed_users
        if not allowed_users:
            return True
        return user_id in allowed_users

    async def _check_access(self, update: Update, command: str) -> bool:
        user = update.effective_user
        user_id = str(user.id) if user else ""
        if self._is_user_allowed(user_id):
            return True
        logger.warning(f"Unauthorized {command} attempt from user {user_id}")
        if update.effective_message:
            await update.effective_message.reply_text(UNAUTHORIZED_TEXT)
        return False

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    async def _render(
        self,
        update: Update,
        context: ContextTypes.DEFAULT_TYPE,
        reply: Reply,
    ) -> None:
        """Deliver a coordinator reply to the requesting chat."""
        message = update.effective_message

        if reply.kind == ReplyKind.PLAN_FORM:
            context.chat_data[f"{AWAITING_PLAN_KEY}:{channel_key(update)}"] = True
            await message.reply_text(
                reply.text,
                reply_markup=ForceReply(
                    selective=True, input_field_placeholder="Paste your plan"
                ),
            )
            return

        if reply.kind == ReplyKind.SUGGESTIONS:
            text = "\n".join(reply.suggestions) or "No matching exercises."
        else:
            text = reply.text

        for chunk in _chunks(text):
            await message.reply_text(chunk)

    async def _run(
        self,
        update: Update,
        context: ContextTypes.DEFAULT_TYPE,
        command: str,
        action,
    ) -> None:
        """Run a command action, answering with an error on unexpected failure."""
        await update.effective_message.chat.send_action("typing")

        try:
            reply = await action()
            await self._render(update, context, reply)
        except Exception as e:
            logger.error(f"Error handling {command} in {channel_key(update)}: {e}", exc_info=True)
            await update.effective_message.reply_text(f"❌ Error: {e}")

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def help_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /start and /help."""
        if not await self._check_access(update, "/help"):
            return
        await update.effective_message.reply_text(HELP_TEXT)

    async def session_start_command(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /session_start with optional inline plan text."""
        if not await self._check_access(update, "/session_start"):
            return

        channel_id = channel_key(update)
        plan_text = plan_text_from(update.effective_message.text)
        logger.info(f"Channel {channel_id}: /session_start ({len(plan_text)} chars of plan)")

        await self._run(
            update,
            context,
            "/session_start",
            lambda: self.coordinator.handle_start_session(channel_id, plan_text),
        )

    async def session_plan_command(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /session_plan by opening a multi-line plan form."""
        if not await self._check_access(update, "/session_plan"):
            return
        await self._render(update, context, self.coordinator.plan_form())

    async def log_command(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Handle /log <exercise> <weight> <reps> [notes]."""
        if not await self._check_access(update, "/log"):
            return

        channel_id = channel_key(update)
        try:
            args = parse_log_args(context.args or [])
        except CommandArgumentError as e:
            await update.effective_message.reply_text(str(e))
            return

        await self._run(
            update,
            context,
            "/log",
            lambda: self.coordinator.handle_log_set(
                channel_id, args.exercise, args.weight, args.reps, args.notes
            ),
        )

    async def session_end_command(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /session_end."""
        if not await self._check_access(update, "/session_end"):
            return

        channel_id = channel_key(update)
        await self._run(
            update,
            context,
            "/session_end",
            lambda: self.coordinator.handle_end_session(channel_id),
        )

    async def exercises_command(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Handle /exercises [text] with catalog suggestions."""
        if not await self._check_access(update, "/exercises"):
            return
        query = " ".join(context.args or [])
        await self._render(update, context, self.coordinator.handle_autocomplete(query))

    async def handle_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Treat the answer to an open plan form like inline plan text."""
        channel_id = channel_key(update)
        if not context.chat_data.pop(f"{AWAITING_PLAN_KEY}:{channel_id}", False):
            return
        if not await self._check_access(update, "plan form"):
            return

        text = update.effective_message.text or ""
        plan_text = "" if text.strip().lower() in SKIP_PLAN_WORDS else text.strip()
        logger.info(f"Channel {channel_id}: plan form submitted ({len(plan_text)} chars)")

        await self._run(
            update,
            context,
            "/session_plan",
            lambda: self.coordinator.handle_start_session(channel_id, plan_text),
        )

    async def inline_query(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Autocomplete exercise names from the cached catalog.

        ``@bot bench`` lists matching names; ``@bot bench 100 5 notes`` lists
        complete /log commands ready to send.
        """
        query = update.inline_query
        user_id = str(query.from_user.id) if query.from_user else ""
        if not self._is_user_allowed(user_id):
            await query.answer([], cache_time=0, is_personal=True)
            return

        try:
            try:
                args = parse_log_args(query.query.split())
                partial = args.exercise
                tail = f" {format_number(args.weight)} {args.reps}"
                if args.notes:
                    tail += f" {args.notes}"
            except CommandArgumentError:
                partial, tail = query.query, ""

            reply = self.coordinator.handle_autocomplete(partial)
            results = [
                InlineQueryResultArticle(
                    id=str(idx),
                    title=name,
                    description=(
                        f"/log {name}{tail}" if tail else "Add weight and reps after the name"
                    ),
                    input_message_content=InputTextMessageContent(f"/log {name}{tail}"),
                )
                for idx, name in enumerate(reply.suggestions)
            ]
            await query.answer(results, cache_time=0, is_personal=True)
        except Exception as e:
            logger.error(f"Error answering inline query from {user_id}: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def build_application(self) -> Application:
        """Create the Telegram application and register handlers."""
        if not settings.telegram_bot_token:
            logger.error("TELEGRAM_BOT_TOKEN not configured!")
            raise ValueError("TELEGRAM_BOT_TOKEN is required for Telegram bot")

        application = (
            ApplicationBuilder()
            .token(settings.telegram_bot_token)
            .concurrent_updates(True)
            .build()
        )

        application.add_handler(CommandHandler(["start", "help"], self.help_command))
        application.add_handler(CommandHandler("session_start", self.session_start_command))
        application.add_handler(CommandHandler("session_plan", self.session_plan_command))
        application.add_handler(CommandHandler("log", self.log_command))
        application.add_handler(CommandHandler("session_end", self.session_end_command))
        application.add_handler(CommandHandler("exercises", self.exercises_command))
        application.add_handler(InlineQueryHandler(self.inline_query))
        application.add_handler(
            MessageHandler(filters.TEXT & ~filters.COMMAND, self.handle_message)
        )
        return application

    async def start_polling(self) -> None:
        """Start the bot with polling."""
        logger.info("Starting Telegram bot with polling...")

        self.application = self.build_application()

        # Start polling
        await self.application.initialize()
        await self.application.start()
        await self.application.updater.start_polling(drop_pending_updates=True)

        logger.info("✅ Telegram bot is running and polling for messages!")

        # Keep running
        try:
            while True:
                await asyncio.sleep(1)
        finally:
            await self.stop()

    async def stop(self) -> None:
        """Stop the bot gracefully."""
        if self.application:
            logger.info("Stopping Telegram bot...")
            await self.application.updater.stop()
            await self.application.stop()
            await self.application.shutdown()
            self.application = None
            logger.info("Telegram bot stopped.")


# Singleton instance
_bot_instance: Optional[LiftLoggerBot] = None


def get_bot() -> LiftLoggerBot:
    """Get or create the bot instance."""
    global _bot_instance
    if _bot_instance is None:
        _bot_instance = LiftLoggerBot()
    return _bot_instance
