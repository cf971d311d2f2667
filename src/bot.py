"""Bot initialization and handler registration."""

from __future__ import annotations

import logging
import os

from telegram.ext import Application, CommandHandler

from handlers.mention import ghost_command, ghostcascade_command
from handlers.user_commands import help_command, start_command

logger = logging.getLogger(__name__)

async def error_handler(update: object, context) -> None:  # type: ignore[no-untyped-def]
    """Global error handler."""
    logger.error("Unhandled exception while processing update=%r", update, exc_info=context.error)


def create_application() -> Application:
    """Create and configure the Telegram Application."""
    token = os.getenv("TELEGRAM_BOT_TOKEN")
    if not token:
        raise RuntimeError("TELEGRAM_BOT_TOKEN not set")

    application = Application.builder().token(token).build()

    # Core user commands
    application.add_handler(CommandHandler("start", start_command))
    application.add_handler(CommandHandler("help", help_command))

    # Invisible mentions (restricted to ADMIN_USER_ID)
    application.add_handler(CommandHandler("ghost", ghost_command))
    application.add_handler(CommandHandler("ghostcascade", ghostcascade_command))

    application.add_error_handler(error_handler)
    return application
