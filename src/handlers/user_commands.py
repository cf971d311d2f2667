"""Basic user-facing commands."""

from __future__ import annotations

import logging

from telegram import Update
from telegram.ext import ContextTypes

from utils.tg_text import Segment, render

logger = logging.getLogger(__name__)


def _help_text() -> str:
    return (
        "Available commands:\n"
        "\n"
        "- /start — Welcome message\n"
        "- /help — Show this help\n"
        "\n"
        "Mentions (administrator only):\n"
        "- /ghost <user_id> [user_id ...] [| message] — Mention users without visible names\n"
        "- /ghostcascade <user_id> [user_id ...] [| message] — Mention users one by one by editing one message\n"
        "\n"
        "Without a message, the mentions are wrapped in GHOST_PREFIX/GHOST_SUFFIX.\n"
        "With a message, the mentions are inserted after its last sentence.\n"
    )


def _onboarding_segments() -> list[Segment]:
    return [
        Segment("Quick start:\n"),
        Segment("1) Add this bot to your group\n"),
        Segment("2) Send "),
        Segment("/ghost 12345 67890 | Meeting starts at 10:00!", code=True),
        Segment("\n\nThe users get a notification, but the message shows no names.\n"),
    ]


async def start_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if update.message is None:
        return

    text, entities = render(_onboarding_segments())
    await update.message.reply_text(text, entities=entities)


async def help_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if update.message is None:
        return
    await update.message.reply_text(_help_text())
