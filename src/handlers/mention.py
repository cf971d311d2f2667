"""Admin commands that mention users invisibly: /ghost, /ghostcascade."""

from __future__ import annotations

import logging
import os

from telegram import Message, Update
from telegram.ext import ContextTypes

from delivery import edit_cascade, send_ghost_mentions
from mentions import FixedAffixTemplate, GhostMentionError, Limits, template_from_fields
from mentions.templates import Template
from utils.tg_text import Segment, render

from .common import admin_only, get_env_seconds

logger = logging.getLogger(__name__)

MESSAGE_SEPARATOR = "|"
DEFAULT_SUFFIX = "\U0001F47B"  # ghost emoji


def _usage(command: str) -> tuple[str, list | None]:
    return render(
        [
            Segment("Usage: "),
            Segment(f"/{command} <user_id> [user_id ...] [| message]", code=True),
            Segment(
                "\nWithout a message, GHOST_PREFIX/GHOST_SUFFIX are used around the mentions."
            ),
        ]
    )


def _parse_command(message: Message) -> tuple[list[int], str | None] | None:
    """Parse '/cmd 1 2 3 | text' into ([1, 2, 3], 'text').

    Returns None when there are no ids or an id is not an integer.
    """
    text = message.text or ""
    parts = text.split(maxsplit=1)
    if len(parts) < 2:
        return None

    ids_part, sep, body = parts[1].partition(MESSAGE_SEPARATOR)
    try:
        recipient_ids = [int(token) for token in ids_part.split()]
    except ValueError:
        return None
    if not recipient_ids:
        return None

    body = body.strip()
    return recipient_ids, (body if sep and body else None)


def _template_for(body: str | None) -> Template:
    if body is not None:
        return template_from_fields(message=body)
    return FixedAffixTemplate(
        prefix=os.getenv("GHOST_PREFIX", ""),
        suffix=os.getenv("GHOST_SUFFIX", DEFAULT_SUFFIX),
    )


@admin_only
async def ghost_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if update.message is None or update.effective_chat is None:
        return

    parsed = _parse_command(update.message)
    if parsed is None:
        text, entities = _usage("ghost")
        await update.message.reply_text(text, entities=entities)
        return

    recipient_ids, body = parsed
    try:
        result = await send_ghost_mentions(
            context.bot,
            update.effective_chat.id,
            recipient_ids,
            _template_for(body),
            limits=Limits.from_env(),
            delay_seconds=get_env_seconds("GHOST_SEND_DELAY", 0.0),
        )
    except GhostMentionError as e:
        logger.warning("Cannot plan mentions for chat %s: %s", update.effective_chat.id, e)
        await update.message.reply_text(f"Cannot mention these users: {e}")
        return

    if result.ok:
        await update.message.reply_text(
            f"Mentioned {len(recipient_ids)} user(s) in {len(result.message_ids)} message(s)."
        )
    else:
        failed = ", ".join(str(err.index + 1) for err in result.errors)
        await update.message.reply_text(
            f"Sent {len(result.message_ids)} message(s); failed message(s): {failed}."
        )


@admin_only
async def ghostcascade_command(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    if update.message is None or update.effective_chat is None:
        return

    parsed = _parse_command(update.message)
    if parsed is None:
        text, entities = _usage("ghostcascade")
        await update.message.reply_text(text, entities=entities)
        return

    recipient_ids, body = parsed
    try:
        await edit_cascade(
            context.bot,
            update.effective_chat.id,
            recipient_ids,
            _template_for(body),
            limits=Limits.from_env(),
            delay_seconds=get_env_seconds("GHOST_CASCADE_DELAY", 1.0),
        )
    except GhostMentionError as e:
        await update.message.reply_text(f"Cannot mention these users: {e}")
        return
    except Exception as e:
        logger.error("Edit cascade failed in chat %s: %s", update.effective_chat.id, e, exc_info=True)
        await update.message.reply_text("Edit cascade failed; see logs for details.")
        return

    await update.message.reply_text(f"Cascade complete: {len(recipient_ids)} user(s) mentioned.")
