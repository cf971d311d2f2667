"""Shared handler utilities."""

from __future__ import annotations

import logging
import os
from functools import wraps

from telegram import Update
from telegram.ext import ContextTypes

logger = logging.getLogger(__name__)


def get_admin_user_id() -> int | None:
    """Get the configured admin user id, if present."""
    raw = os.getenv("ADMIN_USER_ID")
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("ADMIN_USER_ID is not an integer")
        return None


def get_env_seconds(name: str, default: float) -> float:
    """Read a non-negative number of seconds from the environment."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return max(0.0, float(raw))
    except ValueError:
        logger.warning("%s is not a number; using %.2fs", name, default)
        return default


def _is_admin(update: Update) -> bool:
    admin_id = get_admin_user_id()
    user_id = update.effective_user.id if update.effective_user else None
    return admin_id is not None and user_id == admin_id


def admin_only(func):  # type: ignore[no-untyped-def]
    @wraps(func)
    async def wrapper(update: Update, context: ContextTypes.DEFAULT_TYPE):
        if update.message is None:
            return
        if not _is_admin(update):
            await update.message.reply_text("This command is restricted to the bot administrator.")
            logger.warning(
                "Unauthorized admin command attempt by user_id=%s",
                update.effective_user.id if update.effective_user else None,
            )
            return
        return await func(update, context)

    return wrapper
