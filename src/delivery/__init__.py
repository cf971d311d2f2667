"""Delivery of mention payloads via the Telegram Bot API."""

from __future__ import annotations

from .sender import SendError, SendResult, edit_cascade, send_ghost_mentions, send_payloads

__all__ = [
    "SendError",
    "SendResult",
    "edit_cascade",
    "send_ghost_mentions",
    "send_payloads",
]
