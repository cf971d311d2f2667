"""Send planned mention payloads through the Bot API."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any, Sequence

from telegram.ext import ExtBot

from mentions import Limits, Payload, build_payloads
from mentions.entities import ChatId
from mentions.templates import Template

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendError:
    index: int
    error: Exception


@dataclass
class SendResult:
    message_ids: list[int] = field(default_factory=list)
    errors: list[SendError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


async def send_payloads(
    bot: ExtBot,
    payloads: Sequence[Payload],
    *,
    delay_seconds: float = 0.0,
) -> SendResult:
    """Send payloads one at a time, in order.

    Failures are logged and collected per payload index; the loop continues
    with the next payload. Nothing is retried.
    """
    result = SendResult()
    for index, payload in enumerate(payloads):
        try:
            message = await bot.send_message(
                chat_id=payload.chat_id,
                text=payload.text,
                entities=payload.entities,
            )
            result.message_ids.append(message.message_id)
        except Exception as e:
            logger.error(
                "Mention payload %d/%d to chat %s failed: %s",
                index + 1,
                len(payloads),
                payload.chat_id,
                e,
                exc_info=True,
            )
            result.errors.append(SendError(index=index, error=e))

        if delay_seconds > 0 and index < len(payloads) - 1:
            await asyncio.sleep(delay_seconds)

    return result


async def send_ghost_mentions(
    bot: ExtBot,
    chat_id: ChatId,
    recipient_ids: Sequence[int],
    template: Template | Mapping[str, Any] | None,
    *,
    limits: Limits | None = None,
    delay_seconds: float = 0.0,
) -> SendResult:
    """Plan payloads for recipient_ids and send them.

    Planning errors propagate before any request is made.
    """
    payloads = build_payloads(chat_id, recipient_ids, template, limits)
    logger.info("Sending %d mention payload(s) to chat %s", len(payloads), chat_id)
    return await send_payloads(bot, payloads, delay_seconds=delay_seconds)


async def edit_cascade(
    bot: ExtBot,
    chat_id: ChatId,
    recipient_ids: Sequence[int],
    template: Template | Mapping[str, Any] | None,
    *,
    limits: Limits | None = None,
    delay_seconds: float = 1.0,
) -> int:
    """Mention recipients one by one by repeatedly editing a single message.

    Each recipient gets a notification, while the chat only ever shows one
    message. Returns the message id. ``limits`` applies as given except that
    each step carries one mention. Request errors propagate.
    """
    if not recipient_ids:
        raise ValueError("No recipient ids provided")

    single = replace(limits or Limits(), max_recipients_per_message=1)
    # Plan every step up front so template errors surface before the first request.
    steps = [build_payloads(chat_id, [rid], template, single)[0] for rid in recipient_ids]

    first = steps[0]
    message = await bot.send_message(chat_id=first.chat_id, text=first.text, entities=first.entities)
    message_id = message.message_id

    for payload in steps[1:]:
        await asyncio.sleep(delay_seconds)
        await bot.edit_message_text(
            text=payload.text,
            chat_id=payload.chat_id,
            message_id=message_id,
            entities=payload.entities,
        )

    logger.info("Edit cascade in chat %s mentioned %d recipient(s)", chat_id, len(steps))
    return message_id
