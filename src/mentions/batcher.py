"""Split recipients into payloads that respect Telegram's per-message limits.

Two template modes are supported:

- fixed-affix: ``prefix + marker * n + suffix``
- anchored: the marker run is spliced into a full message at an anchor
  resolved once per message (see ``mentions.anchor``)

All offsets are UTF-16 code units. Every payload is planned before any is
returned, so a failure never yields a partial plan.
"""

from __future__ import annotations

import logging
import unicodedata
from collections.abc import Mapping
from typing import Any, Sequence

from utils.tg_text import utf16_len, utf16_split

from .anchor import resolve_anchor
from .config import Limits
from .entities import ChatId, Payload, build_entities
from .errors import BatchOverflowError, CapacityError, InvalidTemplateError
from .markers import ensure_marker_usable, select_marker
from .templates import AnchoredTemplate, FixedAffixTemplate, Template, template_from_fields

logger = logging.getLogger(__name__)

LINE_BREAK = "\n"


def _nfc(text: str) -> str:
    return unicodedata.normalize("NFC", text)


def chunk_recipients(recipient_ids: Sequence[int], size: int) -> list[list[int]]:
    """Split ids into contiguous chunks of at most ``size``."""
    if size < 1:
        raise ValueError("size must be >= 1")
    return [list(recipient_ids[i : i + size]) for i in range(0, len(recipient_ids), size)]


def _coerce_template(template: Template | Mapping[str, Any] | None) -> Template:
    if template is None:
        return FixedAffixTemplate()
    if isinstance(template, (FixedAffixTemplate, AnchoredTemplate)):
        return template
    if isinstance(template, Mapping):
        try:
            return template_from_fields(**template)
        except TypeError as e:
            raise InvalidTemplateError(f"Unknown template field: {e}") from e
    raise InvalidTemplateError(f"Unsupported template type: {type(template).__name__}")


def _pick_marker(template: Template, *texts: str) -> str:
    if template.marker_character is not None:
        marker = template.marker_character
    else:
        marker = select_marker(template.marker_candidates, *texts)
    ensure_marker_usable(marker, *texts)
    return marker


def build_invisible_text(
    count: int,
    template: FixedAffixTemplate | None = None,
) -> tuple[str, list[int], str]:
    """Build ``prefix + marker * count + suffix``.

    Returns (text, offsets, marker). Limits are not applied here.
    """
    template = template or FixedAffixTemplate()
    prefix = _nfc(template.prefix)
    suffix = _nfc(template.suffix)
    marker = _pick_marker(template, prefix, suffix)

    if count <= 0:
        return prefix + suffix, [], marker

    base = utf16_len(prefix)
    text = prefix + marker * count + suffix
    return text, [base + i for i in range(count)], marker


def build_payloads(
    chat_id: ChatId,
    recipient_ids: Sequence[int],
    template: Template | Mapping[str, Any] | None = None,
    limits: Limits | None = None,
) -> list[Payload]:
    """Plan the payloads that mention every recipient once, in input order.

    Raises:
        InvalidTemplateError: mixed template modes or an unusable marker.
        CapacityError: the template text leaves no room for one marker.
        BatchOverflowError: overflow_policy is 'error' and splitting is needed.
    """
    template = _coerce_template(template)
    limits = limits or Limits()
    recipients = list(recipient_ids)

    if isinstance(template, AnchoredTemplate):
        payloads = _build_anchored(chat_id, recipients, template, limits)
    else:
        payloads = _build_fixed_affix(chat_id, recipients, template, limits)

    logger.debug(
        "Planned %d payload(s) for %d recipient(s) in chat %s",
        len(payloads),
        len(recipients),
        chat_id,
    )
    return payloads


def _build_fixed_affix(
    chat_id: ChatId,
    recipients: list[int],
    template: FixedAffixTemplate,
    limits: Limits,
) -> list[Payload]:
    prefix = _nfc(template.prefix)
    suffix = _nfc(template.suffix)
    marker = _pick_marker(template, prefix, suffix)

    if not recipients:
        return []

    prefix_len = utf16_len(prefix)
    capacity = limits.max_text_length - (prefix_len + utf16_len(suffix))
    if capacity <= 0:
        raise CapacityError(
            f"prefix and suffix use {prefix_len + utf16_len(suffix)} of "
            f"{limits.max_text_length} code units; no room for a mention"
        )

    payloads: list[Payload] = []
    for group in chunk_recipients(recipients, limits.max_recipients_per_message):
        if len(group) > capacity and not limits.split_allowed:
            raise BatchOverflowError(
                f"{len(group)} mentions do not fit in one message (capacity {capacity}) "
                "and overflow_policy is 'error'"
            )
        for batch in chunk_recipients(group, capacity):
            text = prefix + marker * len(batch) + suffix
            offsets = [prefix_len + i for i in range(len(batch))]
            payloads.append(
                Payload(chat_id=chat_id, text=text, mentions=tuple(build_entities(offsets, batch)))
            )

    _check_lengths(payloads, limits)
    return payloads


def _build_anchored(
    chat_id: ChatId,
    recipients: list[int],
    template: AnchoredTemplate,
    limits: Limits,
) -> list[Payload]:
    message = _nfc(template.message)
    marker = _pick_marker(template, message)

    if not recipients:
        return []

    anchor = resolve_anchor(message, template.rules)
    left, right = utf16_split(message, anchor)
    leading = LINE_BREAK if template.insert_on_own_line else ""
    trailing = LINE_BREAK if template.trailing_line_break else ""

    payloads: list[Payload] = []
    cursor = 0
    while cursor < len(recipients):
        remaining = len(recipients) - cursor
        wanted = min(remaining, limits.max_recipients_per_message)

        base_len = utf16_len(message) + utf16_len(leading) + utf16_len(trailing)
        capacity = limits.max_text_length - base_len
        take = min(wanted, max(0, capacity))
        if take == 0:
            raise CapacityError(
                f"message uses {base_len} of {limits.max_text_length} code units; "
                "no room for a mention"
            )
        if take < wanted and not limits.split_allowed:
            raise BatchOverflowError(
                f"only {take} of {wanted} mentions fit in one message "
                "and overflow_policy is 'error'"
            )

        batch = recipients[cursor : cursor + take]
        text = left + leading + marker * take + trailing + right
        first = anchor + utf16_len(leading)
        offsets = [first + i for i in range(take)]
        payloads.append(
            Payload(chat_id=chat_id, text=text, mentions=tuple(build_entities(offsets, batch)))
        )
        cursor += take

    _check_lengths(payloads, limits)
    return payloads


def _check_lengths(payloads: list[Payload], limits: Limits) -> None:
    for index, payload in enumerate(payloads):
        length = utf16_len(payload.text)
        if length > limits.max_text_length:
            raise RuntimeError(
                f"payload {index} is {length} code units, over max_text_length "
                f"{limits.max_text_length}"
            )
