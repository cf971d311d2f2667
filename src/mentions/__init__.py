"""Invisible per-user mentions for Telegram messages."""

from __future__ import annotations

from .anchor import resolve_anchor
from .batcher import build_invisible_text, build_payloads, chunk_recipients
from .config import Limits
from .entities import Mention, Payload, build_entities
from .errors import (
    ArityMismatchError,
    BatchOverflowError,
    CapacityError,
    ConfigurationError,
    GhostMentionError,
    InvalidTemplateError,
)
from .markers import DEFAULT_MARKERS, select_marker
from .templates import AnchoredTemplate, AnchorRules, FixedAffixTemplate, template_from_fields

__all__ = [
    "AnchorRules",
    "AnchoredTemplate",
    "ArityMismatchError",
    "BatchOverflowError",
    "CapacityError",
    "ConfigurationError",
    "DEFAULT_MARKERS",
    "FixedAffixTemplate",
    "GhostMentionError",
    "InvalidTemplateError",
    "Limits",
    "Mention",
    "Payload",
    "build_entities",
    "build_invisible_text",
    "build_payloads",
    "chunk_recipients",
    "resolve_anchor",
    "select_marker",
    "template_from_fields",
]
