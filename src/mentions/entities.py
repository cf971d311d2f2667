"""text_mention entities and the payloads that carry them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from telegram import MessageEntity, User

from .errors import ArityMismatchError

ChatId = int | str


@dataclass(frozen=True)
class Mention:
    """One invisible mention: a single marker character pointing at a user."""

    offset: int
    recipient_id: int
    length: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": MessageEntity.TEXT_MENTION,
            "offset": self.offset,
            "length": self.length,
            "user": {"id": self.recipient_id},
        }

    def to_entity(self) -> MessageEntity:
        # Telegram resolves the user by id; the name is only a local placeholder.
        user = User(id=self.recipient_id, first_name="", is_bot=False)
        return MessageEntity(
            type=MessageEntity.TEXT_MENTION,
            offset=self.offset,
            length=self.length,
            user=user,
        )


@dataclass(frozen=True)
class Payload:
    """A sendMessage body: target chat, full text and its mentions."""

    chat_id: ChatId
    text: str
    mentions: tuple[Mention, ...]

    @property
    def recipient_ids(self) -> list[int]:
        return [m.recipient_id for m in self.mentions]

    @property
    def entities(self) -> list[MessageEntity]:
        return [m.to_entity() for m in self.mentions]

    def to_dict(self) -> dict[str, Any]:
        """JSON body for the Bot API sendMessage method."""
        return {
            "chat_id": self.chat_id,
            "text": self.text,
            "entities": [m.to_dict() for m in self.mentions],
        }


def build_entities(offsets: Sequence[int], recipient_ids: Sequence[int]) -> list[Mention]:
    """Zip offsets with recipient ids into length-1 mentions."""
    if len(offsets) != len(recipient_ids):
        raise ArityMismatchError(
            f"len(offsets) ({len(offsets)}) != len(recipient_ids) ({len(recipient_ids)})"
        )
    return [Mention(offset=offset, recipient_id=rid) for offset, rid in zip(offsets, recipient_ids)]
