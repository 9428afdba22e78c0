"""Reaction data models built from Discord interaction payloads.

All models are immutable and built once per request from upstream JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class MalformedPayloadError(ValueError):
    """A signed interaction whose JSON does not have the expected shape."""


def _require_dict(value: Any, what: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise MalformedPayloadError(f"{what} must be an object, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class EmojiDescriptor:
    """A unicode emoji (no id) or a custom guild emoji (id, maybe animated)."""

    name: str
    id: str | None = None
    animated: bool = False

    def __post_init__(self) -> None:
        if self.animated and not self.id:
            raise ValueError(f"Animated emoji {self.name!r} has no id")

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> EmojiDescriptor:
        payload = _require_dict(payload, "emoji")
        emoji_id = payload.get("id")
        return cls(
            name=str(payload.get("name") or ""),
            id=str(emoji_id) if emoji_id else None,
            animated=bool(payload.get("animated")) and bool(emoji_id),
        )


@dataclass(frozen=True)
class ReactionSummary:
    """One distinct emoji on a message and how many users applied it."""

    emoji: EmojiDescriptor
    count: int = 0

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> ReactionSummary:
        payload = _require_dict(payload, "reaction")
        count = payload.get("count") or 0
        # bool is an int subclass
        if isinstance(count, bool) or not isinstance(count, int):
            raise MalformedPayloadError(f"reaction count must be an integer, got {count!r}")
        return cls(
            emoji=EmojiDescriptor.from_payload(payload.get("emoji") or {}),
            count=max(count, 0),
        )


@dataclass(frozen=True)
class UserRef:
    """A user returned by the reactions endpoint."""

    id: str
    username: str

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> UserRef:
        return cls(id=str(payload["id"]), username=str(payload.get("username") or ""))


@dataclass(frozen=True)
class AggregationRow:
    """One (emoji, user) line of the CSV export."""

    emoji_key: str
    user_id: str
    user_name: str

    def as_line(self) -> list[str]:
        return [self.emoji_key, self.user_id, self.user_name]


@dataclass(frozen=True)
class TargetMessage:
    """The message a context-menu command was invoked on."""

    id: str
    channel_id: str
    reactions: tuple[ReactionSummary, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> TargetMessage:
        payload = _require_dict(payload, "message")
        reactions = payload.get("reactions") or []
        if not isinstance(reactions, list):
            raise MalformedPayloadError("message reactions must be a list")
        return cls(
            id=str(payload.get("id", "")),
            channel_id=str(payload.get("channel_id", "")),
            reactions=tuple(ReactionSummary.from_payload(r) for r in reactions),
        )
