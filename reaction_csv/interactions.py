"""Discord interaction protocol constants and response payload builders.

Reference:
https://discord.com/developers/docs/interactions/receiving-and-responding
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import IntEnum
from typing import Any


class InteractionType(IntEnum):
    """Inbound interaction types."""
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class InteractionResponseType(IntEnum):
    """Callback types the webhook may answer with."""
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5
    MODAL = 9


class InteractionResponseFlags(IntEnum):
    EPHEMERAL = 1 << 6


class MessageComponentType(IntEnum):
    TEXT_INPUT = 4
    LABEL = 18


class TextInputStyle(IntEnum):
    SHORT = 1
    PARAGRAPH = 2


def pong() -> dict[str, Any]:
    return {"type": InteractionResponseType.PONG}


def ephemeral_message(content: str) -> dict[str, Any]:
    """A channel message only the invoking user can see."""
    return {
        "type": InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE,
        "data": {
            "content": content,
            "flags": InteractionResponseFlags.EPHEMERAL,
        },
    }


def text_modal(
    title: str,
    label: str,
    value: str,
    now: datetime | None = None,
) -> dict[str, Any]:
    """A modal holding one prefilled paragraph text input.

    Used instead of a plain message because browser clients can copy
    the contents of a text input but drop unicode emoji from messages.
    """
    stamp = (now or datetime.now(timezone.utc)).isoformat()
    return {
        "type": InteractionResponseType.MODAL,
        "data": {
            "custom_id": f"{stamp}_modal",
            "title": title,
            "components": [
                {
                    "type": MessageComponentType.LABEL,
                    "label": label,
                    "component": {
                        "type": MessageComponentType.TEXT_INPUT,
                        "custom_id": f"{stamp}_input",
                        "style": TextInputStyle.PARAGRAPH,
                        "value": value,
                    },
                },
            ],
        },
    }
