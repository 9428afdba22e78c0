"""Application commands handled by the webhook.

Shared by the runtime dispatcher and the registration CLI so both agree
on command names.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

# https://discord.com/developers/docs/interactions/application-commands#application-command-object-application-command-types
CHAT_INPUT_COMMAND = 1
MESSAGE_COMMAND = 3


@dataclass(frozen=True)
class CommandDefinition:
    """Registration metadata for one application command."""

    name: str
    type: int = CHAT_INPUT_COMMAND
    description: str = ""

    def to_payload(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.type, "description": self.description}


class Command(Enum):
    """Known commands, plus an explicit fallthrough for anything else."""

    REACTION_CSV = CommandDefinition(name="Get reactions as CSV", type=MESSAGE_COMMAND)
    INVITE = CommandDefinition(
        name="invite",
        description="Get an invite link to add the bot to your server",
    )
    UNKNOWN = None

    @classmethod
    def from_name(cls, name: str | None) -> Command:
        """Case-insensitive lookup by registered name."""
        wanted = (name or "").lower()
        for command in cls:
            if command.value is not None and command.value.name.lower() == wanted:
                return command
        return cls.UNKNOWN


def registrable_commands() -> list[dict[str, Any]]:
    """Payloads for bulk-overwriting the application's commands."""
    return [c.value.to_payload() for c in Command if c.value is not None]
