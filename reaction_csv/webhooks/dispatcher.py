"""Interaction dispatcher — routes verified interactions to command handlers.

Commands are resolved to the closed Command enumeration once; everything
that doesn't match a known command falls through to Command.UNKNOWN.

Contract:
- PING is answered by the HTTP handler before dispatch
- Unknown interaction types and unknown commands raise
  UnknownInteractionError (surfaced as 400 with the offending value)
- Wrongly shaped command data raises MalformedPayloadError (400)
- Reaction fetch failures never raise out of here (see aggregation)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from reaction_csv.aggregation import NO_REACTIONS_MESSAGE, aggregate_reactions
from reaction_csv.commands import Command
from reaction_csv.config import Settings
from reaction_csv.discord.reactions import ReactionUserListFetcher
from reaction_csv.interactions import (
    InteractionType,
    ephemeral_message,
    text_modal,
)
from reaction_csv.models import MalformedPayloadError, TargetMessage

logger = logging.getLogger(__name__)

# View Channels + Read Message History
INVITE_PERMISSIONS = 66560

_FETCH_TIMEOUT = 30.0


class UnknownInteractionError(Exception):
    """Interaction shape recognized, but its type or command is not handled."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


@dataclass
class Interaction:
    """The fields of an inbound interaction the dispatcher reads."""

    type: Any
    data: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, payload: Any) -> Interaction:
        if not isinstance(payload, dict):
            return cls(type=None)
        data = payload.get("data")
        return cls(type=payload.get("type"), data=data if isinstance(data, dict) else {})

    @property
    def command_name(self) -> str:
        return str(self.data.get("name") or "").lower()

    def is_type(self, interaction_type: InteractionType) -> bool:
        """Exact match: JSON true/false must not pass for 1/0."""
        return type(self.type) is int and self.type == interaction_type

    def target_message(self) -> TargetMessage | None:
        """Resolve the message a context-menu command targeted.

        Raises:
            MalformedPayloadError: resolved data is not shaped like Discord's
        """
        resolved = self.data.get("resolved") or {}
        if not isinstance(resolved, dict):
            raise MalformedPayloadError("data.resolved must be an object")
        messages = resolved.get("messages") or {}
        if not isinstance(messages, dict):
            raise MalformedPayloadError("data.resolved.messages must be an object")
        target_id = self.data.get("target_id")
        if not isinstance(target_id, (str, int)) or isinstance(target_id, bool):
            return None
        payload = messages.get(str(target_id))
        if not payload:
            return None
        return TargetMessage.from_payload(payload)


def invite_url(application_id: str) -> str:
    return (
        f"https://discord.com/oauth2/authorize?client_id={application_id}"
        f"&permissions={INVITE_PERMISSIONS}&integration_type=0"
        "&scope=bot+applications.commands"
    )


async def handle_reaction_csv(
    interaction: Interaction,
    settings: Settings,
    client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Export the target message's reactions as a CSV modal."""
    message = interaction.target_message()
    if message is None or not message.reactions:
        return ephemeral_message(NO_REACTIONS_MESSAGE)

    owns_client = client is None
    if owns_client:
        client = httpx.AsyncClient(timeout=_FETCH_TIMEOUT)
    try:
        fetcher = ReactionUserListFetcher(
            message, settings.token, client, api_base=settings.api_base
        )
        result = await aggregate_reactions(message, fetcher)
    finally:
        if owns_client:
            await client.aclose()

    if not result.ok:
        return ephemeral_message(result.message or "")

    logger.info(
        "Exported %d reaction rows for message %s", result.row_count, message.id
    )
    return text_modal(
        title="Reaction list in CSV format",
        label="CSV",
        value=result.csv,
    )


def handle_invite(settings: Settings) -> dict[str, Any]:
    return ephemeral_message(invite_url(settings.application_id))


async def dispatch_interaction(
    interaction: Interaction,
    settings: Settings,
) -> dict[str, Any]:
    """Run the handler for an application command interaction.

    Raises:
        UnknownInteractionError: unhandled interaction type or command
        MalformedPayloadError: command data not shaped like Discord's
    """
    if not interaction.is_type(InteractionType.APPLICATION_COMMAND):
        error = f"Unknown Interaction Type: {interaction.type}"
        logger.error(error)
        raise UnknownInteractionError(error)

    command = Command.from_name(interaction.command_name)
    logger.info("Dispatching command: %s", command.name)

    if command is Command.REACTION_CSV:
        return await handle_reaction_csv(interaction, settings)
    if command is Command.INVITE:
        return handle_invite(settings)

    raise UnknownInteractionError(f"Unknown Command: {interaction.command_name}")
