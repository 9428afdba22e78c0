"""Reaction aggregation — per-emoji user lists merged into one CSV export.

Pipeline:
1. Sort reactions by count (highest first, ties keep Discord's order)
2. Keep the first MAX_REACTIONS
3. Fetch every surviving emoji's user list concurrently
4. Merge into rows (emoji order from step 2, user order from Discord)
5. Render via CsvBuilder

Failure contract:
- Any single fetch failure fails the whole export (no partial CSV)
- The failure is logged with full detail and reported to the user as
  FAILURE_MESSAGE only
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, Protocol

from reaction_csv.csv_builder import CsvBuilder
from reaction_csv.emoji import readable_emoji_key
from reaction_csv.models import (
    AggregationRow,
    EmojiDescriptor,
    ReactionSummary,
    TargetMessage,
    UserRef,
)

logger = logging.getLogger(__name__)

# Caps fan-out and output size
MAX_REACTIONS = 30

CSV_HEADER = ["emoji", "discordUserId", "discordUserName"]

NO_REACTIONS_MESSAGE = "no reactions found"
FAILURE_MESSAGE = "something went wrong"


class ReactionFetcher(Protocol):
    async def fetch(self, emoji: EmojiDescriptor) -> list[UserRef]:
        ...


@dataclass
class AggregationResult:
    """Either a CSV document or a message for the user, never both."""

    csv: str | None = None
    message: str | None = None
    row_count: int = 0

    @property
    def ok(self) -> bool:
        return self.csv is not None


def select_reactions(reactions: Iterable[ReactionSummary]) -> list[ReactionSummary]:
    """Highest count first, stable on ties, truncated to MAX_REACTIONS."""
    ordered = sorted(reactions, key=lambda r: r.count, reverse=True)
    return ordered[:MAX_REACTIONS]


def build_rows(
    results: Iterable[tuple[EmojiDescriptor, list[UserRef]]],
) -> list[AggregationRow]:
    """Flatten (emoji, users) pairs, keyed by the emoji that was fetched."""
    rows = []
    for emoji, users in results:
        key = readable_emoji_key(emoji)
        for user in users:
            rows.append(AggregationRow(emoji_key=key, user_id=user.id, user_name=user.username))
    return rows


def render_csv(rows: Iterable[AggregationRow]) -> str:
    builder = CsvBuilder(CSV_HEADER)
    for row in rows:
        builder.add_line(row.as_line())
    return builder.build()


async def _fetch_one(
    fetcher: ReactionFetcher,
    reaction: ReactionSummary,
) -> tuple[EmojiDescriptor, list[UserRef]]:
    return reaction.emoji, await fetcher.fetch(reaction.emoji)


async def aggregate_reactions(
    message: TargetMessage,
    fetcher: ReactionFetcher,
) -> AggregationResult:
    """Aggregate all reactions on a message into a CSV document.

    Never raises for fetch failures: they are logged and collapsed into
    FAILURE_MESSAGE.
    """
    if not message.reactions:
        return AggregationResult(message=NO_REACTIONS_MESSAGE)

    selected = select_reactions(message.reactions)
    if len(selected) < len(message.reactions):
        logger.info(
            "Message %s has %d distinct reactions, exporting top %d",
            message.id,
            len(message.reactions),
            len(selected),
        )

    tasks = [asyncio.ensure_future(_fetch_one(fetcher, r)) for r in selected]
    try:
        results = await asyncio.gather(*tasks)
    except Exception:
        logger.exception(
            "Reaction fetch failed for message %s/%s, aborting export",
            message.channel_id,
            message.id,
        )
        for task in tasks:
            task.cancel()
        # Settle the rest so their errors aren't reported as unretrieved
        await asyncio.gather(*tasks, return_exceptions=True)
        return AggregationResult(message=FAILURE_MESSAGE)

    rows = build_rows(results)
    return AggregationResult(csv=render_csv(rows), row_count=len(rows))
