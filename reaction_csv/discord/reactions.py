"""Reaction user list fetcher — Discord REST API.

GET /channels/{channel}/messages/{message}/reactions/{emoji}?limit=100

Only the first page is requested: an emoji applied by more than
REACTION_PAGE_LIMIT users yields a truncated user list.
"""

from __future__ import annotations

import logging

import httpx

from reaction_csv.emoji import encoded_emoji_key
from reaction_csv.models import EmojiDescriptor, TargetMessage, UserRef

logger = logging.getLogger(__name__)

# Single page, no pagination (known limitation)
REACTION_PAGE_LIMIT = 100

USER_AGENT = "DiscordBot (https://github.com/discord-reaction-csv, 0.1.0)"


class ReactionFetchError(Exception):
    """Base exception for reaction fetch failures."""


class UpstreamStatusError(ReactionFetchError):
    """Discord answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Discord API returned HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class FalsyResponseError(ReactionFetchError):
    """Discord answered 2xx but with an empty/null payload."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Falsy response from {url}")
        self.url = url


class ReactionUserListFetcher:
    """Fetches the users who reacted to one message with a given emoji."""

    def __init__(
        self,
        message: TargetMessage,
        token: str,
        client: httpx.AsyncClient,
        api_base: str = "https://discord.com/api/v10",
    ) -> None:
        self.base_url = (
            f"{api_base.rstrip('/')}/channels/{message.channel_id}"
            f"/messages/{message.id}/reactions"
        )
        self.headers = {
            "Authorization": f"Bot {token}",
            "User-Agent": USER_AGENT,
        }
        self._client = client

    def url_for(self, emoji: EmojiDescriptor) -> str:
        return f"{self.base_url}/{encoded_emoji_key(emoji)}"

    async def fetch(self, emoji: EmojiDescriptor) -> list[UserRef]:
        """Return users in the order Discord lists them.

        Raises:
            httpx.TransportError: network failure (not wrapped)
            UpstreamStatusError: non-2xx response
            FalsyResponseError: empty 2xx response
        """
        url = self.url_for(emoji)
        response = await self._client.get(
            url,
            params={"limit": REACTION_PAGE_LIMIT},
            headers=self.headers,
        )
        if not response.is_success:
            raise UpstreamStatusError(response.status_code, response.text)

        try:
            payload = response.json() if response.content else None
        except ValueError as e:
            raise ReactionFetchError(f"Invalid JSON from {url}") from e
        if not isinstance(payload, list):
            if not payload:
                raise FalsyResponseError(url)
            raise ReactionFetchError(
                f"Expected a user list from {url}, got {type(payload).__name__}"
            )

        users = [UserRef.from_payload(u) for u in payload]
        logger.debug("Fetched %d users for %s", len(users), url)
        return users
