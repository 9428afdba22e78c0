"""Emoji keys used in reaction API paths and in the CSV export.

Three kinds of emoji produce three key shapes:
- unicode:          percent-encoded glyph (readable form: the glyph itself)
- custom:           name:id
- animated custom:  a:name:id
"""

from __future__ import annotations

from urllib.parse import quote

from reaction_csv.models import EmojiDescriptor

# Characters encodeURIComponent leaves alone on top of quote()'s defaults
_URI_COMPONENT_SAFE = "!*'()"


def encoded_emoji_key(emoji: EmojiDescriptor) -> str:
    """Return the wire-safe key for a reaction endpoint path segment."""
    key = quote(emoji.name, safe=_URI_COMPONENT_SAFE)
    if emoji.id:
        key = f"{key}:{emoji.id}"
    if emoji.animated:
        key = f"a:{key}"
    return key


def readable_emoji_key(emoji: EmojiDescriptor) -> str:
    """Return the key shown to humans (CSV ``emoji`` column)."""
    if emoji.id:
        return encoded_emoji_key(emoji)
    return emoji.name
