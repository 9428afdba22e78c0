"""Tests for emoji keys (reaction endpoint path segment and CSV column)."""

from __future__ import annotations

from urllib.parse import unquote

import pytest
from hypothesis import given
from hypothesis import strategies as st

from reaction_csv.emoji import encoded_emoji_key, readable_emoji_key
from reaction_csv.models import EmojiDescriptor

unicode_names = st.text(
    alphabet=st.characters(exclude_categories=("Cs",)),
    min_size=1,
)
custom_names = st.from_regex(r"[A-Za-z0-9_]{2,32}", fullmatch=True)
snowflakes = st.integers(min_value=1, max_value=2**63 - 1).map(str)


class TestUnicodeEmoji:

    def test_percent_encodes_glyph(self):
        e = EmojiDescriptor(name="\U0001F60A")
        assert encoded_emoji_key(e) == "%F0%9F%98%8A"

    def test_readable_is_glyph(self):
        e = EmojiDescriptor(name="\U0001F60A")
        assert readable_emoji_key(e) == "\U0001F60A"

    def test_keeps_uri_component_safe_chars(self):
        e = EmojiDescriptor(name="a-b_c.d!e~f*g'h(i)")
        assert encoded_emoji_key(e) == "a-b_c.d!e~f*g'h(i)"

    def test_encodes_slash_and_colon(self):
        e = EmojiDescriptor(name="a/b:c")
        assert encoded_emoji_key(e) == "a%2Fb%3Ac"

    @given(unicode_names)
    def test_round_trips_through_percent_decoding(self, name):
        key = encoded_emoji_key(EmojiDescriptor(name=name))
        assert ":" not in key
        assert unquote(key) == name


class TestCustomEmoji:

    def test_non_animated(self):
        e = EmojiDescriptor(name="blob_no", id="941597088247083018")
        assert encoded_emoji_key(e) == "blob_no:941597088247083018"
        assert readable_emoji_key(e) == "blob_no:941597088247083018"

    def test_animated(self):
        e = EmojiDescriptor(name="_thurston", id="890457955345002547", animated=True)
        assert encoded_emoji_key(e) == "a:_thurston:890457955345002547"
        assert readable_emoji_key(e) == "a:_thurston:890457955345002547"

    def test_same_name_different_id_differ(self):
        a = EmojiDescriptor(name="blob", id="1")
        b = EmojiDescriptor(name="blob", id="2")
        assert encoded_emoji_key(a) != encoded_emoji_key(b)

    def test_animated_without_id_rejected(self):
        with pytest.raises(ValueError):
            EmojiDescriptor(name="blob", animated=True)

    @given(custom_names, snowflakes)
    def test_readable_equals_encoded(self, name, emoji_id):
        e = EmojiDescriptor(name=name, id=emoji_id)
        assert readable_emoji_key(e) == encoded_emoji_key(e) == f"{name}:{emoji_id}"

    @given(custom_names, snowflakes)
    def test_animated_prefix(self, name, emoji_id):
        e = EmojiDescriptor(name=name, id=emoji_id, animated=True)
        assert encoded_emoji_key(e) == f"a:{name}:{emoji_id}"
        assert readable_emoji_key(e) == encoded_emoji_key(e)


class TestFromPayload:

    def test_unicode_payload(self):
        e = EmojiDescriptor.from_payload({"id": None, "name": "\U0001F44D"})
        assert e == EmojiDescriptor(name="\U0001F44D")

    def test_custom_payload_with_int_id(self):
        e = EmojiDescriptor.from_payload({"id": 42, "name": "blob", "animated": True})
        assert e.id == "42"
        assert e.animated is True

    def test_animated_flag_ignored_without_id(self):
        e = EmojiDescriptor.from_payload({"id": None, "name": "x", "animated": True})
        assert e.animated is False
