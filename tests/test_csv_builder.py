"""Tests for CSV quoting and document building."""

from __future__ import annotations

from hypothesis import given
from hypothesis import strategies as st

from reaction_csv.csv_builder import CsvBuilder, csv_quote


class TestQuoting:

    def test_quotes_line_feed(self):
        assert csv_quote("hello\nworld") == '"hello\nworld"'

    def test_quotes_and_doubles_double_quote(self):
        assert csv_quote('hello"world"') == '"hello""world"""'

    def test_quotes_comma(self):
        assert csv_quote("hello,world") == '"hello,world"'

    def test_single_quote_not_quoted(self):
        assert csv_quote("hello'world") == "hello'world"
        assert csv_quote("'") == "'"

    def test_space_not_quoted(self):
        assert csv_quote("hello world") == "hello world"
        assert csv_quote(" ") == " "

    def test_normal_characters_not_quoted(self):
        assert csv_quote("here_are_some.normal+characters") == "here_are_some.normal+characters"

    def test_unicode_not_quoted(self):
        assert csv_quote("\U0001F60A") == "\U0001F60A"

    def test_stringifies_argument(self):
        assert csv_quote(5) == "5"
        assert csv_quote({}) == "{}"

    @given(st.text(alphabet=st.characters(exclude_characters=',"\n')))
    def test_plain_text_verbatim(self, text):
        assert csv_quote(text) == text

    @given(st.text(), st.sampled_from([",", '"', "\n"]), st.text())
    def test_special_text_wrapped(self, before, special, after):
        text = before + special + after
        quoted = csv_quote(text)
        assert quoted.startswith('"') and quoted.endswith('"')
        assert quoted[1:-1].replace('""', '"') == text


class TestBuilding:

    def test_quotes_entries(self):
        builder = CsvBuilder(['"hello"', "howdy"])
        builder.add_line(["bye, bye", 1000])
        builder.add_line([1, "\U0001F60A"])
        assert builder.build() == '"""hello""",howdy\n"bye, bye",1000\n1,\U0001F60A\n'

    def test_without_header(self):
        builder = CsvBuilder()
        builder.add_line(["bye, bye", 1000])
        builder.add_line([1, "\U0001F60A"])
        assert builder.build() == '"bye, bye",1000\n1,\U0001F60A\n'

    def test_header_only(self):
        assert CsvBuilder(["a", "b"]).build() == "a,b\n"

    def test_empty_builder(self):
        assert CsvBuilder().build() == ""

    def test_len_counts_rows(self):
        builder = CsvBuilder(["a"])
        builder.add_line(["1"])
        assert len(builder) == 2
