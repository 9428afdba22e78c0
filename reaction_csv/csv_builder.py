"""CSV document builder for the reaction export.

Quoting is minimal: only cells containing a comma, a double quote or a
line feed are wrapped in double quotes (embedded quotes doubled).
Every row, header included, ends with a single "\n".
"""

from __future__ import annotations

import re
from typing import Any, Iterable

_NEEDS_QUOTING = re.compile(r'[",\n]')


def csv_quote(value: Any) -> str:
    """Stringify a cell value and quote it if needed."""
    s = str(value)
    if _NEEDS_QUOTING.search(s):
        return '"' + s.replace('"', '""') + '"'
    return s


class CsvBuilder:
    """Accumulates rows and renders them as one CSV string."""

    def __init__(self, header: Iterable[Any] | None = None) -> None:
        self._lines: list[str] = []
        if header is not None:
            self.add_line(header)

    def add_line(self, line: Iterable[Any]) -> None:
        self._lines.append(",".join(csv_quote(cell) for cell in line) + "\n")

    def build(self) -> str:
        return "".join(self._lines)

    def __len__(self) -> int:
        return len(self._lines)
