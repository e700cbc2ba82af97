"""Plain-text tables with aligned columns, optional colour and sorting."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import Iterable

from wcwidth import wcswidth, wcwidth

_ANSI_RE = re.compile(
    r"\x1b\[[0-?]*[ -/]*[@-~]"  # CSI sequences
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"  # OSC sequences
    r"|\x1b[@-Z\\-_]"  # two-byte escapes
)
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_U64_MAX = 2**64 - 1
_RESET = "\x1b[0m"


class Color(enum.Enum):
    """Terminal foreground colours, as SGR parameter strings."""

    BLACK = "38;5;0"
    GREY = "38;5;7"
    DARK_GREY = "38;5;8"
    RED = "38;5;9"
    GREEN = "38;5;10"
    YELLOW = "38;5;11"
    BLUE = "38;5;12"
    MAGENTA = "38;5;13"
    CYAN = "38;5;14"
    WHITE = "38;5;15"


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from ``text``."""
    return _ANSI_RE.sub("", text)


def display_width(text: str) -> int:
    """Number of terminal columns ``text`` occupies, ignoring escape codes."""
    plain = strip_ansi(text)
    width = wcswidth(plain)
    if width < 0:
        width = sum(max(wcwidth(ch), 0) for ch in plain)
    return width


def colorize(text: str, color: Color | None = None, bold: bool = False) -> str:
    """Wrap ``text`` in escape codes for the given colour and weight."""
    codes = []
    if bold:
        codes.append("1")
    if color is not None:
        codes.append(color.value)
    if not codes:
        return text
    prefix = "".join(f"\x1b[{code}m" for code in codes)
    return f"{prefix}{text}{_RESET}"


def _compare(a, b) -> int:
    return (a > b) - (a < b)


@dataclass
class Cell:
    """One table cell: its text and an optional colour."""

    content: str
    color: Color | None = None
    append_spacer: bool = True
    truncate_for_space: bool = False

    def as_number(self) -> int | None:
        """The content as an unsigned 64-bit integer, or None."""
        text = self.content.strip()
        if not _UNSIGNED_RE.fullmatch(text):
            return None
        value = int(text)
        return value if value <= _U64_MAX else None


@dataclass
class Table:
    """A table of rows of cells, rendered with left-aligned padded columns."""

    columns: int = 0
    title: str | None = None
    headings: list[str] = field(default_factory=list)
    rows: list[list[Cell]] = field(default_factory=list)
    sort_by: int | None = None
    reverse: bool = False
    no_header: bool = False

    def set_heading(self, index: int, heading) -> None:
        """Insert a heading at ``index``, which must be a valid column."""
        if not 0 <= index < self.columns:
            raise IndexError(
                f"heading index {index} out of range for {self.columns} columns"
            )
        self.headings.insert(index, str(heading))

    def add_row(self, cells: Iterable) -> None:
        """Append a row; plain values are turned into uncoloured cells."""
        self.rows.append(
            [cell if isinstance(cell, Cell) else Cell(str(cell)) for cell in cells]
        )

    def find_col_idx(self, name) -> int | None:
        """Index of the column whose heading equals ``name``, or None."""
        wanted = str(name)
        try:
            return self.headings.index(wanted)
        except ValueError:
            return None

    def calc_cell_widths(self) -> list[int]:
        """Widest visible width of each column, headings included."""
        widths: list[int] = []
        self._update_widths(widths, self.headings)
        for row in self.rows:
            if len(row) != self.columns:
                raise ValueError(
                    f"row has {len(row)} cells, table has {self.columns} columns"
                )
            self._update_widths(widths, (cell.content for cell in row))
        return widths

    @staticmethod
    def _update_widths(widths: list[int], texts: Iterable[str]) -> None:
        for i, text in enumerate(texts):
            width = display_width(text)
            if i < len(widths):
                widths[i] = max(widths[i], width)
            else:
                widths.append(width)

    def sort(self) -> None:
        """Sort rows by the sort column.

        Numbers sort largest first, the "Usage" column widest first, and
        other text in ascending order; ``reverse`` flips each of these.
        """
        col = self.sort_by or 0
        if not 0 <= col < self.columns:
            raise IndexError(
                f"sort column {col} out of range for {self.columns} columns"
            )
        is_usage = col < len(self.headings) and self.headings[col] == "Usage"

        def compare(row_a: list[Cell], row_b: list[Cell]) -> int:
            cell_a, cell_b = row_a[col], row_b[col]
            num_a, num_b = cell_a.as_number(), cell_b.as_number()
            if num_a is not None and num_b is not None:
                order = _compare(num_b, num_a)
                return -order if self.reverse else order
            if is_usage:
                order = _compare(
                    display_width(cell_a.content), display_width(cell_b.content)
                )
            else:
                order = _compare(cell_b.content, cell_a.content)
            return order if self.reverse else -order

        self.rows.sort(key=cmp_to_key(compare))

    def render(self) -> str:
        """The table as text, one line per row, each line ending in a newline."""
        widths = self.calc_cell_widths()
        rule = "-" * (sum(widths) + self.columns)
        lines: list[str] = []

        if self.headings and not self.no_header:
            if self.title is not None:
                lines.append(self.title)
                lines.append(rule)
            lines.append(
                "".join(
                    f"{heading:<{width}} "
                    for heading, width in zip(self.headings, widths)
                )
            )
            lines.append(rule)

        for row in self.rows:
            parts = []
            for cell, width in zip(row, widths):
                padded = f"{cell.content:<{width}} "
                parts.append(colorize(padded, cell.color) if cell.color else padded)
            lines.append("".join(parts))

        if not self.no_header:
            lines.append(rule)

        return "".join(line + "\n" for line in lines)

    def __str__(self) -> str:
        return self.render()