"""Command-line front end that prints a table of command statistics."""

from __future__ import annotations

import argparse
import math
import os
import sys
from dataclasses import dataclass, field

from .stats import (
    Entry,
    TableColumn,
    get_bar,
    parse_entries,
    read_stats,
    sort_entries,
    stats_file,
)
from .table import Cell, Color, Table, colorize

__version__ = "0.1.0"

_TITLE = "Command Statistics"


def term_width() -> int:
    """Width of the terminal, or 80 when it cannot be determined."""
    try:
        return os.get_terminal_size(sys.stdout.fileno()).columns
    except (OSError, ValueError, AttributeError):
        return 80


def bar_width() -> int:
    """Cells given to the usage bar: seventy per cent of the terminal."""
    return int(term_width() * 0.70)


@dataclass
class CmdStats:
    """Entries plus the display choices that turn them into a table."""

    entries: list[Entry]
    show_all: bool = False
    num: int = 10
    columns: list[TableColumn] = field(default_factory=list)
    sort: TableColumn | None = None
    reverse: bool = False
    no_header: bool = False
    usage_width: int | None = None

    def _bar_width(self) -> int:
        return bar_width() if self.usage_width is None else self.usage_width

    def _total(self) -> int:
        return sum(entry.count for entry in self.entries)

    def prepare_entries(self) -> None:
        """Order entries by count and keep the first ``num`` unless showing all."""
        self.entries = sort_entries(self.entries)
        if not self.show_all:
            self.entries = self.entries[: self.num]

    def get_entry_table(self) -> Table:
        """The table to print, with its sort order and header choice applied."""
        table = (
            self.get_specified_table() if self.columns else self.get_default_table()
        )
        if self.sort is not None:
            col_idx = table.find_col_idx(self.sort)
            if col_idx is None:
                raise ValueError(
                    f"cmdstat: cannot sort by `{self.sort}', it is not displayed"
                )
        else:
            col_idx = table.find_col_idx(TableColumn.COUNT)
            if col_idx is None:
                col_idx = 0
        table.sort_by = col_idx
        if self.reverse:
            table.reverse = True
        table.sort()
        table.no_header = self.no_header
        return table

    def get_specified_table(self) -> Table:
        """A table holding exactly the chosen columns."""
        total = self._total()
        table = Table(columns=len(self.columns))
        for i, column in enumerate(self.columns):
            table.set_heading(i, column)

        for entry in self.entries:
            percentage = int(entry.count / total * 100.0) if total else 0
            row = []
            for column in self.columns:
                if column is TableColumn.COMMAND:
                    row.append(Cell(entry.command))
                elif column is TableColumn.COUNT:
                    row.append(Cell(str(entry.count)))
                elif column is TableColumn.USAGE:
                    row.append(
                        Cell(get_bar(percentage, self._bar_width()), Color.GREEN)
                    )
                elif column is TableColumn.PERCENT:
                    row.append(Cell(f"{percentage}%"))
                elif column is TableColumn.TYPE:
                    row.append(Cell(str(entry.kind)))
                else:
                    raise ValueError(f"cmdstat: the `{column}' column cannot be shown")
            table.add_row(row)
        return table

    def get_default_table(self) -> Table:
        """A table of command, count, percentage and usage bar."""
        total = self._total()
        table = Table(columns=4)
        for i, heading in enumerate(("Command", "Count", "Percent", "Usage")):
            table.set_heading(i, heading)

        for entry in self.entries:
            percentage = entry.count / total * 100.0 if total else math.nan
            if math.isnan(percentage):
                percent_text = "NaN%"
                whole = 0
            else:
                percent_text = f"{percentage:.1f}%"
                whole = int(percentage)
            table.add_row(
                [
                    Cell(entry.command),
                    Cell(str(entry.count)),
                    Cell(percent_text),
                    Cell(get_bar(whole, self._bar_width()), Color.GREEN),
                ]
            )
        return table

    def render(self) -> str:
        """The full output: a titled table, preceded by a blank line with headers."""
        table = self.get_entry_table()
        table.title = colorize(_TITLE, Color.CYAN, bold=True)
        prefix = "" if self.no_header else "\n"
        return prefix + table.render()


def _column_list(text: str) -> list[TableColumn]:
    try:
        return [TableColumn.parse(part) for part in text.split(",")]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _column(text: str) -> TableColumn:
    try:
        return TableColumn.parse(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from None


def _count(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number `{text}'") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"invalid number `{text}'")
    return value


def build_parser() -> argparse.ArgumentParser:
    """The argument parser for the ``cmdstat`` command."""
    parser = argparse.ArgumentParser(prog="cmdstat")
    parser.add_argument(
        "-a",
        "--all",
        action="store_true",
        help="Display all commands from the stats file. Ignores --num.",
    )
    parser.add_argument(
        "-n",
        "--num",
        type=_count,
        default=10,
        help="Choose a specific number of commands to show.",
    )
    parser.add_argument(
        "-l",
        dest="long",
        action="store_true",
        help="Display extra info about each command",
    )
    parser.add_argument(
        "--command",
        help="Displays detailed information for a specific command.",
    )
    parser.add_argument(
        "--columns",
        type=_column_list,
        action="extend",
        default=None,
        help=(
            "Choose specific columns to display. Possible options are: "
            "'command/cmd', 'count/calls', 'usage/bar', 'percent/pct/%%', 'type'."
        ),
    )
    parser.add_argument(
        "--sort", type=_column, help="Specify which column to sort by"
    )
    parser.add_argument("--reverse", action="store_true", help="Reverse the sort")
    parser.add_argument("--json", action="store_true", help="Dump raw json")
    parser.add_argument(
        "--no-header", action="store_true", help="Omit the table headers"
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command; returns the exit status."""
    args = build_parser().parse_args(argv)
    raw = read_stats(stats_file())
    if args.json:
        print(raw)
        return 0
    stats = CmdStats(
        entries=parse_entries(raw),
        show_all=args.all,
        num=args.num,
        columns=args.columns or [],
        sort=args.sort,
        reverse=args.reverse,
        no_header=args.no_header,
    )
    try:
        output = stats.render()
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())