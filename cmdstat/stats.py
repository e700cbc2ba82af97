"""The command statistics data: columns, command kinds, entries and bars."""

from __future__ import annotations

import enum
import json
import math
from dataclasses import dataclass, field
from pathlib import Path

import platformdirs

BAR_CHARS = ("▏", "▎", "▍", "▌", "▋", "▊", "▉", "█")

# Tenths of a cell left over after the full blocks -> partial block index.
_PARTIAL_INDEX = (0, 0, 1, 2, 2, 3, 3, 4, 5, 6, 7)

_U32_MAX = 2**32 - 1


class TableColumn(enum.Enum):
    """A column that can be shown in the statistics table."""

    COMMAND = "Command"
    COUNT = "Count"
    USAGE = "Usage"
    PERCENT = "Percent"
    DIRS = "Dirs"
    TYPE = "Type"

    @classmethod
    def parse(cls, text: str) -> "TableColumn":
        """Parse a column name or one of its aliases, ignoring case."""
        aliases = {
            "command": cls.COMMAND,
            "cmd": cls.COMMAND,
            "count": cls.COUNT,
            "calls": cls.COUNT,
            "usage": cls.USAGE,
            "bar": cls.USAGE,
            "percent": cls.PERCENT,
            "pct": cls.PERCENT,
            "%": cls.PERCENT,
            "type": cls.TYPE,
        }
        try:
            return aliases[text.lower()]
        except KeyError:
            raise ValueError(f"cmdstat: invalid column name `{text}'") from None

    def __str__(self) -> str:
        return self.value


class CmdKind(enum.Enum):
    """What kind of thing a recorded command was."""

    ALIAS = "alias"
    FUNCTION = "function"
    BUILTIN = "builtin"
    COMMAND = "command"
    RESERVED = "reserved"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, text: str) -> "CmdKind":
        """The kind named exactly by ``text``; anything else is UNKNOWN."""
        for kind in cls:
            if kind is not cls.UNKNOWN and kind.value == text:
                return kind
        return cls.UNKNOWN

    def __str__(self) -> str:
        return self.value


@dataclass
class Entry:
    """One command with its call count, kind and per-directory counts."""

    command: str
    count: int
    kind: CmdKind = CmdKind.UNKNOWN
    dirs: dict[Path, int] = field(default_factory=dict)


def _is_u32(value) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value <= _U32_MAX
    )


def _entry_from_json(item) -> Entry:
    if not isinstance(item, dict):
        raise ValueError("entry is not an object")
    command = item.get("command")
    count = item.get("count")
    kind = item.get("kind")
    dirs = item.get("dirs")
    if not isinstance(command, str):
        raise ValueError("entry has no command string")
    if not _is_u32(count):
        raise ValueError("entry count is not an unsigned 32-bit integer")
    if not isinstance(kind, str):
        raise ValueError("entry kind is not a string")
    if not isinstance(dirs, dict) or not all(_is_u32(v) for v in dirs.values()):
        raise ValueError("entry dirs is not a map of counts")
    return Entry(
        command=command,
        count=count,
        kind=CmdKind.parse(kind),
        dirs={Path(path): n for path, n in dirs.items()},
    )


def parse_entries(raw: str) -> list[Entry]:
    """Entries from the JSON stats text; an empty list if it is not valid."""
    try:
        data = json.loads(raw)
        if not isinstance(data, list):
            return []
        return [_entry_from_json(item) for item in data]
    except ValueError:
        return []


def sort_entries(entries: list[Entry]) -> list[Entry]:
    """Entries ordered by count, highest first; ties keep their order."""
    return sorted(entries, key=lambda entry: entry.count, reverse=True)


def get_bar(percentage: int, width: int) -> str:
    """A bar of block characters for ``percentage`` of ``width`` cells.

    The bar always ends in a partial block, so zero still shows something.
    """
    scaled = percentage / 100.0 * width
    full = math.floor(scaled)
    remainder = math.floor((scaled - full) * 10.0 + 0.5)
    return BAR_CHARS[7] * full + BAR_CHARS[_PARTIAL_INDEX[remainder]]


def stats_file() -> Path:
    """Where the stats JSON lives, under the user's local data directory."""
    return Path(platformdirs.user_data_dir()) / "cmdstat" / "stats.json"


def read_stats(path: Path | None = None) -> str:
    """The text of the stats file, or an empty string if it cannot be read."""
    target = stats_file() if path is None else Path(path)
    try:
        return target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return ""