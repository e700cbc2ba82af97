import json
import math
from pathlib import Path

import pytest

from cmdstat.stats import (
    BAR_CHARS,
    CmdKind,
    Entry,
    TableColumn,
    get_bar,
    parse_entries,
    read_stats,
    sort_entries,
    stats_file,
)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("command", TableColumn.COMMAND),
        ("cmd", TableColumn.COMMAND),
        ("CMD", TableColumn.COMMAND),
        ("count", TableColumn.COUNT),
        ("calls", TableColumn.COUNT),
        ("usage", TableColumn.USAGE),
        ("bar", TableColumn.USAGE),
        ("percent", TableColumn.PERCENT),
        ("pct", TableColumn.PERCENT),
        ("%", TableColumn.PERCENT),
        ("Type", TableColumn.TYPE),
    ],
)
def test_table_column_parse(text, expected):
    assert TableColumn.parse(text) is expected


@pytest.mark.parametrize("text", ["dirs", "bogus", ""])
def test_table_column_parse_rejects(text):
    with pytest.raises(ValueError, match="invalid column name"):
        TableColumn.parse(text)


def test_table_column_display_names():
    parsed = [TableColumn.parse(name) for name in ("cmd", "calls", "bar", "pct", "type")]
    assert [str(c) for c in parsed] == [
        "Command",
        "Count",
        "Usage",
        "Percent",
        "Type",
    ]


@pytest.mark.parametrize(
    "text, expected",
    [
        ("alias", CmdKind.ALIAS),
        ("function", CmdKind.FUNCTION),
        ("builtin", CmdKind.BUILTIN),
        ("command", CmdKind.COMMAND),
        ("reserved", CmdKind.RESERVED),
        ("Alias", CmdKind.UNKNOWN),
        ("file", CmdKind.UNKNOWN),
    ],
)
def test_cmd_kind_parse(text, expected):
    assert CmdKind.parse(text) is expected


def test_cmd_kind_display():
    assert str(CmdKind.parse("builtin")) == "builtin"
    assert str(CmdKind.parse("something-else")) == "unknown"


def _record(command, count, kind="command", dirs=None):
    return {"command": command, "count": count, "kind": kind, "dirs": dirs or {}}


def test_parse_entries_valid():
    raw = json.dumps(
        [_record("ls", 4, "alias", {"/tmp": 4}), _record("git", 2, "weird")]
    )
    entries = parse_entries(raw)
    assert [e.command for e in entries] == ["ls", "git"]
    assert [e.count for e in entries] == [4, 2]
    assert entries[0].kind is CmdKind.ALIAS
    assert entries[1].kind is CmdKind.UNKNOWN
    assert entries[0].dirs == {Path("/tmp"): 4}


def test_parse_entries_ignores_extra_fields():
    record = _record("ls", 1)
    record["extra"] = True
    assert [e.command for e in parse_entries(json.dumps([record]))] == ["ls"]


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "not json",
        "{}",
        json.dumps([{"command": "ls", "count": 1, "kind": "alias"}]),
        json.dumps([_record("ls", -1)]),
        json.dumps([_record("ls", 2**32)]),
        json.dumps([_record("ls", 1), _record("git", "many")]),
        json.dumps([_record("ls", 1, dirs={"/": -3})]),
    ],
)
def test_parse_entries_invalid_gives_empty(raw):
    assert parse_entries(raw) == []


def test_sort_entries_descending_and_stable():
    entries = [Entry("a", 1), Entry("b", 5), Entry("c", 1), Entry("d", 5)]
    assert [e.command for e in sort_entries(entries)] == ["b", "d", "a", "c"]


def test_get_bar_zero_still_shows():
    assert get_bar(0, 50) == BAR_CHARS[0]


def test_get_bar_full():
    assert get_bar(100, 10) == BAR_CHARS[7] * 10 + BAR_CHARS[0]


def test_get_bar_half_cell():
    assert get_bar(50, 3) == BAR_CHARS[7] + BAR_CHARS[3]


@pytest.mark.parametrize("pct", [0, 1, 13, 37, 50, 99, 100])
@pytest.mark.parametrize("width", [1, 7, 56])
def test_get_bar_length_invariant(pct, width):
    bar = get_bar(pct, width)
    full = math.floor(pct / 100 * width)
    assert len(bar) == full + 1
    assert bar[:full] == BAR_CHARS[7] * full
    assert bar[-1] in BAR_CHARS


def test_stats_file_location():
    path = stats_file()
    assert path.name == "stats.json"
    assert path.parent.name == "cmdstat"


def test_read_stats_missing_file(tmp_path):
    assert read_stats(tmp_path / "missing.json") == ""


def test_read_stats_reads_text(tmp_path):
    target = tmp_path / "stats.json"
    text = json.dumps([_record("ls", 3)])
    target.write_text(text, encoding="utf-8")
    assert read_stats(target) == text
    assert [e.count for e in parse_entries(read_stats(target))] == [3]


def test_read_stats_invalid_utf8(tmp_path):
    target = tmp_path / "stats.json"
    target.write_bytes(b"\xff\xfe\xfa")
    assert read_stats(target) == ""