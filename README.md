# cmdstat

`cmdstat` reads a JSON file of shell command usage statistics and shows it in
the terminal as a table of commands, call counts, percentages and usage bars.

## Installation

```
pip install .
```

This installs the `cmdstat` command.

## The stats file

Statistics are read from `cmdstat/stats.json` under your local data directory
as reported by `platformdirs.user_data_dir()` — for example
`~/.local/share/cmdstat/stats.json` on Linux. The file holds a list of entries:

```json
[
  {"command": "git", "count": 42, "kind": "command", "dirs": {"/home/me/project": 40}},
  {"command": "ll", "count": 17, "kind": "alias", "dirs": {}}
]
```

Every entry needs all four fields. `count` and the values in `dirs` must be
non-negative integers that fit in 32 bits. `kind` is one of `alias`,
`function`, `builtin`, `command` or `reserved`; any other string is shown as
`unknown`. If the file is missing, cannot be read, or is not a valid list of
such entries, no rows are shown.

## Usage

```
cmdstat                     # the top 10 commands by count
cmdstat -n 25               # the top 25 commands
cmdstat --all               # every command in the stats file
cmdstat --columns cmd,calls,type
cmdstat --sort command --reverse
cmdstat --no-header         # rows only: no title, headings or rules
cmdstat --json              # print the stats file text as it is
cmdstat --version
```

Entries are first ordered by count, highest first, and cut to `--num`
(default 10) unless `--all` is given.

By default the table shows Command, Count, Percent (one decimal place) and
Usage. With `--columns` you choose the columns and their order; there the
Percent column shows a whole number. `--columns` may be repeated, and each
value may hold several names separated by commas.

Column names for `--columns` and `--sort` (case does not matter):

| Column  | Names                 |
|---------|-----------------------|
| Command | `command`, `cmd`      |
| Count   | `count`, `calls`      |
| Usage   | `usage`, `bar`        |
| Percent | `percent`, `pct`, `%` |
| Type    | `type`                |

### Sorting

Without `--sort`, rows are sorted by the Count column if it is shown, and
otherwise by the first column. Numbers sort largest first, the Usage column
sorts longest bar first, and other text sorts in ascending order. `--reverse`
flips the order. Sorting by a column that is not shown is an error: the
message goes to standard error and the exit status is 1.

The usage bar is green and takes about 70% of the terminal width (80 columns
are assumed when the width cannot be found). A bar always ends in a partial
block, so a command with a tiny share still shows a sliver.

## As a library

```python
from cmdstat.cli import CmdStats
from cmdstat.stats import parse_entries, get_bar, TableColumn
from cmdstat.table import Table, Cell, Color

entries = parse_entries('[{"command": "ls", "count": 3, "kind": "command", "dirs": {}}]')

stats = CmdStats(entries, columns=[TableColumn.COMMAND, TableColumn.COUNT], usage_width=20)
stats.prepare_entries()
print(stats.render(), end="")

print(get_bar(50, 20))

table = Table(columns=2)
table.set_heading(0, "Name")
table.set_heading(1, "Score")
table.add_row(["alpha", 3])
table.add_row([Cell("beta", Color.RED), 7])
table.sort_by = 1
table.sort()
print(table.render(), end="")
```

- `cmdstat.stats` — `TableColumn`, `CmdKind`, `Entry`, `parse_entries`,
  `sort_entries`, `get_bar`, `stats_file`, `read_stats`.
- `cmdstat.table` — `Table`, `Cell`, `Color`, and the helpers `strip_ansi`,
  `display_width` and `colorize`.
- `cmdstat.cli` — `CmdStats`, `build_parser`, `main`, `term_width`, `bar_width`.

## What it does not do

- It does not record statistics. It only reads a stats file that something
  else has written.
- The `-l` and `--command` options are accepted but have no effect yet.
- The per-directory counts (`dirs`) are read and checked but never shown.