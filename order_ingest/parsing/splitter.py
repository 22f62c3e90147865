from __future__ import annotations

import re

"""Delimiter-aware line splitter.

- Blank lines are dropped; each remaining line is one logical record.
- Delimiter is decided from the first logical line only (';' wins over ',').
- A double quote toggles "inside quotes"; the delimiter is not a split point
  while inside quotes. The toggling quotes themselves are consumed, which
  strips one layer of surrounding quotes from the cell. A doubled quote inside
  a quoted section is a literal quote character.
- Cells are trimmed of surrounding whitespace.

Quoted cells spanning several physical lines are not supported.
"""

__all__ = [
    "COMMA",
    "SEMICOLON",
    "QUOTE",
    "logical_lines",
    "detect_delimiter",
    "split_line",
]

COMMA = ","
SEMICOLON = ";"
QUOTE = '"'

_NEWLINE_RE = re.compile(r"\r?\n")


def logical_lines(text: str) -> list[str]:
    """Split raw file text into non-blank logical lines."""
    return [line for line in _NEWLINE_RE.split(text) if line.strip()]


def detect_delimiter(first_line: str) -> str:
    return SEMICOLON if SEMICOLON in first_line else COMMA


def split_line(line: str, delimiter: str) -> list[str]:
    '''Split one logical line into trimmed cells.

    >>> split_line('1,"Albany, NY", 250', ",")
    ['1', 'Albany, NY', '250']
    >>> split_line('a;"say ""hi""";c', ";")
    ['a', 'say "hi"', 'c']
    '''
    cells: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if ch == QUOTE:
            if in_quotes and i + 1 < n and line[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif ch == delimiter and not in_quotes:
            cells.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
        i += 1
    cells.append("".join(current).strip())
    return cells
