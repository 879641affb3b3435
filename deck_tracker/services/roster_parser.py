"""
Roster text parsing for allowlist imports.

A roster is one name per line, usually a single-column CSV export:

    username
    Alice
    "Smith, John"
    Bob,extra,columns,ignored

Each line is read as one CSV record and only its first cell is kept, so
quoted names may contain commas and "" stands for a literal quote. A quoted
cell left open at end of line takes the rest of the line. Only LF, CRLF and
a lone CR end a line; other Unicode separators stay part of the name. The
header token "username" is dropped (any case), as are blank cells.
Duplicates are collapsed by exact, case-sensitive equality in first-seen
order.
"""

import csv
import re
from typing import List

HEADER_TOKEN = "username"

LINE_BREAK = re.compile(r"\r\n|\r|\n")


def parse_cell(line: str) -> str:
    """First CSV cell of a single line, trimmed."""
    text = line.strip()
    if not text:
        return ""
    # strict=False: an unterminated quoted field yields what was read so far
    row = next(csv.reader([text], strict=False), [])
    return row[0].strip() if row else ""


def parse_roster(raw_text: str) -> List[str]:
    """Candidate player names from raw roster text, deduplicated."""
    if not raw_text:
        return []
    text = raw_text.lstrip("\ufeff")  # Excel exports start with a BOM

    names = []
    for line in LINE_BREAK.split(text):
        cell = parse_cell(line)
        if not cell or cell.casefold() == HEADER_TOKEN:
            continue
        names.append(cell)
    return list(dict.fromkeys(names))
