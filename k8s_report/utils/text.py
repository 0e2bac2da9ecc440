"""Text helpers for captured command output."""

import re
from typing import List

# Colour and cursor sequences emitted by kubectl plugins and terminals
ANSI_ESCAPE_PATTERN = re.compile(r"\x1B\[[0-9;]*[mGKHF]")


def strip_ansi_codes(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return ANSI_ESCAPE_PATTERN.sub("", text)


def head(text: str, count: int) -> str:
    """Return the first ``count`` lines of text."""
    return "\n".join(text.splitlines()[:count])


def grep_with_context(text: str, pattern: str, after: int) -> str:
    """Return lines matching pattern plus ``after`` trailing lines each.

    Overlapping blocks are merged and separate blocks are divided by a ``--``
    line, the same way ``grep -A`` prints them.
    """
    regex = re.compile(pattern)
    lines = text.splitlines()
    keep: List[bool] = [False] * len(lines)

    for index, line in enumerate(lines):
        if regex.search(line):
            for offset in range(index, min(index + after + 1, len(lines))):
                keep[offset] = True

    output = []
    previous = -1
    for index, line in enumerate(lines):
        if not keep[index]:
            continue
        if output and index != previous + 1:
            output.append("--")
        output.append(line)
        previous = index

    return "\n".join(output)


def format_columns(rows: List[List[str]]) -> str:
    """Align rows into space-padded columns."""
    if not rows:
        return ""

    width = max(len(row) for row in rows)
    padded = [row + [""] * (width - len(row)) for row in rows]
    widths = [max(len(row[col]) for row in padded) for col in range(width)]

    lines = []
    for row in padded:
        cells = [cell.ljust(widths[col]) for col, cell in enumerate(row)]
        lines.append("  ".join(cells).rstrip())
    return "\n".join(lines)
