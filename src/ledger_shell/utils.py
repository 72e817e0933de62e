# LedgerShell — Interactive Line-Oriented Ledger Command Shell
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Utility functions for LedgerShell.
"""

from enum import Enum, auto
from typing import Any

ESCAPE_CHAR = "\\"
QUOTE_CHARS = ("'", '"')


class LexerState(Enum):
    """States for the quote-aware tokenizer."""
    NORMAL = auto()
    SINGLE_QUOTE = auto()
    DOUBLE_QUOTE = auto()


_QUOTE_STATES = {
    "'": LexerState.SINGLE_QUOTE,
    '"': LexerState.DOUBLE_QUOTE,
}


def tokenize(raw: str) -> list[str]:
    """Split a raw input line into shell-style tokens.

    Rules:
    - ``\\`` makes the next character literal, inside or outside quotes
    - ``'`` and ``"`` open a quoted region closed by the same character
    - unquoted whitespace separates tokens, runs of it never yield
      empty tokens
    - quoted and unquoted spans with no whitespace between them join
      into one token
    - an unterminated quote is closed by the end of the line

    Never raises: any input produces some (possibly empty) token list.

    Args:
        raw: The line as typed by the user

    Returns:
        Tokens in left-to-right order
    """
    tokens: list[str] = []
    current: list[str] | None = None
    state = LexerState.NORMAL
    escaped = False

    for ch in raw:
        if escaped:
            # Escaped characters are taken verbatim, whatever they are
            if current is None:
                current = []
            current.append(ch)
            escaped = False
        elif ch == ESCAPE_CHAR:
            escaped = True
        elif state != LexerState.NORMAL:
            if state == _QUOTE_STATES.get(ch):
                state = LexerState.NORMAL
            else:
                if current is None:
                    current = []
                current.append(ch)
        elif ch in QUOTE_CHARS:
            state = _QUOTE_STATES[ch]
        elif ch.isspace():
            if current is not None:
                tokens.append("".join(current))
                current = None
        else:
            if current is None:
                current = []
            current.append(ch)

    # Whatever was in progress when the line ended
    if current is not None:
        tokens.append("".join(current))

    return tokens


def format_table(headers: list[str], rows: list[list[Any]]) -> str:
    """
    Format rows as left-aligned text columns separated by two spaces.

    Args:
        headers: Column header names
        rows: Rows of values (converted with ``str``)

    Returns:
        The table as a string, or "" when there are no rows
    """
    if not rows:
        return ""

    str_rows = [[str(h) for h in headers]]
    str_rows.extend([str(val) for val in row] for row in rows)

    widths = [
        max(len(row[i]) for row in str_rows if i < len(row))
        for i in range(len(headers))
    ]

    lines = []
    for row in str_rows:
        cells = [val.ljust(widths[i]) for i, val in enumerate(row)]
        lines.append("  ".join(cells).rstrip())

    return "\n".join(lines)
