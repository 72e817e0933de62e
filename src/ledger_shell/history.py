# LedgerShell — Interactive Line-Oriented Ledger Command Shell
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""Input history for the shell prompt."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator

MAX_HISTORY_LENGTH = 100


class InputHistory:
    """Previously submitted lines, most recent first.

    No two entries are equal ignoring case: adding a line drops any earlier
    copy before putting the line at the front. When the history grows past
    ``max_length`` the oldest entry is evicted.
    """

    def __init__(self, max_length: int = MAX_HISTORY_LENGTH) -> None:
        if max_length < 1:
            raise ValueError("max_length must be at least 1")
        self.max_length = max_length
        self._entries: deque[str] = deque()

    def add(self, line: str) -> None:
        key = line.casefold()
        self._entries = deque(
            e for e in self._entries if e.casefold() != key
        )
        self._entries.appendleft(line)

        if len(self._entries) > self.max_length:
            self._entries.pop()

    def entries(self) -> list[str]:
        return list(self._entries)

    def __getitem__(self, index: int) -> str:
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)
