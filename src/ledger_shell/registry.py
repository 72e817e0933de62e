# LedgerShell — Interactive Line-Oriented Ledger Command Shell
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""Name and alias lookup for shell commands."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .interfaces import Command


class CommandRegistry:
    """Maps every command name and alias to its handler.

    Built once at startup. When two commands declare the same name the
    one registered later wins.
    """

    def __init__(self, commands: Iterable[Command]) -> None:
        self._commands: list[Command] = list(commands)
        self._by_name: dict[str, Command] = {}
        for cmd in self._commands:
            for name in cmd.names:
                self._by_name[name] = cmd

    def get(self, name: str) -> Command | None:
        return self._by_name.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)
