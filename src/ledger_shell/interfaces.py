# LedgerShell — Interactive Line-Oriented Ledger Command Shell
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Protocol definitions for dependency injection.

These interfaces keep the kernel independent of the real terminal, the
storage backend and the concrete command set.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .kernel import Application  # pragma: no cover
    from .ledger import Ledger  # pragma: no cover
    from .ui import InputEvent  # pragma: no cover


class CmdResult(Enum):
    """Outcome of a successful command execution."""

    OK = "ok"
    TERMINATE = "terminate"


class OutputSink(Protocol):
    """Destination for all user-facing text."""

    def write(self, text: str) -> int:
        """Write text and return the number of characters written."""
        ...

    def flush(self) -> None:
        ...


class Terminal(OutputSink, Protocol):
    """Protocol for the raw terminal input driver."""

    def get_event(self) -> InputEvent:
        """Block until the next complete input event."""
        ...

    def set_input_buffer(self, text: str) -> None:
        """Replace the in-progress line and redraw it."""
        ...


class LedgerStore(Protocol):
    """Protocol for persistent storage of the ledger."""

    def load_ledger(self) -> Ledger:
        """Return the saved ledger as a new object."""
        ...

    def store_ledger(self, ledger: Ledger) -> None:
        """Replace the saved ledger with ``ledger``."""
        ...


class Command(Protocol):
    """A named shell command.

    ``names[0]`` is the primary name, the rest are aliases.
    """

    @property
    def names(self) -> list[str]:
        ...

    @property
    def help_text(self) -> str:
        ...

    def execute(
        self, args: list[str], ledger: Ledger, app: Application
    ) -> CmdResult:
        """Run the command.

        Raises:
            CmdError: on failure (syntax, argument or dependency)
        """
        ...


class ConfigModel(Protocol):
    """Protocol for configuration access."""

    @property
    def system(self) -> dict[str, Any]:
        """System configuration."""
        ...

    def get_path(self, path: str, default: Any = None) -> Any:
        """Nested lookup using a dot-separated path."""
        ...
