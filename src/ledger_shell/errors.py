# LedgerShell — Interactive Line-Oriented Ledger Command Shell
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Exception types for LedgerShell.

Handles:
- Dispatch-level failures (unknown command names)
- The command error taxonomy (syntax / argument / dependency)
- Persistence failures raised by the store
"""

from __future__ import annotations

from enum import Enum


class LedgerShellError(Exception):
    """Base exception for LedgerShell."""


class CommandNotFoundError(LedgerShellError):
    """Raised by the dispatcher when no command has the requested name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Could not find command named '{name}'")
        self.name = name


class StoreError(LedgerShellError):
    """Raised when saved data cannot be read or written."""


class SyntaxErrorKind(Enum):
    MISSING_SUBCOMMAND = "missing_subcommand"
    INVALID_SUBCOMMAND = "invalid_subcommand"
    MISSING_PARAM = "missing_param"


class CmdError(LedgerShellError):
    """Base of the command error taxonomy.

    ``command`` is the primary name of the command that raised the error,
    when known, and is prepended to the rendered message.
    """

    def __init__(self, message: str, command: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.command = command

    def __str__(self) -> str:
        if self.command:
            return f"{self.command}: {self.message}"
        return self.message


class CmdSyntaxError(CmdError):
    """The command line did not have the shape the command expects.

    Handled by the dispatcher itself; never reaches the REPL loop.
    """

    def __init__(
        self,
        kind: SyntaxErrorKind,
        detail: str | None = None,
        command: str | None = None,
    ) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(self._render(kind, detail), command=command)

    @staticmethod
    def _render(kind: SyntaxErrorKind, detail: str | None) -> str:
        if kind is SyntaxErrorKind.MISSING_SUBCOMMAND:
            return "Missing subcommand"
        if kind is SyntaxErrorKind.INVALID_SUBCOMMAND:
            return f"Invalid subcommand '{detail}'"
        return detail or "Missing parameter"


class CmdArgumentError(CmdError):
    """The arguments were well-formed but refer to something invalid."""


class CmdDependencyError(CmdError):
    """A collaborator outside the shell (storage, parsing) failed."""

    def __init__(
        self, cause: BaseException, command: str | None = None
    ) -> None:
        super().__init__(str(cause), command=command)
        self.cause = cause
