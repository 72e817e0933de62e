# LedgerShell — Interactive Line-Oriented Ledger Command Shell
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
LedgerShell kernel.

Core implementation of the shell:
- REPL loop over terminal input events
- line tokenizing + command dispatch
- error classification and reporting
- input history + Up/Down paging

Important boundary:
- Kernel does not load YAML or open files itself.
- Kernel consumes the injected terminal, store, commands and config.
"""

from __future__ import annotations

import traceback
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from . import config as cfg_module
from .errors import CmdSyntaxError, CommandNotFoundError, LedgerShellError
from .history import MAX_HISTORY_LENGTH, InputHistory
from .interfaces import (
    CmdResult,
    Command,
    ConfigModel,
    LedgerStore,
    OutputSink,
    Terminal,
)
from .ledger import Ledger
from .registry import CommandRegistry
from .ui import ArrowDown, ArrowUp, InputEvent, Interrupt, Text
from .utils import tokenize

HELP_COMMAND = "help"
HELP_FLAG = "--help"


def write_crash_log(
    error: BaseException,
    raw_command: str = "",
    db_path: Path | None = None,
) -> None:
    """Write an entry to the crash log.

    Logs unhandled exceptions or critical failures.
    Only creates the log directory when actually needed.
    Appends to crash.log (never overwrites).
    """
    try:
        logs_dir = cfg_module.logs_dir(cfg_module.get_data_root())

        # Create logs directory only when we need to write
        logs_dir.mkdir(parents=True, exist_ok=True)

        crash_log_path = logs_dir / "crash.log"

        lines = [datetime.now().isoformat()]
        if raw_command:
            lines.append(f"raw={raw_command}")
        if db_path:
            lines.append(f"db_path={db_path}")

        lines.append(f"error={type(error).__name__}: {error}")
        lines.append("traceback:")
        lines.append(
            "".join(
                traceback.format_exception(
                    type(error), error, error.__traceback__
                )
            )
        )
        lines.append("----")

        with crash_log_path.open("a", encoding="utf-8") as f:
            f.write("\n".join(lines) + "\n")

    except Exception:
        # If we can't write the crash log, fail silently
        # (we're already in an error state)
        pass


@dataclass
class Application:
    """What a command gets besides its arguments and the ledger."""

    store: LedgerStore
    out: OutputSink
    exit_message: str = "Exiting..."

    def load_ledger(self) -> Ledger:
        return self.store.load_ledger()

    def store_ledger(self, ledger: Ledger) -> None:
        self.store.store_ledger(ledger)


@dataclass
class Kernel:
    """LedgerShell session engine."""

    terminal: Terminal
    store: LedgerStore
    commands: Iterable[Command]
    config: ConfigModel | None = None

    ledger: Ledger = field(default_factory=Ledger)
    running: bool = False

    # Derived in __post_init__
    registry: CommandRegistry = field(init=False)
    history: InputHistory = field(init=False)
    app: Application = field(init=False)

    # None while idle; index into history while paging with Up/Down
    _paging_index: int | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.registry = CommandRegistry(self.commands)

        max_length = MAX_HISTORY_LENGTH
        exit_message = "Exiting..."
        if self.config is not None:
            max_length = int(
                self.config.get_path("history.max_length", max_length)
            )
            exit_message = str(
                self.config.get_path("system.exit.message", exit_message)
            )
        self.history = InputHistory(max_length)

        self.app = Application(
            store=self.store, out=self.terminal, exit_message=exit_message
        )

    # -----------------------
    # Output helpers
    # -----------------------

    def _writeln(self, text: str = "") -> None:
        print(text, file=self.terminal)

    @property
    def is_paging(self) -> bool:
        return self._paging_index is not None

    # -----------------------
    # Session
    # -----------------------

    def run(self) -> None:
        """Read and handle events until told to stop."""
        self.running = True
        while self.running:
            event = self.terminal.get_event()
            raw = event.content if isinstance(event, Text) else ""
            try:
                self.running = self.handle_event(event)
            except LedgerShellError as e:
                # For now all errors are recoverable
                self._writeln(str(e))
            except Exception as e:
                write_crash_log(
                    e,
                    raw_command=raw,
                    db_path=getattr(self.store, "db_path", None),
                )
                self._writeln(
                    f"[ERROR] Unhandled exception: {type(e).__name__}: {e}"
                )
                # Continue session

    def handle_event(self, event: InputEvent) -> bool:
        """Handle one input event.

        Returns True to keep listening, False to terminate the loop.
        """
        if self._paging_index is not None:
            if isinstance(event, (ArrowUp, ArrowDown)):
                self._paging_index = self._step_history(
                    self._paging_index, event
                )
                return True
            # Leave paging and treat the event like any other
            self._paging_index = None

        if isinstance(event, Text):
            try:
                result = self.run_command(event.content)
            finally:
                self.history.add(event.content)
            return result is not CmdResult.TERMINATE

        if isinstance(event, (ArrowUp, ArrowDown)):
            # Nothing to page through yet
            if not self.history:
                return True
            self._paging_index = 0
            self.terminal.set_input_buffer(self.history[0])
            return True

        if isinstance(event, Interrupt):
            return False

        return True

    def _step_history(self, index: int, event: InputEvent) -> int:
        """Move one entry older (Up) or newer (Down), wrapping around."""
        step = 1 if isinstance(event, ArrowUp) else -1
        index = (index + step) % len(self.history)
        self.terminal.set_input_buffer(self.history[index])
        return index

    # -----------------------
    # Command handling
    # -----------------------

    def run_command(self, raw_input: str) -> CmdResult:
        """Tokenize and dispatch a single command line.

        Syntax errors are reported here. Argument and dependency errors,
        and unknown command names, are raised to the caller.
        """
        tokens = tokenize(raw_input)
        if not tokens:
            return CmdResult.OK

        cmd_name, args = tokens[0], tokens[1:]

        if cmd_name.lower() == HELP_COMMAND:
            self.print_help(args)
            return CmdResult.OK

        cmd = self.registry.get(cmd_name)
        if cmd is None:
            raise CommandNotFoundError(cmd_name)

        if args and args[0].lower() == HELP_FLAG:
            self._writeln(cmd.help_text)
            return CmdResult.OK

        try:
            return cmd.execute(args, self.ledger, self.app)
        except CmdSyntaxError as e:
            self._writeln(f"Syntax Error: {e}")
            return CmdResult.OK

    def print_help(self, args: list[str]) -> None:
        if args:
            cmd = self.registry.get(args[0])
            if cmd is None:
                self._writeln(f"No command named '{args[0]}'")
            else:
                self._writeln(cmd.help_text)
            return

        lines = ["The following commands are available:", ""]
        for cmd in self.registry:
            primary, aliases = cmd.names[0], cmd.names[1:]
            if aliases:
                lines.append(f"  {primary}  ({', '.join(aliases)})")
            else:
                lines.append(f"  {primary}")
        lines.append("")
        lines.append(
            "'help COMMAND' will list detailed information on a given command."
        )
        self._writeln("\n".join(lines))

    # -----------------------
    # Startup helpers
    # -----------------------

    def welcome(self) -> str:
        if self.config is None:
            return ""
        msg = self.config.get_path("system.welcome.message", "")
        return msg.strip() if isinstance(msg, str) else ""

    def autoload(self) -> bool:
        """Replace the ledger with saved data, if any.

        Returns True when data was loaded. Load failures are reported, not
        raised, so a damaged file never prevents the shell from starting.
        """
        try:
            new_ledger = self.app.load_ledger()
        except LedgerShellError as e:
            self._writeln(f"Could not load saved data: {e}")
            return False
        self.ledger.replace_with(new_ledger)
        return True
