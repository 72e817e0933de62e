# LedgerShell — Interactive Line-Oriented Ledger Command Shell
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
LedgerShell CLI entry point and REPL loop.

Design:
- CLI owns process startup and ledger file resolution.
- Kernel is the session engine (terminal+store+commands+config injected).
- TerminalInterface owns raw mode for the whole session.
"""

from __future__ import annotations

import sqlite3
import sys
from pathlib import Path

from . import config
from .commands import command_list
from .db import ensure_schema
from .kernel import Kernel, write_crash_log
from .store import SQLiteLedgerStore
from .ui import TerminalInterface


def run_repl(kernel: Kernel, autoload: bool = False) -> None:
    """Run the standard LedgerShell session on an already-wired kernel."""
    welcome = kernel.welcome()
    if welcome:
        print(welcome, file=kernel.terminal)

    if autoload:
        kernel.autoload()

    kernel.run()
    print("Bye!", file=kernel.terminal)


def _should_autoload(cfg: config.YAMLConfig, db_path: Path) -> bool:
    return bool(cfg.get_path("storage.autoload", True)) and db_path.exists()


def main() -> None:
    """Main entry point for LedgerShell."""
    db_path: Path | None = None
    try:
        cfg = config.load_system_config()

        filename = str(
            cfg.get_path("storage.filename", config.DEFAULT_LEDGER_FILENAME)
        )
        db_path = config.ledger_db_path(config.get_data_root(), filename)

        # Decide before ensure_schema creates an empty file
        autoload = _should_autoload(cfg, db_path)

        try:
            ensure_schema(db_path)
        except sqlite3.DatabaseError as e:
            # Leave a damaged file alone; load/save will report it
            print(
                f"Could not prepare ledger file {db_path}: {e}",
                file=sys.stderr,
            )
        store = SQLiteLedgerStore(db_path)

        with TerminalInterface(prompt=config.prompt_string(cfg)) as terminal:
            kernel = Kernel(
                terminal=terminal,
                store=store,
                commands=command_list(),
                config=cfg,
            )
            run_repl(kernel, autoload=autoload)

    except Exception as e:
        write_crash_log(e, db_path=db_path)
        print(f"Encountered fatal error: {e}", file=sys.stderr)
        print("Exiting...", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
