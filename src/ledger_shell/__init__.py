# LedgerShell — Interactive Line-Oriented Ledger Command Shell
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
LedgerShell core package.

A raw-terminal REPL that tokenizes submitted lines, dispatches them to
registered commands, and keeps a recallable input history.
"""
from .kernel import Kernel as Kernel  # noqa: F401 (re-export)
