# LedgerShell — Interactive Line-Oriented Ledger Command Shell
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
Low-level database schema for the LedgerShell data file.

Handles:
- Schema creation
- The format version header stored in the meta table
"""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path

# Only v0 exists so far; bump when the table layout changes incompatibly.
CURRENT_VERSION = 0
VERSION_KEY = "format_version"


def ensure_schema(db_path: Path) -> None:
    """Create the ledger schema if it does not exist yet.

    Creates required tables:
    - meta: file header (format version, creation time)
    - accounts: one row per account, unique names
    - categories: transaction category ids
    - transactions: amounts in cents, ISO-8601 timestamps, owned by an
      account

    Args:
        db_path: Path to SQLite database file

    This function is idempotent - safe to call multiple times. An existing
    version header is never overwritten.
    """
    # Ensure parent directory exists
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    try:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS meta (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
            """
        )

        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS accounts (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                position INTEGER NOT NULL,
                name TEXT NOT NULL UNIQUE
            )
            """
        )

        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS categories (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL UNIQUE
            )
            """
        )

        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS transactions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                account_id INTEGER NOT NULL REFERENCES accounts(id),
                amount_cents INTEGER NOT NULL,
                timestamp TEXT NOT NULL,
                description TEXT NOT NULL,
                category TEXT
            )
            """
        )

        now = datetime.now().isoformat()
        conn.execute(
            "INSERT OR IGNORE INTO meta (key, value) VALUES (?, ?)",
            (VERSION_KEY, str(CURRENT_VERSION)),
        )
        conn.execute(
            "INSERT OR IGNORE INTO meta (key, value) VALUES (?, ?)",
            ("created_at", now),
        )

        conn.commit()
    finally:
        conn.close()


def read_format_version(db_path: Path) -> int | None:
    """Return the format version recorded in the file, or None."""
    conn = sqlite3.connect(str(db_path))
    try:
        try:
            row = conn.execute(
                "SELECT value FROM meta WHERE key = ?", (VERSION_KEY,)
            ).fetchone()
        except sqlite3.DatabaseError:
            # No meta table, or not an SQLite file at all
            return None
        if row is None:
            return None
        try:
            return int(row[0])
        except ValueError:
            return None
    finally:
        conn.close()
