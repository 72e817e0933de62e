# LedgerShell — Interactive Line-Oriented Ledger Command Shell
# Copyright (c) 2025
# TriFactoria (Andrew Blankfield)
#
# Licensed under the Business Source License 1.1 (BSL 1.1).
# You may use, modify, and redistribute this file under the terms of the BSL.
# On the Change Date (2029-01-01), this file will be licensed under
# the Apache License, Version 2.0.

"""
SQLite-backed storage implementation for LedgerShell.

The whole ledger is written and read in one go; there are no partial
updates.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime
from pathlib import Path

from .db import CURRENT_VERSION, read_format_version
from .errors import StoreError
from .ledger import Account, Ledger, Money, Transaction, TransactionCategories


class SQLiteLedgerStore:
    """SQLite implementation of LedgerStore protocol."""

    def __init__(self, db_path: Path):
        """Initialize store with database path.

        Args:
            db_path: Path to SQLite database file (must have schema)

        Note:
            Store does NOT create schema. Schema must be created by
            db.ensure_schema() before constructing SQLiteLedgerStore.
        """
        self.db_path = db_path

    def _check_version(self) -> None:
        if not self.db_path.exists():
            raise StoreError(f"No ledger file at {self.db_path}")

        version = read_format_version(self.db_path)
        if version != CURRENT_VERSION:
            raise StoreError("Version mismatch, cannot load file")

    # ----------------------------------------------------------------
    # Whole-ledger operations
    # ----------------------------------------------------------------

    def store_ledger(self, ledger: Ledger) -> None:
        """Replace everything in the file with the given ledger."""
        self._check_version()

        conn = sqlite3.connect(str(self.db_path))
        try:
            with conn:
                conn.execute("DELETE FROM transactions")
                conn.execute("DELETE FROM accounts")
                conn.execute("DELETE FROM categories")

                conn.executemany(
                    "INSERT INTO categories (name) VALUES (?)",
                    [(name,) for name in ledger.categories],
                )

                for position, account in enumerate(ledger.accounts):
                    cur = conn.execute(
                        "INSERT INTO accounts (position, name) VALUES (?, ?)",
                        (position, account.name),
                    )
                    account_id = cur.lastrowid
                    conn.executemany(
                        """
                        INSERT INTO transactions (
                            account_id, amount_cents, timestamp,
                            description, category
                        )
                        VALUES (?, ?, ?, ?, ?)
                        """,
                        [
                            (
                                account_id,
                                t.amount.cents,
                                t.time.isoformat(),
                                t.description,
                                t.category,
                            )
                            for t in account.transactions
                        ],
                    )
        except sqlite3.Error as e:
            raise StoreError(f"Failed to write {self.db_path}: {e}") from e
        finally:
            conn.close()

    def load_ledger(self) -> Ledger:
        """Read the saved ledger into a new Ledger object."""
        self._check_version()

        conn = sqlite3.connect(str(self.db_path))
        try:
            categories = TransactionCategories(
                row[0]
                for row in conn.execute(
                    "SELECT name FROM categories ORDER BY id"
                )
            )

            accounts: list[Account] = []
            account_rows = conn.execute(
                "SELECT id, name FROM accounts ORDER BY position"
            ).fetchall()
            for account_id, name in account_rows:
                rows = conn.execute(
                    """
                    SELECT amount_cents, timestamp, description, category
                    FROM transactions
                    WHERE account_id = ?
                    ORDER BY id
                    """,
                    (account_id,),
                ).fetchall()
                accounts.append(
                    Account(
                        name,
                        [
                            Transaction(
                                amount=Money(cents),
                                time=datetime.fromisoformat(ts),
                                description=description,
                                category=category,
                            )
                            for cents, ts, description, category in rows
                        ],
                    )
                )
        except (sqlite3.Error, ValueError) as e:
            raise StoreError(f"Failed to read {self.db_path}: {e}") from e
        finally:
            conn.close()

        return Ledger(accounts, categories)
