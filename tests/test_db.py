# tests/test_db.py
from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest

from ledger_shell import config, db


@pytest.fixture
def ledger_data_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    data = tmp_path / "ledger_data_home"
    data.mkdir(parents=True, exist_ok=True)
    monkeypatch.setenv("LEDGER_DATA_HOME", str(data))
    return data


def _cols(db_path: Path, table: str) -> set[str]:
    conn = sqlite3.connect(str(db_path))
    try:
        cur = conn.cursor()
        cur.execute(f"PRAGMA table_info({table})")
        return {row[1] for row in cur.fetchall()}
    finally:
        conn.close()


def _tables(db_path: Path) -> set[str]:
    conn = sqlite3.connect(str(db_path))
    try:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
        return {r[0] for r in rows}
    finally:
        conn.close()


def test_ensure_schema_creates_required_tables(ledger_data_home: Path) -> None:
    """
    db.ensure_schema must create required tables for a fresh file,
    including the parent directory.
    """
    path = config.ledger_db_path(config.get_data_root())
    assert not path.parent.exists()

    db.ensure_schema(path)

    assert path.exists()
    assert {"meta", "accounts", "categories", "transactions"} <= _tables(path)
    assert {"amount_cents", "timestamp", "description", "category"} <= _cols(
        path, "transactions"
    )


def test_ensure_schema_writes_current_version(tmp_path: Path) -> None:
    path = tmp_path / "ledger.db"
    db.ensure_schema(path)

    assert db.read_format_version(path) == db.CURRENT_VERSION == 0


def test_ensure_schema_is_idempotent(tmp_path: Path) -> None:
    path = tmp_path / "ledger.db"
    db.ensure_schema(path)

    conn = sqlite3.connect(str(path))
    with conn:
        conn.execute("INSERT INTO accounts (position, name) VALUES (0, 'keep')")
    conn.close()

    db.ensure_schema(path)

    conn = sqlite3.connect(str(path))
    try:
        names = [r[0] for r in conn.execute("SELECT name FROM accounts")]
    finally:
        conn.close()
    assert names == ["keep"]


def test_ensure_schema_never_overwrites_version(tmp_path: Path) -> None:
    path = tmp_path / "ledger.db"
    db.ensure_schema(path)

    conn = sqlite3.connect(str(path))
    with conn:
        conn.execute(
            "UPDATE meta SET value = '7' WHERE key = ?", (db.VERSION_KEY,)
        )
    conn.close()

    db.ensure_schema(path)
    assert db.read_format_version(path) == 7


def test_read_format_version_on_foreign_file(tmp_path: Path) -> None:
    path = tmp_path / "other.db"
    conn = sqlite3.connect(str(path))
    conn.execute("CREATE TABLE things (x INTEGER)")
    conn.close()

    assert db.read_format_version(path) is None


def test_read_format_version_on_non_sqlite_file(tmp_path: Path) -> None:
    path = tmp_path / "garbage.db"
    path.write_bytes(b"this is not a database" * 20)

    assert db.read_format_version(path) is None


def test_ensure_schema_on_non_sqlite_file_raises_database_error(tmp_path: Path) -> None:
    path = tmp_path / "garbage.db"
    path.write_bytes(b"this is not a database" * 20)

    with pytest.raises(sqlite3.DatabaseError):
        db.ensure_schema(path)
