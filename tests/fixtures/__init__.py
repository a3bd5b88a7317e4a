"""Test fixtures: sample schema DDL and row helpers."""

from __future__ import annotations

from pathlib import Path

from fluentql import Database, Statement

_FIXTURES_DIR = Path(__file__).parent


def load_ddl() -> str:
    """Return the sample SQLite DDL (``users`` and ``events`` tables)."""
    return (_FIXTURES_DIR / "ddl_sqlite.sql").read_text()


def insert_user(
    db: Database,
    name: str,
    age: int | None = None,
    admin: bool = False,
) -> Statement:
    """Insert ``{name}@example.com`` with raw SQL, bypassing the builder."""
    return db.run(
        "INSERT INTO users (email, age, admin) VALUES (?, ?, ?)",
        f"{name}@example.com",
        age,
        admin,
    )


def insert_users(db: Database, *names: str) -> None:
    for name in names:
        insert_user(db, name)
