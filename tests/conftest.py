"""Shared pytest fixtures for fluentQL unit and integration tests."""
from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from fluentql import Database, Query
from tests.fixtures import load_ddl


@pytest.fixture()
def db() -> Iterator[Database]:
    """In-memory SQLite database with the sample schema."""
    database = Database()
    database.execute(load_ddl())
    yield database
    database.close()


@pytest.fixture()
def users(db: Database) -> Query:
    return db["users"]


@pytest.fixture()
def statements(db: Database) -> list[tuple[str, tuple[Any, ...]]]:
    """Every ``(sql, bindings)`` executed through ``db`` from here on."""
    recorded: list[tuple[str, tuple[Any, ...]]] = []
    db.trace(lambda sql, bindings: recorded.append((sql, bindings)))
    return recorded
