"""SQLite engine on top of the standard-library ``sqlite3`` module.

The connection runs in autocommit mode (``isolation_level=None``): every
INSERT, UPDATE and DELETE is visible as soon as it has run, and
``changes()`` / ``last_insert_rowid()`` describe that statement.
"""
from __future__ import annotations

import logging
import sqlite3
from collections.abc import Sequence
from typing import Any

from fluentql.config import DatabaseConfig
from fluentql.engine.base import EngineConnection, Statement
from fluentql.errors import EngineError, StatementError

logger = logging.getLogger(__name__)


class SQLiteStatement(Statement):
    """A statement executed through a ``sqlite3`` cursor."""

    _connection: SQLiteConnection
    _cursor: sqlite3.Cursor | None = None

    def _execute(self) -> Sequence[str]:
        self._cursor = self._connection.raw.execute(self.sql, self.bindings)
        return [column[0] for column in self._cursor.description or ()]

    def _fetch_row(self) -> Sequence[Any] | None:
        assert self._cursor is not None
        return self._cursor.fetchone()

    def _release(self) -> None:
        if self._cursor is not None:
            self._cursor.close()
            self._cursor = None


class SQLiteConnection(EngineConnection):
    """Engine connection for ``target="sqlite"``.

    Args:
        config: ``config.database`` is a file path or ``":memory:"``.

    Raises:
        EngineError: If the database file cannot be opened.
    """

    def __init__(self, config: DatabaseConfig) -> None:
        super().__init__(config)
        try:
            self.raw = sqlite3.connect(
                config.database,
                timeout=config.timeout,
                isolation_level=None,
            )
        except sqlite3.Error as exc:
            raise EngineError(
                f"Cannot open SQLite database: {exc}", database=config.database
            ) from exc
        logger.debug("Opened SQLite database %s", config.database)

    @property
    def engine_errors(self) -> tuple[type[Exception], ...]:
        # sqlite3 raises OverflowError for integers outside the 64-bit range.
        return (sqlite3.Error, OverflowError)

    def prepare(self, sql: str, bindings: Sequence[Any] = ()) -> SQLiteStatement:
        return SQLiteStatement(self, sql, bindings)

    def execute_script(self, script: str) -> None:
        self.trace(script, ())
        try:
            self.raw.executescript(script)
        except sqlite3.Error as exc:
            raise StatementError(str(exc), script) from exc

    @property
    def last_insert_rowid(self) -> int | None:
        return self.raw.execute("SELECT last_insert_rowid()").fetchone()[0]

    @property
    def last_changes(self) -> int:
        return self.raw.execute("SELECT changes()").fetchone()[0]

    def close(self) -> None:
        self.raw.close()
        logger.debug("Closed SQLite database %s", self.config.database)
