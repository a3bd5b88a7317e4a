"""Engine backed by a SQLAlchemy ``Engine``.

Statements are sent with :meth:`sqlalchemy.engine.Connection.exec_driver_sql`,
so the compiled SQL reaches the DBAPI driver unchanged.  The ``?``
placeholders therefore require a driver whose paramstyle is ``qmark``
(``sqlite://``, ``sqlite+pysqlite://``).

Install the optional dependency before using this engine::

    pip install "fluentql[sqlalchemy]"

Example::

    from fluentql import Database, DatabaseConfig

    db = Database(config=DatabaseConfig(target="sqlalchemy", database="sqlite:///app.db"))
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from fluentql.config import DatabaseConfig
from fluentql.engine.base import EngineConnection, Statement
from fluentql.errors import ConfigurationError, EngineError, StatementError

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, CursorResult

logger = logging.getLogger(__name__)


class SQLAlchemyStatement(Statement):
    """A statement executed through ``Connection.exec_driver_sql``."""

    _connection: SQLAlchemyConnection
    _result: CursorResult | None = None

    def _execute(self) -> Sequence[str]:
        self._result = self._connection.raw.exec_driver_sql(
            self.sql, self.bindings
        )
        if self._result.returns_rows:
            return list(self._result.keys())
        self._connection._record(self._result)
        return []

    def _fetch_row(self) -> Sequence[Any] | None:
        if self._result is None or not self._result.returns_rows:
            return None
        row = self._result.fetchone()
        return None if row is None else tuple(row)

    def _release(self) -> None:
        if self._result is not None:
            self._result.close()
            self._result = None


class SQLAlchemyConnection(EngineConnection):
    """Engine connection for ``target="sqlalchemy"``.

    ``config.database`` is a SQLAlchemy URL; ``":memory:"`` maps to
    ``sqlite://``.  The connection runs with ``AUTOCOMMIT`` isolation.

    Raises:
        ConfigurationError: If ``sqlalchemy`` is not installed.
        EngineError: If the engine cannot connect.
    """

    def __init__(self, config: DatabaseConfig) -> None:
        super().__init__(config)
        try:
            import sqlalchemy
            from sqlalchemy.exc import SQLAlchemyError
        except ImportError as exc:
            raise ConfigurationError(
                "SQLAlchemy is required for target='sqlalchemy'. "
                'Install it with: pip install "fluentql[sqlalchemy]"',
                target=config.target,
            ) from exc

        url = "sqlite://" if config.database == ":memory:" else config.database
        try:
            self._engine = sqlalchemy.create_engine(url)
            self.raw: Connection = self._engine.connect().execution_options(
                isolation_level="AUTOCOMMIT"
            )
        except SQLAlchemyError as exc:
            raise EngineError(f"Cannot connect to {url}: {exc}", database=url) from exc
        # Driver exceptions surface unwrapped from executescript and fetches.
        self._errors: tuple[type[Exception], ...] = (
            SQLAlchemyError,
            self._engine.dialect.loaded_dbapi.Error,
            OverflowError,
        )
        self._last_rowid: int | None = None
        self._last_changes = 0
        logger.debug("Connected SQLAlchemy engine %s", self._engine.url)

    @property
    def engine_errors(self) -> tuple[type[Exception], ...]:
        return self._errors

    def prepare(self, sql: str, bindings: Sequence[Any] = ()) -> SQLAlchemyStatement:
        return SQLAlchemyStatement(self, sql, bindings)

    def execute_script(self, script: str) -> None:
        self.trace(script, ())
        driver_connection = self.raw.connection.driver_connection
        try:
            if hasattr(driver_connection, "executescript"):
                driver_connection.executescript(script)
            else:
                for sql in (part.strip() for part in script.split(";")):
                    if sql:
                        self.raw.exec_driver_sql(sql)
        except self._errors as exc:
            raise StatementError(str(exc), script) from exc

    @property
    def last_insert_rowid(self) -> int | None:
        return self._last_rowid

    @property
    def last_changes(self) -> int:
        return self._last_changes

    def close(self) -> None:
        self.raw.close()
        self._engine.dispose()
        logger.debug("Disposed SQLAlchemy engine %s", self._engine.url)

    def _record(self, result: CursorResult) -> None:
        """Remember the metadata of a statement that returned no rows."""
        if result.rowcount < 0:
            return
        self._last_changes = result.rowcount
        if result.lastrowid is not None:
            self._last_rowid = result.lastrowid
