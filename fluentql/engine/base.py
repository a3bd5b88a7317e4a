"""Engine abstractions: the EngineConnection ABC and the Statement base.

The Template Method pattern (GoF) is used:

- ``Statement`` owns the execution protocol (execute once, step rows,
  record failures, trace) and leaves the two engine calls, ``_execute`` and
  ``_fetch_row``, to subclasses.
- ``EngineConnection`` subclasses open the underlying connection and expose
  the connection-level metadata (last insert rowid, last change count).

Failures never escape a statement: the engine exception is wrapped in a
:class:`~fluentql.errors.StatementError`, logged, and stored on
``statement.error``.  Callers inspect ``statement.failed``.

A connection and its statements must only be used from one thread at a
time.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any

from fluentql.config import DatabaseConfig
from fluentql.errors import StatementError

logger = logging.getLogger(__name__)

#: Called with ``(sql, bindings)`` for every statement sent to the engine.
TraceCallback = Callable[[str, tuple[Any, ...]], None]


class EngineConnection(ABC):
    """Abstract base for one open engine connection.

    Args:
        config: The database configuration the connection was opened with.
    """

    def __init__(self, config: DatabaseConfig) -> None:
        self.config = config
        self._trace_callback: TraceCallback | None = None

    @property
    @abstractmethod
    def engine_errors(self) -> tuple[type[Exception], ...]:
        """Exception types that mark a statement as failed."""

    @abstractmethod
    def prepare(self, sql: str, bindings: Sequence[Any] = ()) -> Statement:
        """Return an unexecuted statement for ``sql`` with ``bindings``.

        Args:
            sql: SQL text with positional ``?`` placeholders.
            bindings: Values for the placeholders, in order.
        """

    @abstractmethod
    def execute_script(self, script: str) -> None:
        """Execute one or more ``;``-separated statements (DDL, fixtures).

        Raises:
            StatementError: If the engine rejects the script.
        """

    @property
    @abstractmethod
    def last_insert_rowid(self) -> int | None:
        """Rowid of the most recent successful INSERT, as the engine reports it.

        Only meaningful while :attr:`last_changes` is non-zero; ``0`` is a
        valid rowid.
        """

    @property
    @abstractmethod
    def last_changes(self) -> int:
        """Rows changed by the most recent INSERT, UPDATE or DELETE."""

    @abstractmethod
    def close(self) -> None:
        """Close the underlying connection."""

    # ------------------------------------------------------------------
    # Tracing
    # ------------------------------------------------------------------

    def set_trace(self, callback: TraceCallback | None) -> None:
        self._trace_callback = callback

    def trace(self, sql: str, bindings: tuple[Any, ...]) -> None:
        """Log ``sql`` and forward it to the registered trace callback."""
        level = logging.INFO if self.config.echo else logging.DEBUG
        logger.log(level, "%s %r", sql, bindings)
        if self._trace_callback is not None:
            self._trace_callback(sql, bindings)


class Statement(ABC):
    """A prepared statement bound to its positional values.

    The statement executes lazily on the first :meth:`run`, :meth:`step` or
    :meth:`scalar` call and never executes twice.

    Attributes:
        sql: The SQL text.
        bindings: The bound values.
        error: The recorded failure, or ``None``.
    """

    def __init__(
        self,
        connection: EngineConnection,
        sql: str,
        bindings: Sequence[Any] = (),
    ) -> None:
        self.sql = sql
        self.bindings = tuple(bindings)
        self.error: StatementError | None = None
        self._connection = connection
        self._executed = False
        self._exhausted = False
        self._columns: tuple[str, ...] = ()
        self._row: tuple[Any, ...] | None = None

    def __repr__(self) -> str:
        state = "failed" if self.failed else ("executed" if self._executed else "prepared")
        return f"<{type(self).__name__} {state} {self.sql!r} {self.bindings!r}>"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def failed(self) -> bool:
        return self.error is not None

    @property
    def columns(self) -> tuple[str, ...]:
        """Result column names; empty for statements that return no rows."""
        return self._columns

    @property
    def values(self) -> dict[str, Any] | None:
        """The current row as ``{column: value}``, or ``None`` before the
        first row and after the last one.  SQL NULL is ``None``."""
        if self._row is None:
            return None
        return dict(zip(self._columns, self._row))

    def run(self) -> Statement:
        """Execute the statement to completion and return it."""
        self._execute_once()
        return self

    def step(self) -> bool:
        """Advance the cursor by one row.

        Returns:
            ``True`` when a row is available through :attr:`values`;
            ``False`` once the rows are exhausted or the statement failed.
        """
        if not self._execute_once() or self._exhausted:
            self._row = None
            return False
        try:
            row = self._fetch_row()
        except self._connection.engine_errors as exc:
            self._fail(exc)
            row = None
        if row is None:
            self.close()
            return False
        self._row = tuple(row)
        return True

    def scalar(self) -> Any:
        """Return the first column of the next row, or ``None``."""
        if not self.step():
            return None
        assert self._row is not None
        return self._row[0]

    def close(self) -> None:
        """Release the engine cursor; later :meth:`step` calls return ``False``."""
        self._executed = True
        self._exhausted = True
        self._row = None
        self._release()

    # ------------------------------------------------------------------
    # Engine hooks
    # ------------------------------------------------------------------

    @abstractmethod
    def _execute(self) -> Sequence[str]:
        """Send the statement to the engine.

        Returns:
            Result column names (empty when the statement returns no rows).
        """

    @abstractmethod
    def _fetch_row(self) -> Sequence[Any] | None:
        """Return the next result row, or ``None`` when exhausted."""

    def _release(self) -> None:
        """Free engine resources held for row fetching."""

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _execute_once(self) -> bool:
        if not self._executed:
            self._executed = True
            self._connection.trace(self.sql, self.bindings)
            try:
                self._columns = tuple(self._execute())
            except self._connection.engine_errors as exc:
                self._fail(exc)
            else:
                if not self._columns:
                    self.close()
        return not self.failed

    def _fail(self, exc: Exception) -> None:
        error = StatementError(str(exc), self.sql, self.bindings)
        error.__cause__ = exc
        self.error = error
        self.close()
        logger.warning("Statement failed: %s [sql=%r bindings=%r]", exc, self.sql, self.bindings)
