"""The database handle: table factory and raw statement entry point.

``Database`` wires a :class:`~fluentql.config.DatabaseConfig` to an engine
connection (via :class:`~fluentql.engine.registry.EngineFactory`) and a
:class:`~fluentql.compile.builder.StatementCompiler` (via
:class:`~fluentql.compile.registry.QuoterFactory`).  Every
:class:`~fluentql.query.Query` it creates compiles and executes through
these two collaborators.

Usage::

    with Database("app.db") as db:
        db.execute("CREATE TABLE IF NOT EXISTS users (id INTEGER PRIMARY KEY, email TEXT)")
        users = db["users"]
        users.insert({"email": "alice@example.com"})
        print(users.count())
"""
from __future__ import annotations

from typing import Any

from fluentql.compile.builder import StatementCompiler
from fluentql.compile.registry import QuoterFactory
from fluentql.config import DatabaseConfig
from fluentql.engine.base import EngineConnection, Statement, TraceCallback
from fluentql.engine.registry import EngineFactory
from fluentql.query import Query
from fluentql.schema.clauses import Binding, QueryState


class Database:
    """One open connection plus the compiler for its queries.

    Args:
        database: Path (or URL for ``target="sqlalchemy"``).  Overrides
            ``config.database`` when both are given.
        config: Full configuration; defaults to an in-memory SQLite database.

    Raises:
        ConfigurationError: If the engine target or quoting policy is unknown.
        EngineError: If the connection cannot be opened.
    """

    def __init__(
        self,
        database: str | None = None,
        *,
        config: DatabaseConfig | None = None,
    ) -> None:
        config = config or DatabaseConfig()
        if database is not None:
            config = config.model_copy(update={"database": database})
        self.config = config
        self.compiler = StatementCompiler(QuoterFactory.create(config.identifier_quoting))
        self.engine: EngineConnection = EngineFactory.create(config)

    def __repr__(self) -> str:
        return f"<Database {self.config.target}:{self.config.database}>"

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def __getitem__(self, table: str) -> Query:
        return self.table(table)

    def table(self, name: str) -> Query:
        """Return a root query selecting ``*`` from ``name``."""
        return Query(self, QueryState(table=name))

    # ------------------------------------------------------------------
    # Raw statements
    # ------------------------------------------------------------------

    def prepare(self, sql: str, *bindings: Binding) -> Statement:
        """Return an unexecuted statement for ``sql``."""
        return self.engine.prepare(sql, bindings)

    def run(self, sql: str, *bindings: Binding) -> Statement:
        """Execute ``sql`` and return the (possibly failed) statement."""
        return self.prepare(sql, *bindings).run()

    def scalar(self, sql: str, *bindings: Binding) -> Any:
        """Return the first column of the first row of ``sql``, or ``None``."""
        statement = self.prepare(sql, *bindings)
        value = statement.scalar()
        statement.close()
        return value

    def execute(self, script: str) -> None:
        """Execute a multi-statement script such as schema DDL.

        Raises:
            StatementError: If the engine rejects the script.
        """
        self.engine.execute_script(script)

    # ------------------------------------------------------------------
    # Connection metadata
    # ------------------------------------------------------------------

    @property
    def last_insert_rowid(self) -> int | None:
        return self.engine.last_insert_rowid

    @property
    def last_changes(self) -> int:
        return self.engine.last_changes

    def trace(self, callback: TraceCallback | None) -> None:
        """Call ``callback(sql, bindings)`` before every executed statement.

        Pass ``None`` to stop tracing.
        """
        self.engine.set_trace(callback)

    def close(self) -> None:
        self.engine.close()
