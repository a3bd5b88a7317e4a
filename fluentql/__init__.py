"""fluentQL – immutable, chainable SQL query building for embedded databases.

Build queries as values; compile them to parameterized SQL only when run.

Public API
----------
``Database``
    Opens an engine connection and hands out table queries
    (``db["users"]``).

``Query``
    The immutable builder: ``select``, ``filter``, ``group``, ``order``,
    ``reorder``, ``reverse_order``, ``limit``; lazy row iteration;
    ``count`` / ``max`` / ``min`` / ``sum`` / ``average`` / ``total``;
    ``insert`` / ``update`` / ``delete``.

Re-exported types
-----------------
``DatabaseConfig``, ``Direction``, ``QueryState``, ``CompiledStatement``,
``Statement``, ``InsertResult``, ``ChangeResult``, and all error classes.

Extensibility
-------------
New engines and identifier quoting policies are registered by name::

    from fluentql.engine.registry import EngineFactory

    @EngineFactory.register("duckdb")
    class DuckDBConnection(EngineConnection):
        ...

After registration, ``DatabaseConfig(target="duckdb")`` selects it.
"""

from __future__ import annotations

from fluentql.compile import (
    CompiledStatement,
    IdentifierQuoter,
    QuoterFactory,
    StatementCompiler,
)
from fluentql.config import DatabaseConfig
from fluentql.database import Database
from fluentql.engine import EngineConnection, EngineFactory, Statement
from fluentql.errors import (
    ConfigurationError,
    EngineError,
    FluentQLError,
    InvalidIdentifierError,
    StatementError,
)
from fluentql.query import ChangeResult, InsertResult, Query, RowIterator
from fluentql.schema import Binding, Direction, GroupClause, OrderTerm, QueryState

__all__ = [
    # Entry points
    "Database",
    "DatabaseConfig",
    "Query",
    "RowIterator",
    "InsertResult",
    "ChangeResult",
    # Clause model
    "Binding",
    "Direction",
    "GroupClause",
    "OrderTerm",
    "QueryState",
    # Compilation
    "CompiledStatement",
    "StatementCompiler",
    "IdentifierQuoter",
    "QuoterFactory",
    # Engines
    "EngineConnection",
    "EngineFactory",
    "Statement",
    # Errors
    "FluentQLError",
    "ConfigurationError",
    "EngineError",
    "StatementError",
    "InvalidIdentifierError",
]
