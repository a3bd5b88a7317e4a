"""Core QueryState → SQL compilation logic.

``StatementCompiler`` turns a :class:`~fluentql.schema.clauses.QueryState`
into a :class:`~fluentql.compile.base.CompiledStatement`.  Identifier
quoting is delegated to the injected ``IdentifierQuoter``; clause rendering
is delegated to the builders in :mod:`fluentql.compile.clause_builders`.

Clause order
------------
SELECT statements are always assembled as::

    SELECT <columns> FROM "<table>"
    [WHERE …] [GROUP BY … [HAVING …]] [ORDER BY …] [LIMIT … [OFFSET …]]

joined with single spaces.  Bindings follow the same order: WHERE values
first, then HAVING values.

Runtime binding list
--------------------
A fresh :class:`~fluentql.compile.base.BindingList` is created per compile
call and shared by every clause builder of that call, so the resulting
binding tuple matches placeholder order exactly.  The compiler holds no
other state and caches nothing.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fluentql.compile.base import BindingList, CompiledStatement, IdentifierQuoter
from fluentql.compile.clause_builders import (
    AssignmentBuilder,
    GroupClauseBuilder,
    LimitClauseBuilder,
    OrderClauseBuilder,
    WhereClauseBuilder,
)
from fluentql.compile.quoting import VerbatimQuoter
from fluentql.schema.clauses import QueryState


class StatementCompiler:
    """Compiles query state to parameterized SQL.

    Args:
        quoter: Identifier quoting policy.  Defaults to
            :class:`~fluentql.compile.quoting.VerbatimQuoter`.
    """

    def __init__(self, quoter: IdentifierQuoter | None = None) -> None:
        self._quoter = quoter or VerbatimQuoter()

    @property
    def quoter(self) -> IdentifierQuoter:
        return self._quoter

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compile_select(self, state: QueryState) -> CompiledStatement:
        """Compile ``state`` to a SELECT statement.

        Args:
            state: Accumulated clause state.

        Returns:
            :class:`~fluentql.compile.base.CompiledStatement` whose bindings
            are the WHERE values followed by the HAVING values.
        """
        bindings = BindingList()
        parts = [f"SELECT {', '.join(state.columns)} FROM {self._table(state)}"]
        parts.extend(
            clause
            for clause in (
                WhereClauseBuilder(bindings).build(state),
                GroupClauseBuilder(bindings).build(state),
                OrderClauseBuilder(self._quoter).build(state),
                LimitClauseBuilder().build(state),
            )
            if clause is not None
        )
        return CompiledStatement(sql=" ".join(parts), bindings=bindings.freeze())

    def compile_insert(
        self, state: QueryState, values: Mapping[str, Any]
    ) -> CompiledStatement:
        """Compile an INSERT of ``values`` into the state's table.

        The state's own bindings (normally none for a bare table handle)
        precede the inserted values.  An empty mapping compiles to
        ``DEFAULT VALUES``.
        """
        bindings = BindingList()
        bindings.extend(state.bindings)
        values_sql = AssignmentBuilder(bindings).build_values(values)
        sql = f"INSERT INTO {self._table(state)} {values_sql}"
        return CompiledStatement(sql=sql, bindings=bindings.freeze())

    def compile_update(
        self, state: QueryState, values: Mapping[str, Any]
    ) -> CompiledStatement:
        """Compile an UPDATE setting ``values`` on rows matching the state.

        SET values are bound before the WHERE values, matching the order of
        their placeholders in the statement.
        """
        bindings = BindingList()
        parts = [f"UPDATE {self._table(state)}", AssignmentBuilder(bindings).build_set(values)]
        where = WhereClauseBuilder(bindings).build(state)
        if where is not None:
            parts.append(where)
        return CompiledStatement(sql=" ".join(parts), bindings=bindings.freeze())

    def compile_delete(self, state: QueryState) -> CompiledStatement:
        """Compile a DELETE of the rows matching the state."""
        bindings = BindingList()
        parts = [f"DELETE FROM {self._table(state)}"]
        where = WhereClauseBuilder(bindings).build(state)
        if where is not None:
            parts.append(where)
        return CompiledStatement(sql=" ".join(parts), bindings=bindings.freeze())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _table(self, state: QueryState) -> str:
        return self._quoter.quote_identifier(state.table)
