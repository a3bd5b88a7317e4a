"""Clause-level SQL builders.

Each class handles exactly one SQL clause and returns ``None`` when the
clause is absent from the state.  Builders that emit placeholders push the
matching values onto the shared :class:`~fluentql.compile.base.BindingList`
in the same order, so the statement builder only has to call them in
clause order.

Classes
-------
WhereClauseBuilder    — ``WHERE <conditions>``
GroupClauseBuilder    — ``GROUP BY <exprs> [HAVING <condition>]``
OrderClauseBuilder    — ``ORDER BY "col" ASC, …``
LimitClauseBuilder    — ``LIMIT n [OFFSET m]``
AssignmentBuilder     — ``(cols) VALUES (?, …)`` and ``SET col = ?, …``
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fluentql.compile.base import BindingList, IdentifierQuoter
from fluentql.schema.clauses import QueryState


class WhereClauseBuilder:
    """Builds the ``WHERE …`` clause from the AND-joined filter fragments."""

    def __init__(self, bindings: BindingList) -> None:
        self._bindings = bindings

    def build(self, state: QueryState) -> str | None:
        if state.conditions is None:
            return None
        self._bindings.extend(state.bindings)
        return f"WHERE {state.conditions}"


class GroupClauseBuilder:
    """Builds ``GROUP BY …`` with its optional ``HAVING`` condition.

    Group expressions are raw strings and carry no bindings; only the HAVING
    values are appended.
    """

    def __init__(self, bindings: BindingList) -> None:
        self._bindings = bindings

    def build(self, state: QueryState) -> str | None:
        if state.group is None:
            return None
        clause = f"GROUP BY {', '.join(state.group.columns)}"
        if state.group.having is not None:
            clause += f" HAVING {state.group.having}"
        self._bindings.extend(state.group.bindings)
        return clause


class OrderClauseBuilder:
    """Builds ``ORDER BY …`` in insertion order with quoted column names."""

    def __init__(self, quoter: IdentifierQuoter) -> None:
        self._quoter = quoter

    def build(self, state: QueryState) -> str | None:
        if not state.order:
            return None
        quote = self._quoter.quote_identifier
        terms = [f"{quote(term.column)} {term.direction.value}" for term in state.order]
        return f"ORDER BY {', '.join(terms)}"


class LimitClauseBuilder:
    """Builds ``LIMIT n`` and, only alongside it, ``OFFSET m``."""

    def build(self, state: QueryState) -> str | None:
        if state.limit is None:
            return None
        clause = f"LIMIT {state.limit}"
        if state.offset is not None:
            clause += f" OFFSET {state.offset}"
        return clause


class AssignmentBuilder:
    """Builds the column/value parts of INSERT and UPDATE.

    Column names and their values are taken from a single pass over the
    mapping, so the emitted column order and the binding order always agree.
    Column names are emitted unquoted.
    """

    def __init__(self, bindings: BindingList) -> None:
        self._bindings = bindings

    def build_values(self, values: Mapping[str, Any]) -> str:
        if not values:
            return "DEFAULT VALUES"
        columns: list[str] = []
        placeholders: list[str] = []
        for column, value in values.items():
            columns.append(column)
            placeholders.append(self._bindings.add(value))
        return f"({', '.join(columns)}) VALUES ({', '.join(placeholders)})"

    def build_set(self, values: Mapping[str, Any]) -> str:
        assignments = [
            f"{column} = {self._bindings.add(value)}" for column, value in values.items()
        ]
        return f"SET {', '.join(assignments)}"
