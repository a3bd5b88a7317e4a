"""Pydantic models for the clause state accumulated by a query chain.

Every model here is frozen and every collection is a tuple, so a
:class:`QueryState` can be copied with ``model_copy(update=...)`` and the
copy shares nothing mutable with its source.  The builder in
:mod:`fluentql.query` produces new states; the compiler in
:mod:`fluentql.compile.builder` reads them.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict

#: A positional value bound to a ``?`` placeholder.  ``None`` binds NULL.
Binding = Union[int, float, str, bytes, bool, None]

_FROZEN = ConfigDict(extra="forbid", frozen=True)


class Direction(str, Enum):
    """Sort direction of an ORDER BY term."""

    ASC = "ASC"
    DESC = "DESC"

    @property
    def flipped(self) -> Direction:
        return Direction.DESC if self is Direction.ASC else Direction.ASC


class OrderTerm(BaseModel):
    """A single ORDER BY entry.

    Attributes:
        column: Column name; quoted at compile time.
        direction: Sort direction.
    """

    model_config = _FROZEN

    column: str
    direction: Direction = Direction.ASC


class GroupClause(BaseModel):
    """GROUP BY expressions with an optional HAVING condition.

    Attributes:
        columns: Raw group expressions, emitted verbatim.
        having: Raw HAVING condition, or ``None``.
        bindings: Values for the ``?`` placeholders in ``having``.
    """

    model_config = _FROZEN

    columns: tuple[str, ...]
    having: str | None = None
    bindings: tuple[Any, ...] = ()


class QueryState(BaseModel):
    """The full clause state of one query chain.

    Attributes:
        table: Target table name.
        columns: Select list.  ``DISTINCT`` is folded into the first entry.
        conditions: WHERE body built by AND-joining filter fragments.
        bindings: Values for the placeholders in ``conditions``, in call order.
        group: GROUP BY / HAVING clause, or ``None``.
        order: ORDER BY terms in insertion order.
        limit: Maximum row count, or ``None``.
        offset: Rows to skip; only emitted when ``limit`` is set.
    """

    model_config = _FROZEN

    table: str
    columns: tuple[str, ...] = ("*",)
    conditions: str | None = None
    bindings: tuple[Any, ...] = ()
    group: GroupClause | None = None
    order: tuple[OrderTerm, ...] = ()
    limit: int | None = None
    offset: int | None = None

    @property
    def select_bindings(self) -> tuple[Any, ...]:
        """WHERE bindings followed by HAVING bindings."""
        if self.group is None:
            return self.bindings
        return self.bindings + self.group.bindings
