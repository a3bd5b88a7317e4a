"""The chainable, immutable query builder.

A :class:`Query` is created by a :class:`~fluentql.database.Database` for one
table and extended by chaining::

    adults = (
        db["users"]
        .select("email", "age")
        .filter("age >= ?", 21)
        .filter({"admin": False})
        .order("age", direction="DESC")
        .limit(10)
    )
    for row in adults:
        print(row["email"], row["age"])

Value semantics
---------------
Every builder call returns a *new* ``Query``; the receiver is never
changed.  The clause state is a frozen
:class:`~fluentql.schema.clauses.QueryState` whose collections are
tuples, so intermediate queries can be kept, shared and reused freely.

Merge rules
-----------
=================  ============================================
``select``         replaces the column list
``filter``         AND-appends the condition, appends bindings
``group``          replaces GROUP BY / HAVING
``order``          appends ORDER BY terms
``reorder``        replaces ORDER BY terms
``reverse_order``  flips every direction, keeps column order
``limit``          replaces LIMIT and OFFSET
=================  ============================================

Execution
---------
Iterating a query compiles and executes a fresh SELECT each time.  Write
operations (:meth:`Query.insert`, :meth:`Query.update`,
:meth:`Query.delete`) never raise on engine failures; they return a zero or
``None`` result together with the failed statement.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from fluentql.compile.base import CompiledStatement
from fluentql.engine.base import Statement
from fluentql.schema.clauses import Binding, Direction, GroupClause, OrderTerm, QueryState

if TYPE_CHECKING:
    from fluentql.database import Database

#: A sort direction given as the enum or its string value (any case).
DirectionLike = Union[Direction, str]

#: An ORDER BY argument: a bare column or a ``(column, direction)`` pair.
OrderSpec = Union[str, tuple[str, DirectionLike]]

#: Row mapping produced by iteration; SQL NULL is ``None``.
Row = dict[str, Any]

# Mapping values of these types compile to ``IN (…)``.
_IN_LIST_TYPES = (list, tuple, set, frozenset)


@dataclass(frozen=True)
class InsertResult:
    """Outcome of :meth:`Query.insert`.

    Attributes:
        rowid: Rowid of the inserted row; ``None`` when the statement failed
            or inserted nothing.
        statement: The executed statement, for failure inspection.
    """

    rowid: int | None
    statement: Statement


@dataclass(frozen=True)
class ChangeResult:
    """Outcome of :meth:`Query.update` and :meth:`Query.delete`.

    Attributes:
        changes: Number of affected rows; ``0`` when the statement failed.
        statement: The executed statement, for failure inspection.
    """

    changes: int
    statement: Statement


class RowIterator(Iterator[Row]):
    """Lazy, single-pass iterator over the rows of one executed SELECT.

    Each ``next()`` steps the underlying statement once.  The iterator is
    exhausted when the engine has no further rows or the statement failed;
    check :attr:`statement` to tell the two apart.
    """

    def __init__(self, statement: Statement) -> None:
        self.statement = statement

    def __iter__(self) -> RowIterator:
        return self

    def __next__(self) -> Row:
        if not self.statement.step():
            raise StopIteration
        values = self.statement.values
        assert values is not None
        return values


class Query:
    """An immutable SELECT / INSERT / UPDATE / DELETE target over one table.

    Args:
        database: The handle that compiles and executes this query.
        state: The accumulated clause state.
    """

    __slots__ = ("_database", "_state")

    def __init__(self, database: Database, state: QueryState) -> None:
        self._database = database
        self._state = state

    def __repr__(self) -> str:
        return f"<Query {self.compile_select().sql!r}>"

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def table(self) -> str:
        return self._state.table

    # ------------------------------------------------------------------
    # Builder API
    # ------------------------------------------------------------------

    def select(self, *columns: str, distinct: bool = False) -> Query:
        """Replace the select list.

        Args:
            *columns: Column expressions, emitted verbatim.  No columns
                selects ``*``.
            distinct: Prefix the first column with ``DISTINCT``.
        """
        names = columns or ("*",)
        if distinct:
            names = (f"DISTINCT {names[0]}",) + names[1:]
        return self._derive(columns=tuple(names))

    def filter(self, condition: str | Mapping[str, Any], *bindings: Binding) -> Query:
        """Add a WHERE condition, AND-joined to any existing one.

        ``condition`` is either a raw SQL fragment with ``?`` placeholders
        for ``bindings``, or a mapping of column names to values.  Each
        mapping entry adds its own condition, in the mapping's order:

        - ``None`` → ``"col" IS NULL``
        - ``range(a, b)`` → ``"col" BETWEEN a AND b`` (inclusive of ``b``)
        - a list, tuple or set → ``"col" IN (?, …)``
        - any other value → ``"col" = ?``

        Args:
            condition: Raw condition or column/value mapping.
            *bindings: Placeholder values for a raw condition.

        Raises:
            TypeError: If ``bindings`` are given with a mapping condition.
        """
        if isinstance(condition, Mapping):
            if bindings:
                raise TypeError("filter() takes no bindings with a mapping condition")
            return self._filter_mapping(condition)
        existing = self._state.conditions
        conditions = condition if existing is None else f"{existing} AND {condition}"
        return self._derive(
            conditions=conditions,
            bindings=self._state.bindings + tuple(bindings),
        )

    def group(
        self,
        *columns: str,
        having: str | None = None,
        bindings: tuple[Binding, ...] | list[Binding] = (),
    ) -> Query:
        """Replace the GROUP BY clause.

        Args:
            *columns: Group expressions, emitted verbatim.
            having: Optional raw HAVING condition.
            bindings: Placeholder values for ``having``.
        """
        group = GroupClause(columns=tuple(columns), having=having, bindings=tuple(bindings))
        return self._derive(group=group)

    def order(self, *terms: OrderSpec, direction: DirectionLike = Direction.ASC) -> Query:
        """Append ORDER BY terms.

        Args:
            *terms: Column names or ``(column, direction)`` pairs.
            direction: Direction for the bare column names.
        """
        return self._derive(order=self._state.order + _order_terms(terms, direction))

    def reorder(self, *terms: OrderSpec, direction: DirectionLike = Direction.ASC) -> Query:
        """Replace the ORDER BY terms; same arguments as :meth:`order`."""
        return self._derive(order=_order_terms(terms, direction))

    def reverse_order(self) -> Query:
        """Flip every ORDER BY direction, keeping the column order."""
        flipped = tuple(
            term.model_copy(update={"direction": term.direction.flipped})
            for term in self._state.order
        )
        return self._derive(order=flipped)

    def limit(self, to: int | None, offset: int | None = None) -> Query:
        """Replace LIMIT and OFFSET.

        ``limit(None)`` removes both clauses; an ``offset`` passed along
        with ``None`` is dropped, since OFFSET requires LIMIT.
        """
        if to is None:
            return self._derive(limit=None, offset=None)
        return self._derive(limit=to, offset=offset)

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    def compile_select(self) -> CompiledStatement:
        return self._database.compiler.compile_select(self._state)

    def compile_insert(self, values: Mapping[str, Binding]) -> CompiledStatement:
        return self._database.compiler.compile_insert(self._state, values)

    def compile_update(self, values: Mapping[str, Binding]) -> CompiledStatement:
        return self._database.compiler.compile_update(self._state, values)

    def compile_delete(self) -> CompiledStatement:
        return self._database.compiler.compile_delete(self._state)

    # ------------------------------------------------------------------
    # Row iteration
    # ------------------------------------------------------------------

    def __iter__(self) -> RowIterator:
        return RowIterator(self._prepare(self.compile_select()))

    def first(self) -> Row | None:
        """Return the first row of the SELECT, or ``None``."""
        rows = iter(self)
        row = next(rows, None)
        rows.statement.close()
        return row

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    def count(self) -> int:
        """``count(*)`` over the query; ``0`` if the statement fails."""
        return self.select("count(*)")._scalar() or 0

    def max(self, column: str) -> Any:
        return self._calculate("max", column)

    def min(self, column: str) -> Any:
        return self._calculate("min", column)

    def sum(self, column: str) -> Any:
        """``sum(column)``; ``None`` over an empty set."""
        return self._calculate("sum", column)

    def average(self, column: str) -> float | None:
        return _as_float(self._calculate("avg", column))

    def total(self, column: str) -> float | None:
        """``total(column)``; unlike :meth:`sum`, ``0.0`` over an empty set."""
        return _as_float(self._calculate("total", column))

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def insert(self, values: Mapping[str, Binding]) -> InsertResult:
        """Insert one row built from ``values``.

        Returns:
            :class:`InsertResult` with the new rowid, or ``None`` when the
            statement failed or no row was inserted.
        """
        statement = self._prepare(self.compile_insert(values)).run()
        engine = self._database.engine
        if statement.failed or engine.last_changes == 0:
            return InsertResult(rowid=None, statement=statement)
        return InsertResult(rowid=engine.last_insert_rowid, statement=statement)

    def update(self, values: Mapping[str, Binding]) -> ChangeResult:
        """Set ``values`` on every row matching the query's filters."""
        return self._change(self.compile_update(values))

    def delete(self) -> ChangeResult:
        """Delete every row matching the query's filters."""
        return self._change(self.compile_delete())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _derive(self, **changes: Any) -> Query:
        return Query(self._database, self._state.model_copy(update=changes))

    def _filter_mapping(self, condition: Mapping[str, Any]) -> Query:
        query = self
        for column, value in condition.items():
            quoted = self._quote(column)
            if value is None:
                query = query.filter(f"{quoted} IS NULL")
            elif isinstance(value, range):
                query = query.filter(f"{quoted} BETWEEN ? AND ?", value.start, value.stop)
            elif isinstance(value, _IN_LIST_TYPES):
                values = list(value)
                placeholders = ", ".join("?" for _ in values)
                query = query.filter(f"{quoted} IN ({placeholders})", *values)
            else:
                query = query.filter(f"{quoted} = ?", value)
        return query

    def _quote(self, identifier: str) -> str:
        return self._database.compiler.quoter.quote_identifier(identifier)

    def _prepare(self, compiled: CompiledStatement) -> Statement:
        return self._database.engine.prepare(compiled.sql, compiled.bindings)

    def _scalar(self) -> Any:
        statement = self._prepare(self.compile_select())
        value = statement.scalar()
        statement.close()
        return value

    def _calculate(self, function: str, column: str) -> Any:
        return self.select(f"{function}({self._quote(column)})")._scalar()

    def _change(self, compiled: CompiledStatement) -> ChangeResult:
        statement = self._prepare(compiled).run()
        changes = 0 if statement.failed else self._database.engine.last_changes
        return ChangeResult(changes=changes, statement=statement)


def _order_terms(terms: tuple[OrderSpec, ...], direction: DirectionLike) -> tuple[OrderTerm, ...]:
    default = _as_direction(direction)
    result: list[OrderTerm] = []
    for term in terms:
        if isinstance(term, str):
            result.append(OrderTerm(column=term, direction=default))
        else:
            column, term_direction = term
            result.append(OrderTerm(column=column, direction=_as_direction(term_direction)))
    return tuple(result)


def _as_direction(value: DirectionLike) -> Direction:
    if isinstance(value, Direction):
        return value
    return Direction(value.upper())


def _as_float(value: Any) -> float | None:
    return None if value is None else float(value)
