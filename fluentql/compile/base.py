"""Compiler abstractions: CompiledStatement, BindingList and IdentifierQuoter.

The Strategy pattern (GoF) is used for identifier quoting:
``IdentifierQuoter`` defines the single dialect step that varies;
``VerbatimQuoter``, ``EscapingQuoter`` and ``StrictQuoter`` implement it.
Everything else about the emitted SQL is fixed.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CompiledStatement:
    """The output of a compilation.

    Attributes:
        sql: The SQL text with positional ``?`` placeholders.
        bindings: Values for the placeholders, in placeholder order.
    """

    sql: str
    bindings: tuple[Any, ...] = ()

    def __iter__(self):
        # Allows ``sql, bindings = compiled``.
        yield self.sql
        yield self.bindings


@dataclass
class BindingList:
    """Accumulates positional bindings during a single compilation run.

    Clause builders append to it in the same order they emit their SQL, so
    the final sequence lines up with the ``?`` placeholders.
    """

    values: list[Any] = field(default_factory=list)

    def extend(self, values: Iterable[Any]) -> None:
        self.values.extend(values)

    def add(self, value: Any) -> str:
        """Store one value and return its placeholder."""
        self.values.append(value)
        return "?"

    def freeze(self) -> tuple[Any, ...]:
        return tuple(self.values)


class IdentifierQuoter(ABC):
    """Abstract base for identifier quoting policies."""

    @abstractmethod
    def quote_identifier(self, name: str) -> str:
        """Return a quoted SQL identifier.

        Args:
            name: Unquoted identifier (table or column name).

        Returns:
            Quoted identifier.
        """

    @property
    @abstractmethod
    def policy_name(self) -> str:
        """Return the canonical policy name (e.g. ``'verbatim'``)."""
