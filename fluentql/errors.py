"""Custom exception hierarchy for fluentQL.

All public errors inherit from FluentQLError so callers can catch the base
class for any fluentQL-specific failure.

Building and compiling a query never raises in the default configuration.
Execution failures are *recorded* on the statement (``Statement.error``)
rather than raised, so most of these classes are only raised while setting
up a :class:`~fluentql.database.Database`.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any


class FluentQLError(Exception):
    """Base exception for all fluentQL errors."""


class ConfigurationError(FluentQLError):
    """Raised when a DatabaseConfig cannot be turned into a working engine.

    Args:
        message: Human-readable description.
        target: The engine target that was requested.
    """

    def __init__(self, message: str, target: str | None = None) -> None:
        super().__init__(message)
        self.target = target


class EngineError(FluentQLError):
    """Raised when the engine connection cannot be opened or closed.

    Args:
        message: Human-readable description.
        database: The path or URL the engine was pointed at.
    """

    def __init__(self, message: str, database: str | None = None) -> None:
        super().__init__(message)
        self.database = database


class StatementError(FluentQLError):
    """Describes a statement that failed to prepare, bind, or execute.

    Instances are attached to the failing
    :class:`~fluentql.engine.base.Statement` as ``statement.error``; the
    original engine exception is chained as ``__cause__``.

    Args:
        message: The engine's error message.
        sql: The SQL text that was sent to the engine.
        bindings: The positional values bound to the statement.
    """

    def __init__(
        self,
        message: str,
        sql: str,
        bindings: Sequence[Any] = (),
    ) -> None:
        super().__init__(message)
        self.sql = sql
        self.bindings = tuple(bindings)

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured description suitable for logging."""
        return {
            "error": type(self.__cause__).__name__ if self.__cause__ else "StatementError",
            "message": str(self),
            "sql": self.sql,
            "bindings": list(self.bindings),
        }


class InvalidIdentifierError(FluentQLError):
    """Raised by the ``strict`` quoting policy for unusable identifiers.

    Args:
        identifier: The rejected table or column name.
        reason: Why it was rejected.
    """

    def __init__(self, identifier: str, reason: str) -> None:
        super().__init__(f"Invalid identifier {identifier!r}: {reason}.")
        self.identifier = identifier
        self.reason = reason
