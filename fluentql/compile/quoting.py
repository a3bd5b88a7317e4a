"""Identifier quoting policies."""
from __future__ import annotations

from fluentql.compile.base import IdentifierQuoter
from fluentql.errors import InvalidIdentifierError


class VerbatimQuoter(IdentifierQuoter):
    """Wraps the name in double quotes without escaping.

    An identifier that itself contains ``"`` produces broken SQL; the engine
    reports that when the statement is prepared.
    """

    @property
    def policy_name(self) -> str:
        return "verbatim"

    def quote_identifier(self, name: str) -> str:
        return f'"{name}"'


class EscapingQuoter(IdentifierQuoter):
    """Standard SQL quoting: embedded double quotes are doubled."""

    @property
    def policy_name(self) -> str:
        return "escape"

    def quote_identifier(self, name: str) -> str:
        escaped = name.replace('"', '""')
        return f'"{escaped}"'


class StrictQuoter(IdentifierQuoter):
    """Rejects identifiers that cannot be quoted verbatim.

    Raises:
        InvalidIdentifierError: For empty names and names containing a
            double quote or a NUL character.
    """

    @property
    def policy_name(self) -> str:
        return "strict"

    def quote_identifier(self, name: str) -> str:
        if not name:
            raise InvalidIdentifierError(name, "identifier is empty")
        if '"' in name:
            raise InvalidIdentifierError(name, "identifier contains a double quote")
        if "\x00" in name:
            raise InvalidIdentifierError(name, "identifier contains a NUL character")
        return f'"{name}"'
