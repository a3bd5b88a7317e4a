"""Registry of identifier quoting policies (Open/Closed Principle).

A new policy is registered once and becomes selectable through
``DatabaseConfig.identifier_quoting`` without editing the compiler.

Usage::

    from fluentql.compile.registry import QuoterFactory

    @QuoterFactory.register("brackets")
    class BracketQuoter(IdentifierQuoter):
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from fluentql.compile.base import IdentifierQuoter
from fluentql.errors import ConfigurationError


class QuoterFactory:
    """Registry mapping policy names to :class:`IdentifierQuoter` classes.

    Example::

        quoter = QuoterFactory.create("escape")
        quoter.quote_identifier('odd"name')  # '"odd""name"'
    """

    _quoters: ClassVar[dict[str, type[IdentifierQuoter]]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[IdentifierQuoter]], type[IdentifierQuoter]]:
        """Decorator that registers a quoter class under ``name``.

        Args:
            name: The policy name (e.g. ``"escape"``).

        Returns:
            A decorator that registers and returns the quoter class.
        """

        def decorator(quoter_cls: type[IdentifierQuoter]) -> type[IdentifierQuoter]:
            cls._quoters[name] = quoter_cls
            return quoter_cls

        return decorator

    @classmethod
    def register_class(cls, name: str, quoter_cls: type[IdentifierQuoter]) -> None:
        """Register a quoter class without using the decorator form."""
        cls._quoters[name] = quoter_cls

    @classmethod
    def create(cls, name: str) -> IdentifierQuoter:
        """Instantiate the quoter registered for ``name``.

        Raises:
            ConfigurationError: If no quoter is registered for ``name``.
        """
        quoter_cls = cls._quoters.get(name)
        if quoter_cls is None:
            registered = sorted(cls._quoters)
            raise ConfigurationError(
                f"Unsupported identifier quoting: '{name}'. Registered policies: {registered}."
            )
        return quoter_cls()

    @classmethod
    def registered_policies(cls) -> list[str]:
        """Return the sorted list of registered policy names."""
        return sorted(cls._quoters)
