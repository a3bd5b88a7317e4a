"""Registry of engine connection classes.

``DatabaseConfig.target`` names the engine; :class:`EngineFactory` maps that
name to an :class:`~fluentql.engine.base.EngineConnection` subclass.  A new
engine is registered once and becomes selectable without editing
:class:`~fluentql.database.Database`.

Usage::

    from fluentql.engine.registry import EngineFactory

    @EngineFactory.register("duckdb")
    class DuckDBConnection(EngineConnection):
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from typing import ClassVar

from fluentql.config import DatabaseConfig
from fluentql.engine.base import EngineConnection
from fluentql.errors import ConfigurationError


class EngineFactory:
    """Registry mapping engine target names to connection classes.

    Example::

        connection = EngineFactory.create(DatabaseConfig(database="app.db"))
    """

    _engines: ClassVar[dict[str, type[EngineConnection]]] = {}

    @classmethod
    def register(cls, name: str) -> Callable[[type[EngineConnection]], type[EngineConnection]]:
        """Decorator that registers a connection class under ``name``.

        Args:
            name: The engine target name (e.g. ``"sqlite"``).

        Returns:
            A decorator that registers and returns the connection class.
        """

        def decorator(engine_cls: type[EngineConnection]) -> type[EngineConnection]:
            cls._engines[name] = engine_cls
            return engine_cls

        return decorator

    @classmethod
    def register_class(cls, name: str, engine_cls: type[EngineConnection]) -> None:
        """Register a connection class without using the decorator form."""
        cls._engines[name] = engine_cls

    @classmethod
    def create(cls, config: DatabaseConfig) -> EngineConnection:
        """Open a connection for ``config.target``.

        Raises:
            ConfigurationError: If no engine is registered for the target.
            EngineError: If the engine cannot be opened.
        """
        engine_cls = cls._engines.get(config.target)
        if engine_cls is None:
            registered = sorted(cls._engines)
            raise ConfigurationError(
                f"Unsupported engine target: '{config.target}'. Registered targets: {registered}.",
                target=config.target,
            )
        return engine_cls(config)

    @classmethod
    def registered_targets(cls) -> list[str]:
        """Return the sorted list of registered engine target names."""
        return sorted(cls._engines)
