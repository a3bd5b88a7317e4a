"""Pydantic model for the configuration of a :class:`~fluentql.Database`.

Example::

    from fluentql import Database, DatabaseConfig

    db = Database(config=DatabaseConfig(database="app.db", echo=True))

    # Any SQLAlchemy URL (requires the ``sqlalchemy`` extra)
    db = Database(config=DatabaseConfig(target="sqlalchemy", database="sqlite://"))
"""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

#: Engine targets shipped with fluentQL.
EngineTarget = Literal["sqlite", "sqlalchemy"]

#: How table and column identifiers are quoted during compilation.
IdentifierQuoting = Literal["verbatim", "escape", "strict"]


class DatabaseConfig(BaseModel):
    """Settings for one database handle.

    Attributes:
        target: Engine implementation, looked up in
            :class:`~fluentql.engine.registry.EngineFactory`.
        database: File path (``sqlite``) or URL (``sqlalchemy``).
            Defaults to a private in-memory database.
        timeout: Seconds the sqlite engine waits on a locked database.
        identifier_quoting: ``verbatim`` wraps identifiers in double quotes
            as-is, ``escape`` doubles embedded quotes, ``strict`` rejects
            identifiers containing quotes or NUL characters.
        echo: Log executed statements at INFO instead of DEBUG.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    target: EngineTarget = "sqlite"
    database: str = ":memory:"
    timeout: float = Field(default=5.0, ge=0)
    identifier_quoting: IdentifierQuoting = "verbatim"
    echo: bool = False
