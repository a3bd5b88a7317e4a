"""fluentQL engine layer: prepared statements against a live database."""
from fluentql.engine.base import EngineConnection, Statement, TraceCallback
from fluentql.engine.registry import EngineFactory
from fluentql.engine.sqlalchemy import SQLAlchemyConnection, SQLAlchemyStatement
from fluentql.engine.sqlite import SQLiteConnection, SQLiteStatement

# ---------------------------------------------------------------------------
# Register built-in engines with EngineFactory
# ---------------------------------------------------------------------------

EngineFactory.register_class("sqlite", SQLiteConnection)
EngineFactory.register_class("sqlalchemy", SQLAlchemyConnection)

__all__ = [
    "EngineConnection",
    "EngineFactory",
    "Statement",
    "TraceCallback",
    "SQLiteConnection",
    "SQLiteStatement",
    "SQLAlchemyConnection",
    "SQLAlchemyStatement",
]
