"""fluentQL schema models: the immutable clause state of a query chain."""
from fluentql.schema.clauses import (
    Binding,
    Direction,
    GroupClause,
    OrderTerm,
    QueryState,
)

__all__ = [
    "Binding",
    "Direction",
    "GroupClause",
    "OrderTerm",
    "QueryState",
]
