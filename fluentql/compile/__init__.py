"""fluentQL compilation layer: QueryState → parameterized SQL."""
from fluentql.compile.base import BindingList, CompiledStatement, IdentifierQuoter
from fluentql.compile.builder import StatementCompiler
from fluentql.compile.quoting import EscapingQuoter, StrictQuoter, VerbatimQuoter
from fluentql.compile.registry import QuoterFactory

# ---------------------------------------------------------------------------
# Register built-in quoting policies with QuoterFactory
# ---------------------------------------------------------------------------

QuoterFactory.register_class("verbatim", VerbatimQuoter)
QuoterFactory.register_class("escape", EscapingQuoter)
QuoterFactory.register_class("strict", StrictQuoter)

__all__ = [
    "BindingList",
    "CompiledStatement",
    "IdentifierQuoter",
    "StatementCompiler",
    "QuoterFactory",
    "VerbatimQuoter",
    "EscapingQuoter",
    "StrictQuoter",
]
