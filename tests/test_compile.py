"""Unit tests for StatementCompiler (no database involved)."""

from __future__ import annotations

import pytest

from fluentql.compile.base import BindingList, CompiledStatement
from fluentql.compile.builder import StatementCompiler
from fluentql.compile.quoting import EscapingQuoter, StrictQuoter
from fluentql.errors import InvalidIdentifierError
from fluentql.schema.clauses import Direction, GroupClause, OrderTerm, QueryState

USERS = QueryState(table="users")


def _compiler() -> StatementCompiler:
    return StatementCompiler()


def test_bare_table_selects_star():
    r = _compiler().compile_select(USERS)
    assert r.sql == 'SELECT * FROM "users"'
    assert r.bindings == ()


def test_select_columns_joined_verbatim():
    state = USERS.model_copy(update={"columns": ("email", "count(*)")})
    assert _compiler().compile_select(state).sql == 'SELECT email, count(*) FROM "users"'


def test_where_clause_and_bindings():
    state = USERS.model_copy(
        update={"conditions": "email = ? AND age >= ?", "bindings": ("alice@example.com", 21)}
    )
    r = _compiler().compile_select(state)
    assert r.sql == 'SELECT * FROM "users" WHERE email = ? AND age >= ?'
    assert r.bindings == ("alice@example.com", 21)


def test_group_without_having():
    state = USERS.model_copy(update={"group": GroupClause(columns=("age", "admin"))})
    assert _compiler().compile_select(state).sql == 'SELECT * FROM "users" GROUP BY age, admin'


def test_order_terms_quoted_in_insertion_order():
    state = USERS.model_copy(
        update={
            "order": (
                OrderTerm(column="age", direction=Direction.DESC),
                OrderTerm(column="email"),
            )
        }
    )
    r = _compiler().compile_select(state)
    assert r.sql == 'SELECT * FROM "users" ORDER BY "age" DESC, "email" ASC'


def test_offset_requires_limit():
    state = USERS.model_copy(update={"offset": 5})
    assert _compiler().compile_select(state).sql == 'SELECT * FROM "users"'


def test_limit_zero_is_emitted():
    state = USERS.model_copy(update={"limit": 0})
    assert _compiler().compile_select(state).sql == 'SELECT * FROM "users" LIMIT 0'


def test_full_select_compiles_in_fixed_order():
    state = QueryState(
        table="users",
        columns=("email", "count(email) AS count"),
        conditions="age >= ?",
        bindings=(21,),
        group=GroupClause(columns=("age",), having="count > ?", bindings=(1,)),
        order=(OrderTerm(column="email", direction=Direction.ASC),),
        limit=1,
        offset=2,
    )
    r = _compiler().compile_select(state)
    assert r.sql == (
        'SELECT email, count(email) AS count FROM "users" '
        "WHERE age >= ? "
        "GROUP BY age HAVING count > ? "
        'ORDER BY "email" ASC '
        "LIMIT 1 OFFSET 2"
    )
    # WHERE values first, then HAVING values.
    assert r.bindings == (21, 1)


def test_insert_columns_and_values_aligned():
    r = _compiler().compile_insert(USERS, {"email": "alice@example.com", "age": 30, "manager_id": None})
    assert r.sql == 'INSERT INTO "users" (email, age, manager_id) VALUES (?, ?, ?)'
    assert r.bindings == ("alice@example.com", 30, None)


def test_insert_empty_values_uses_defaults():
    r = _compiler().compile_insert(QueryState(table="events"), {})
    assert r.sql == 'INSERT INTO "events" DEFAULT VALUES'
    assert r.bindings == ()


def test_update_without_where():
    r = _compiler().compile_update(USERS, {"age": 30, "admin": True})
    assert r.sql == 'UPDATE "users" SET age = ?, admin = ?'
    assert r.bindings == (30, True)


def test_update_binds_set_values_before_where_values():
    state = USERS.model_copy(update={"conditions": "age > ?", "bindings": (30,)})
    r = _compiler().compile_update(state, {"age": 31})
    assert r.sql == 'UPDATE "users" SET age = ? WHERE age > ?'
    assert r.bindings == (31, 30)


def test_delete_with_and_without_where():
    assert _compiler().compile_delete(USERS).sql == 'DELETE FROM "users"'
    state = USERS.model_copy(update={"conditions": '"email" = ?', "bindings": ("a@b.c",)})
    r = _compiler().compile_delete(state)
    assert r.sql == 'DELETE FROM "users" WHERE "email" = ?'
    assert r.bindings == ("a@b.c",)


def test_delete_ignores_select_only_clauses():
    state = USERS.model_copy(
        update={"order": (OrderTerm(column="age"),), "limit": 1, "group": GroupClause(columns=("age",))}
    )
    assert _compiler().compile_delete(state).sql == 'DELETE FROM "users"'


def test_verbatim_quoting_does_not_escape():
    r = _compiler().compile_select(QueryState(table='we"ird'))
    assert r.sql == 'SELECT * FROM "we"ird"'


def test_escaping_quoter_doubles_quotes():
    r = StatementCompiler(EscapingQuoter()).compile_select(QueryState(table='we"ird'))
    assert r.sql == 'SELECT * FROM "we""ird"'


def test_strict_quoter_rejects_quote_characters():
    with pytest.raises(InvalidIdentifierError) as exc_info:
        StatementCompiler(StrictQuoter()).compile_select(QueryState(table='we"ird'))
    assert exc_info.value.identifier == 'we"ird'


def test_compiled_statement_unpacks():
    sql, bindings = CompiledStatement(sql="SELECT ?", bindings=(1,))
    assert sql == "SELECT ?"
    assert bindings == (1,)


def test_binding_list_preserves_order():
    bindings = BindingList()
    bindings.extend([1, None])
    assert bindings.add("x") == "?"
    assert bindings.freeze() == (1, None, "x")


def test_compilation_is_deterministic():
    state = USERS.model_copy(
        update={"conditions": "age > ?", "bindings": (1,), "order": (OrderTerm(column="age"),)}
    )
    assert _compiler().compile_select(state) == _compiler().compile_select(state)
