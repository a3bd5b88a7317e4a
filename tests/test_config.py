"""Unit tests for DatabaseConfig and the engine / quoter registries."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from fluentql import (
    ConfigurationError,
    Database,
    DatabaseConfig,
    EngineError,
    EngineFactory,
    InvalidIdentifierError,
    QuoterFactory,
)
from fluentql.compile.quoting import EscapingQuoter, StrictQuoter, VerbatimQuoter
from fluentql.engine.sqlite import SQLiteConnection


def test_defaults():
    config = DatabaseConfig()
    assert config.target == "sqlite"
    assert config.database == ":memory:"
    assert config.identifier_quoting == "verbatim"
    assert config.echo is False


def test_unknown_fields_are_rejected():
    with pytest.raises(ValidationError):
        DatabaseConfig(path="app.db")


def test_negative_timeout_is_rejected():
    with pytest.raises(ValidationError):
        DatabaseConfig(timeout=-1)


def test_unknown_quoting_policy_is_rejected():
    with pytest.raises(ValidationError):
        DatabaseConfig(identifier_quoting="brackets")


def test_config_is_frozen():
    with pytest.raises(ValidationError):
        DatabaseConfig().echo = True


def test_builtin_targets_registered():
    assert EngineFactory.registered_targets() == ["sqlalchemy", "sqlite"]


def test_unregistered_engine_target_raises():
    config = DatabaseConfig.model_construct(target="duckdb", database=":memory:")
    with pytest.raises(ConfigurationError) as exc_info:
        EngineFactory.create(config)
    assert exc_info.value.target == "duckdb"


def test_builtin_quoting_policies_registered():
    assert QuoterFactory.registered_policies() == ["escape", "strict", "verbatim"]
    assert isinstance(QuoterFactory.create("verbatim"), VerbatimQuoter)
    assert isinstance(QuoterFactory.create("escape"), EscapingQuoter)
    assert isinstance(QuoterFactory.create("strict"), StrictQuoter)


def test_unregistered_quoting_policy_raises():
    with pytest.raises(ConfigurationError):
        QuoterFactory.create("brackets")


def test_database_path_overrides_config(tmp_path):
    path = str(tmp_path / "app.db")
    with Database(path, config=DatabaseConfig(echo=True)) as db:
        assert db.config.database == path
        assert db.config.echo is True
        assert isinstance(db.engine, SQLiteConnection)
        db.execute("CREATE TABLE t (x)")
    assert (tmp_path / "app.db").exists()


def test_unopenable_database_raises_engine_error(tmp_path):
    path = str(tmp_path / "missing-dir" / "app.db")
    with pytest.raises(EngineError) as exc_info:
        Database(path)
    assert exc_info.value.database == path


def test_strict_quoter_rejects_empty_identifier():
    with pytest.raises(InvalidIdentifierError) as exc_info:
        StrictQuoter().quote_identifier("")
    assert "empty" in str(exc_info.value)
