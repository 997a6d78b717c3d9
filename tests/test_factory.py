"""Tests for engine dispatch, configuration and host attachment."""

from __future__ import annotations

import asyncio
from types import SimpleNamespace

import pytest

from polyquery import (
    ClientRegistry,
    DbEngine,
    EngineFamily,
    MissingDependencyError,
    QueryBuilderConfig,
    QueryBuilderFactory,
    attach_query_builder,
)
from polyquery.adapters.MongoDBAdapter import MongoDBAdapter
from polyquery.adapters.SQLAdapter import SQLAdapter
from polyquery.models import classify_engine


@pytest.mark.parametrize(
    "engine,family",
    [
        ("pg", EngineFamily.RELATIONAL),
        ("mysql", EngineFamily.RELATIONAL),
        ("sqlite3", EngineFamily.RELATIONAL),
        ("mssql", EngineFamily.RELATIONAL),
        ("MongoDB", EngineFamily.DOCUMENT),
        ("mongo", EngineFamily.DOCUMENT),
        (DbEngine.MONGODB, EngineFamily.DOCUMENT),
        ("cockroach", EngineFamily.RELATIONAL),
    ],
)
def test_classify_engine(engine, family) -> None:
    assert classify_engine(engine) is family


def test_default_engine_from_config(registry) -> None:
    factory = QueryBuilderFactory(registry, QueryBuilderConfig(db_engine="mongodb"))
    builder = factory.builder()

    assert builder.engine == "mongodb"
    assert builder.family is EngineFamily.DOCUMENT
    assert isinstance(builder.adapter, MongoDBAdapter)


def test_engine_override(factory) -> None:
    builder = factory.get_query_builder("mongo")
    assert isinstance(builder.adapter, MongoDBAdapter)

    builder = factory.get_query_builder(DbEngine.SQLITE3)
    assert isinstance(builder.adapter, SQLAdapter)
    assert builder.engine == "sqlite3"


def test_unknown_engine_uses_relational_adapter(factory) -> None:
    builder = factory.builder("cockroach")
    assert isinstance(builder.adapter, SQLAdapter)
    assert builder.engine == "cockroach"


def test_convenience_accessors_bind_target(registry) -> None:
    factory = QueryBuilderFactory(registry, QueryBuilderConfig(db_engine="mongodb"))

    sql = factory.sql("users")
    mongo = factory.mongo("events")
    default = factory.query("logs")

    assert (sql.spec.table, sql.family) == ("users", EngineFamily.RELATIONAL)
    assert (mongo.spec.table, mongo.family) == ("events", EngineFamily.DOCUMENT)
    assert (default.spec.table, default.family) == ("logs", EngineFamily.DOCUMENT)


def test_sql_binding_is_configurable(sql_engine) -> None:
    registry = ClientRegistry().register_sql("analytics", sql_engine)

    factory = QueryBuilderFactory(registry, QueryBuilderConfig(sql_binding="analytics"))
    assert factory.sql("users").adapter.client is sql_engine

    factory = QueryBuilderFactory(registry, QueryBuilderConfig(sql_binding="db"))
    with pytest.raises(MissingDependencyError):
        factory.sql("users")


def test_mongo_without_database_raises(sql_engine) -> None:
    factory = QueryBuilderFactory(
        ClientRegistry().register_sql("db", sql_engine), QueryBuilderConfig()
    )
    with pytest.raises(MissingDependencyError):
        factory.mongo("users")


def test_registry_rejects_none() -> None:
    with pytest.raises(ValueError):
        ClientRegistry().register_sql("db", None)
    with pytest.raises(ValueError):
        ClientRegistry().register_mongo(None)


def test_config_from_env(monkeypatch) -> None:
    monkeypatch.setenv("DB_ENGINE", "MONGODB")
    monkeypatch.setenv("DB_DECORATOR", "analytics")

    config = QueryBuilderConfig.from_env()

    assert config.db_engine == "mongodb"
    assert config.sql_binding == "analytics"
    assert config.decorator_name == "query_builder"


def test_config_from_env_defaults(monkeypatch) -> None:
    monkeypatch.delenv("DB_ENGINE", raising=False)
    monkeypatch.delenv("DB_DECORATOR", raising=False)

    assert QueryBuilderConfig.from_env() == QueryBuilderConfig()


def test_config_explicit_arguments_win(monkeypatch) -> None:
    monkeypatch.setenv("DB_ENGINE", "mongodb")

    config = QueryBuilderConfig.from_env(db_engine=DbEngine.MYSQL, decorator_name="qb")

    assert config.db_engine == "mysql"
    assert config.decorator_name == "qb"


def test_factory_reads_env_when_no_config(registry, monkeypatch) -> None:
    monkeypatch.setenv("DB_ENGINE", "mongo")
    monkeypatch.delenv("DB_DECORATOR", raising=False)

    factory = QueryBuilderFactory(registry)

    assert isinstance(factory.query("users").adapter, MongoDBAdapter)


async def test_attach_query_builder(registry) -> None:
    factory = QueryBuilderFactory(registry, QueryBuilderConfig(decorator_name="qb"))
    app = attach_query_builder(SimpleNamespace(), factory)

    assert app.db is factory
    assert isinstance(app.qb().adapter, SQLAdapter)
    assert isinstance(app.qb("mongodb").adapter, MongoDBAdapter)
    assert isinstance(app.get_query_builder("mongo").adapter, MongoDBAdapter)

    rows = await app.db.sql("users").where("name", "Alice").get()
    assert [r["age"] for r in rows] == [30]


def test_attach_refuses_to_overwrite(factory) -> None:
    with pytest.raises(AttributeError):
        attach_query_builder(SimpleNamespace(db=object()), factory)


async def test_independent_builders_run_concurrently(factory) -> None:
    sql_rows, mongo_docs = await asyncio.gather(
        factory.sql("users").where("role", "user").get(),
        factory.mongo("users").where("role", "user").get(),
    )
    assert {r["name"] for r in sql_rows} == {d["name"] for d in mongo_docs}


def test_shared_registry_carries_both_backends(registry, sql_engine) -> None:
    assert registry.get_sql("db") is sql_engine
    assert registry.mongo is not None
