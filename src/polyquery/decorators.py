from __future__ import annotations

from typing import Any, TypeVar

from .factory import QueryBuilderFactory

T = TypeVar("T")


def attach_query_builder(host: T, factory: QueryBuilderFactory) -> T:
    """
    Expose a factory on an application object.

    Sets:
        host.<config.decorator_name>(engine=None) → QueryBuilder
        host.get_query_builder(engine=None) → QueryBuilder
        host.db → the factory (db.sql / db.mongo / db.query)

    Usage:
        app = attach_query_builder(app, QueryBuilderFactory(registry))
        rows = await app.db.sql("users").where("id", 1).get()
    """
    name = factory.config.decorator_name
    for attr in (name, "get_query_builder", "db"):
        if hasattr(host, attr):
            raise AttributeError(f"{type(host).__name__} already defines '{attr}'")

    def _builder(engine: Any = None):
        return factory.builder(engine)

    setattr(host, name, _builder)
    setattr(host, "get_query_builder", factory.get_query_builder)
    setattr(host, "db", factory)
    return host
