"""Shared fixtures: in-memory SQLite through SQLAlchemy, mongomock for MongoDB."""

import pytest
from mongomock_motor import AsyncMongoMockClient
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from polyquery import ClientRegistry, QueryBuilderConfig, QueryBuilderFactory

USERS = [
    {"name": "Alice", "status": "active", "age": 30, "role": "admin", "created_at": "2024-01-01"},
    {"name": "Bob", "status": "active", "age": 17, "role": "user", "created_at": "2024-02-01"},
    {"name": "Carol", "status": "inactive", "age": 45, "role": "user", "created_at": "2024-03-01"},
    {"name": "Dave", "status": "active", "age": 22, "role": "editor", "created_at": "2024-04-01"},
    {"name": "John Smith", "status": "active", "age": 35, "role": "user", "created_at": "2024-05-01"},
]


@pytest.fixture
async def sql_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.execute(
            text(
                "CREATE TABLE users ("
                "id INTEGER PRIMARY KEY AUTOINCREMENT, "
                "name TEXT, status TEXT, age INTEGER, role TEXT, created_at TEXT)"
            )
        )
        await conn.execute(
            text(
                "INSERT INTO users (name, status, age, role, created_at) "
                "VALUES (:name, :status, :age, :role, :created_at)"
            ),
            USERS,
        )
    yield engine
    await engine.dispose()


@pytest.fixture
async def mongo_db():
    client = AsyncMongoMockClient()
    db = client["polyquery_test"]
    await db["users"].insert_many([dict(u) for u in USERS])
    return db


@pytest.fixture
def registry(sql_engine, mongo_db):
    return ClientRegistry().register_sql("db", sql_engine).register_mongo(mongo_db)


@pytest.fixture
def config():
    return QueryBuilderConfig(db_engine="pg")


@pytest.fixture
def factory(registry, config):
    return QueryBuilderFactory(registry, config)
