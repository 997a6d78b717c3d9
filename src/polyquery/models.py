"""
Engine tags and configuration
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from dotenv import load_dotenv


class DbEngine(Enum):
    """Known engine tags"""
    PG = "pg"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    MYSQL2 = "mysql2"
    SQLITE3 = "sqlite3"
    MSSQL = "mssql"
    ORACLEDB = "oracledb"
    MONGODB = "mongodb"
    MONGO = "mongo"


class EngineFamily(Enum):
    """Adapter family an engine tag dispatches to"""
    RELATIONAL = "relational"
    DOCUMENT = "document"


DOCUMENT_ENGINES = frozenset({DbEngine.MONGODB.value, DbEngine.MONGO.value})


def engine_tag(engine: Union[DbEngine, str]) -> str:
    """Normalize a DbEngine or raw tag to its lowercase string form"""
    if isinstance(engine, DbEngine):
        return engine.value
    return str(engine).lower()


def classify_engine(engine: Union[DbEngine, str]) -> EngineFamily:
    """Document-store tags go to MongoDB, every other tag is relational"""
    if engine_tag(engine) in DOCUMENT_ENGINES:
        return EngineFamily.DOCUMENT
    return EngineFamily.RELATIONAL


def is_known_engine(engine: Union[DbEngine, str]) -> bool:
    return engine_tag(engine) in {e.value for e in DbEngine}


@dataclass
class QueryBuilderConfig:
    """Facade configuration, threaded explicitly through the factory"""
    decorator_name: str = "query_builder"
    db_engine: str = DbEngine.PG.value
    sql_binding: str = "db"
    primary_key: str = "id"

    @classmethod
    def from_env(
        cls,
        *,
        decorator_name: Optional[str] = None,
        db_engine: Optional[Union[DbEngine, str]] = None,
        sql_binding: Optional[str] = None,
        primary_key: Optional[str] = None,
    ) -> "QueryBuilderConfig":
        """
        Build config from DB_ENGINE / DB_DECORATOR (a .env file is honoured)

        Explicit arguments win over the environment.
        """
        load_dotenv()

        default = cls()
        engine = db_engine if db_engine is not None else os.getenv("DB_ENGINE", default.db_engine)
        return cls(
            decorator_name=decorator_name or default.decorator_name,
            db_engine=engine_tag(engine),
            sql_binding=sql_binding or os.getenv("DB_DECORATOR", default.sql_binding),
            primary_key=primary_key or default.primary_key,
        )
