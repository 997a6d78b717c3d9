from typing import Optional, Union

from .base.QueryAdapter import QueryAdapter
from .builder import QueryBuilder
from .models import DbEngine, EngineFamily, QueryBuilderConfig, classify_engine, engine_tag, is_known_engine
from .registry import ClientRegistry
from .utils import setup_logger


class QueryBuilderFactory:
    """Engine dispatch: hands out QueryBuilders bound to the matching adapter"""

    def __init__(self, registry: ClientRegistry, config: Optional[QueryBuilderConfig] = None):
        self.logger = setup_logger(__name__)
        self.registry = registry
        self.config = config or QueryBuilderConfig.from_env()

        self.logger.info(f"QueryBuilderFactory default engine: {self.config.db_engine}")

    def _create_adapter(self, engine: str) -> QueryAdapter:
        if classify_engine(engine) == EngineFamily.DOCUMENT:
            from .adapters.MongoDBAdapter import MongoDBAdapter
            return MongoDBAdapter(self.registry, engine=engine)

        # pg, mysql, sqlite3, mssql ... share the SQLAlchemy adapter
        from .adapters.SQLAdapter import SQLAdapter
        return SQLAdapter(
            self.registry,
            engine=engine,
            binding=self.config.sql_binding,
            primary_key=self.config.primary_key,
        )

    def builder(self, engine: Optional[Union[DbEngine, str]] = None) -> QueryBuilder:
        tag = engine_tag(engine) if engine is not None else self.config.db_engine
        if not is_known_engine(tag):
            self.logger.warning(f"Unknown engine '{tag}', using the relational adapter")
        return QueryBuilder(self._create_adapter(tag), engine=tag)

    def get_query_builder(self, engine: Optional[Union[DbEngine, str]] = None) -> QueryBuilder:
        """Builder for the given engine, or the configured default"""
        return self.builder(engine)

    def sql(self, table: str) -> QueryBuilder:
        return self.builder(DbEngine.PG).from_(table)

    def mongo(self, collection: str) -> QueryBuilder:
        return self.builder(DbEngine.MONGODB).from_(collection)

    def query(self, name: str) -> QueryBuilder:
        return self.builder().from_(name)
