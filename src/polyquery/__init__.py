"""
PolyQuery - one fluent query builder, SQL or MongoDB underneath
Conditions, projection, sorting and pagination translated per backend
"""

__version__ = "1.0.0"

from .factory import QueryBuilderFactory
from .builder import QueryBuilder
from .registry import ClientRegistry
from .models import DbEngine, EngineFamily, QueryBuilderConfig
from .query import Condition, Operator, QuerySpec
from .decorators import attach_query_builder
from .errors import (
    PolyQueryError,
    MissingDependencyError,
    UnsupportedOperationError,
)

__all__ = [
    # Factory & registry
    "QueryBuilderFactory",
    "ClientRegistry",
    "attach_query_builder",
    # Config
    "DbEngine",
    "EngineFamily",
    "QueryBuilderConfig",
    # Query
    "QueryBuilder",
    "QuerySpec",
    "Condition",
    "Operator",
    # Errors
    "PolyQueryError",
    "MissingDependencyError",
    "UnsupportedOperationError",
]
