from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, List, Optional

from .base.QueryAdapter import QueryAdapter
from .errors import UnsupportedOperationError
from .models import EngineFamily, classify_engine
from .query import Operator, QuerySpec
from .types import InsertData, JsonDict, StatementRenderer
from .utils import flatten_fields


def _as_list(values: Iterable[Any]) -> List[Any]:
    # A bare string is iterable but is never a list of candidates
    if isinstance(values, (str, bytes)):
        raise TypeError(f"expected a collection of values, got {type(values).__name__}")
    return list(values)


class QueryBuilder:
    """
    Fluent query facade over one backend adapter.

    Configuration methods mutate the owned QuerySpec and return the builder;
    terminal methods are coroutines delegating to the adapter. State persists
    across executions, so a configured builder can be run repeatedly.

    Usage:
        users = await (
            factory.sql("users")
            .where("status", "active")
            .where("age", ">", 18)
            .order_by("created_at", "desc")
            .limit(10)
            .get()
        )
    """

    def __init__(self, adapter: QueryAdapter, engine: Optional[str] = None):
        self.adapter = adapter
        self.engine = engine or adapter.engine
        self.spec = QuerySpec()

    @property
    def family(self) -> EngineFamily:
        return classify_engine(self.engine)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def from_(self, name: str) -> QueryBuilder:
        """Set the target table or collection"""
        self.spec.table = name
        return self

    def where(self, field: Any, *args: Any) -> QueryBuilder:
        """
        Add equality or comparison conditions.

        where({"a": 1, "b": 2})      one eq condition per key
        where("a", 1)                eq condition, None allowed
        where("a", ">", 1)           operator kept verbatim
        """
        if not args:
            if not isinstance(field, Mapping):
                raise TypeError("where() with one argument expects a mapping of field -> value")
            for key, value in field.items():
                self.spec.add_condition(key, Operator.EQ, value)
        elif len(args) == 1:
            self.spec.add_condition(field, Operator.EQ, args[0])
        elif len(args) == 2:
            self.spec.add_condition(field, args[0], args[1])
        else:
            raise TypeError(f"where() takes 1 to 3 arguments ({len(args) + 1} given)")
        return self

    def where_in(self, field: str, values: Iterable[Any]) -> QueryBuilder:
        self.spec.add_condition(field, Operator.IN, _as_list(values))
        return self

    def where_not_in(self, field: str, values: Iterable[Any]) -> QueryBuilder:
        self.spec.add_condition(field, Operator.NOT_IN, _as_list(values))
        return self

    def where_like(self, field: str, pattern: Any) -> QueryBuilder:
        self.spec.add_condition(field, Operator.LIKE, pattern)
        return self

    def select(self, *fields: Any) -> QueryBuilder:
        """Replace the projection; accepts names or lists of names"""
        self.spec.fields = flatten_fields(fields)
        return self

    def order_by(self, field: str, direction: str = "asc") -> QueryBuilder:
        self.spec.sorts[field] = str(direction).lower()
        return self

    def limit(self, count: int) -> QueryBuilder:
        self.spec.limit_value = count
        return self

    def skip(self, count: int) -> QueryBuilder:
        self.spec.skip_value = count
        return self

    def offset(self, count: int) -> QueryBuilder:
        """Alias for skip"""
        return self.skip(count)

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    async def get(self) -> List[JsonDict]:
        return await self.adapter.get(self.spec)

    async def first(self) -> Optional[JsonDict]:
        return await self.adapter.first(self.spec)

    async def insert(self, data: InsertData) -> InsertData:
        return await self.adapter.insert(self.spec, data)

    async def update(self, data: JsonDict) -> int:
        return await self.adapter.update(self.spec, data)

    async def delete(self) -> int:
        return await self.adapter.delete(self.spec)

    async def count(self, field: str = "*") -> int:
        return await self.adapter.count(self.spec, field)

    def to_sql(self) -> str:
        """Statement text of the read query; relational adapters only"""
        if not isinstance(self.adapter, StatementRenderer):
            raise UnsupportedOperationError(
                f"to_sql() is not available for engine '{self.engine}'"
            )
        return self.adapter.to_sql(self.spec)
