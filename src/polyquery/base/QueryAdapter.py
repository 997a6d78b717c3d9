from polyquery.utils import setup_logger
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import List, Optional

from ..query import QuerySpec
from ..types import InsertData, JsonDict


class QueryAdapter(ABC):
    """Base class for backend adapters bound to one QueryBuilder"""

    def __init__(self, engine: str):
        self.logger = setup_logger(self.__class__.__name__)
        self.engine = engine

    @abstractmethod
    async def get(self, spec: QuerySpec) -> List[JsonDict]:
        """Execute the read and return every matching record"""
        pass

    async def first(self, spec: QuerySpec) -> Optional[JsonDict]:
        """First matching record or None; the caller's limit is left untouched"""
        results = await self.get(replace(spec, limit_value=1))
        return results[0] if results else None

    @abstractmethod
    async def insert(self, spec: QuerySpec, data: InsertData) -> InsertData:
        """Insert one record or a batch, returning what was written"""
        pass

    @abstractmethod
    async def update(self, spec: QuerySpec, data: JsonDict) -> int:
        """Set fields on every matching record, return affected count"""
        pass

    @abstractmethod
    async def delete(self, spec: QuerySpec) -> int:
        """Remove every matching record, return removed count"""
        pass

    @abstractmethod
    async def count(self, spec: QuerySpec, field: str = "*") -> int:
        """Count matching records"""
        pass
