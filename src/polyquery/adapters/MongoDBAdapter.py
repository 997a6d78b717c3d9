# src/polyquery/adapters/MongoDBAdapter.py
from typing import Any, Dict, List

from polyquery.base.QueryAdapter import QueryAdapter

from ..errors import MissingDependencyError
from ..query import Condition, Operator, QuerySpec
from ..registry import ClientRegistry
from ..types import InsertData, JsonDict
from ..utils import like_to_regex

_OPERATORS: Dict[Operator, str] = {
    Operator.EQ: "$eq",
    Operator.NE: "$ne",
    Operator.GT: "$gt",
    Operator.GTE: "$gte",
    Operator.LT: "$lt",
    Operator.LTE: "$lte",
    Operator.LIKE: "$regex",
    Operator.IN: "$in",
    Operator.NOT_IN: "$nin",
}


class MongoDBAdapter(QueryAdapter):
    """MongoDB filter/options translation over a registered async database handle"""

    def __init__(self, registry: ClientRegistry, engine: str = "mongodb"):
        super().__init__(engine)
        self.database = registry.mongo
        if self.database is None:
            raise MissingDependencyError("MongoDB database handle is not registered")

    def _get_collection(self, name: str) -> Any:
        return self.database[name]

    def _convert_operator(self, operator: Any) -> str:
        # Unknown operators fall back to exact match
        op = Operator.parse(operator)
        return _OPERATORS[op] if op is not None else "$eq"

    def _build_filter(self, conditions: List[Condition]) -> JsonDict:
        """
        Fold conditions into one filter document.

        Conditions sharing a field name do not merge: the last one wins.
        """
        query: JsonDict = {}
        for c in conditions:
            mongo_op = self._convert_operator(c.operator)
            if mongo_op == "$regex" and isinstance(c.value, str):
                query[c.field] = {"$regex": like_to_regex(c.value), "$options": "i"}
            else:
                query[c.field] = {mongo_op: c.value}
        return query

    def _build_options(self, spec: QuerySpec) -> JsonDict:
        options: JsonDict = {}

        if spec.fields:
            options["projection"] = {f: 1 for f in spec.fields}

        if spec.sorts:
            options["sort"] = {
                field: 1 if direction == "asc" else -1
                for field, direction in spec.sorts.items()
            }

        if spec.limit_value is not None:
            options["limit"] = spec.limit_value

        if spec.skip_value is not None:
            options["skip"] = spec.skip_value

        return options

    async def get(self, spec: QuerySpec) -> List[JsonDict]:
        query = self._build_filter(spec.conditions)
        options = self._build_options(spec)
        self.logger.debug("find %s filter=%s options=%s", spec.table, query, options)

        kwargs = dict(options)
        if "sort" in kwargs:
            kwargs["sort"] = list(kwargs["sort"].items())

        try:
            collection = self._get_collection(spec.table)
            cursor = collection.find(query, **kwargs)
            return await cursor.to_list(None)
        except Exception as e:
            self.logger.error(f"MongoDB find failed: {str(e)}")
            raise

    async def insert(self, spec: QuerySpec, data: InsertData) -> InsertData:
        try:
            collection = self._get_collection(spec.table)

            if isinstance(data, list):
                if not data:
                    return []
                # The driver assigns _id onto the documents it is given
                docs = [dict(d) for d in data]
                result = await collection.insert_many(docs)
                for doc, inserted_id in zip(docs, result.inserted_ids):
                    doc.setdefault("_id", inserted_id)
                return docs

            result = await collection.insert_one(dict(data))
            return {**data, "_id": result.inserted_id}
        except Exception as e:
            self.logger.error(f"MongoDB insert failed: {str(e)}")
            raise

    async def update(self, spec: QuerySpec, data: JsonDict) -> int:
        query = self._build_filter(spec.conditions)
        try:
            collection = self._get_collection(spec.table)
            result = await collection.update_many(query, {"$set": data})
            if not result.acknowledged:
                return 0
            return result.modified_count or 0
        except Exception as e:
            self.logger.error(f"MongoDB update failed: {str(e)}")
            raise

    async def delete(self, spec: QuerySpec) -> int:
        query = self._build_filter(spec.conditions)
        try:
            collection = self._get_collection(spec.table)
            result = await collection.delete_many(query)
            if not result.acknowledged:
                return 0
            return result.deleted_count or 0
        except Exception as e:
            self.logger.error(f"MongoDB delete failed: {str(e)}")
            raise

    async def count(self, spec: QuerySpec, field: str = "*") -> int:
        query = self._build_filter(spec.conditions)
        try:
            collection = self._get_collection(spec.table)
            return int(await collection.count_documents(query))
        except Exception as e:
            self.logger.error(f"MongoDB count failed: {str(e)}")
            raise
