# src/polyquery/adapters/SQLAdapter.py
from typing import Any, Callable, Dict, List, Tuple

import sqlalchemy as sa

from polyquery.base.QueryAdapter import QueryAdapter

from ..errors import MissingDependencyError
from ..query import Condition, Operator, QuerySpec
from ..registry import ClientRegistry
from ..types import InsertData, JsonDict

_OPERATORS: Dict[Operator, Callable[[Any, Any], Any]] = {
    Operator.EQ: lambda col, value: col == value,
    Operator.NE: lambda col, value: col != value,
    Operator.GT: lambda col, value: col > value,
    Operator.GTE: lambda col, value: col >= value,
    Operator.LT: lambda col, value: col < value,
    Operator.LTE: lambda col, value: col <= value,
    Operator.LIKE: lambda col, value: col.like(value),
    Operator.IN: lambda col, value: col.in_(value),
    Operator.NOT_IN: lambda col, value: col.not_in(value),
}


class SQLAdapter(QueryAdapter):
    """PostgreSQL, MySQL, SQLite, MSSQL through a registered SQLAlchemy AsyncEngine"""

    def __init__(
        self,
        registry: ClientRegistry,
        engine: str = "pg",
        binding: str = "db",
        primary_key: str = "id",
    ):
        super().__init__(engine)
        self.binding = binding
        self.primary_key = primary_key
        self.client = registry.get_sql(binding)
        if self.client is None:
            raise MissingDependencyError(
                f"Relational client '{binding}' is not registered "
                f"(available: {registry.sql_bindings})"
            )
        self.logger.debug(f"SQL adapter bound to '{binding}' for engine '{engine}'")

    @property
    def supports_returning(self) -> bool:
        """Whether the bound dialect can echo written rows via INSERT ... RETURNING"""
        return bool(getattr(self.client.dialect, "insert_returning", False))

    def _clause(self, condition: Condition) -> Any:
        col = sa.column(condition.field)
        op = Operator.parse(condition.operator)
        if op is None:
            # Backend-specific operator, rendered verbatim
            return col.op(condition.operator)(condition.value)
        return _OPERATORS[op](col, condition.value)

    def _apply_conditions(self, stmt: Any, spec: QuerySpec) -> Any:
        for condition in spec.conditions:
            stmt = stmt.where(self._clause(condition))
        return stmt

    def _build_query(self, spec: QuerySpec) -> sa.Select:
        if spec.fields:
            stmt = sa.select(*[sa.column(f) for f in spec.fields])
        else:
            stmt = sa.select(sa.literal_column("*"))
        stmt = stmt.select_from(sa.table(spec.table))

        stmt = self._apply_conditions(stmt, spec)

        for field, direction in spec.sorts.items():
            col = sa.column(field)
            stmt = stmt.order_by(col.asc() if direction == "asc" else col.desc())

        if spec.limit_value is not None:
            stmt = stmt.limit(spec.limit_value)
        if spec.skip_value is not None:
            stmt = stmt.offset(spec.skip_value)

        return stmt

    async def _run(self, operation: str, stmt: Any, consume: Callable[[Any], Any]) -> Any:
        self.logger.debug("Executing %s: %s", operation, stmt)
        try:
            async with self.client.begin() as conn:
                result = await conn.execute(stmt)
                return consume(result)
        except Exception as e:
            self.logger.error(f"SQL {operation} failed: {str(e)}")
            raise

    async def get(self, spec: QuerySpec) -> List[JsonDict]:
        stmt = self._build_query(spec)
        return await self._run("select", stmt, lambda result: [dict(row) for row in result.mappings()])

    async def insert(self, spec: QuerySpec, data: InsertData) -> InsertData:
        many = isinstance(data, list)
        rows = data if many else [data]
        if not rows:
            return []

        # One multi-VALUES statement per distinct key set; missing columns take their defaults
        groups: Dict[Tuple[str, ...], List[int]] = {}
        for index, row in enumerate(rows):
            groups.setdefault(tuple(sorted(row)), []).append(index)

        returning = self.supports_returning
        if not returning:
            self.logger.debug(
                f"Dialect '{self.client.dialect.name}' has no INSERT RETURNING; echoing input rows"
            )

        written: List[JsonDict] = [dict(row) for row in rows]
        try:
            async with self.client.begin() as conn:
                for columns, indexes in groups.items():
                    table = sa.table(spec.table, *[sa.column(c) for c in columns])
                    values = [rows[i] for i in indexes]
                    stmt = sa.insert(table).values(values if len(values) > 1 else values[0])
                    if returning:
                        stmt = stmt.returning(sa.literal_column("*"))

                    self.logger.debug("Executing insert: %s", stmt)
                    result = await conn.execute(stmt)

                    if returning:
                        for i, row in zip(indexes, result.mappings()):
                            written[i] = dict(row)
                    elif not many and result.lastrowid is not None:
                        written[0].setdefault(self.primary_key, result.lastrowid)
        except Exception as e:
            self.logger.error(f"SQL insert failed: {str(e)}")
            raise

        return written if many else written[0]

    async def update(self, spec: QuerySpec, data: JsonDict) -> int:
        table = sa.table(spec.table, *[sa.column(k) for k in data])
        stmt = self._apply_conditions(sa.update(table), spec).values(data)
        return await self._run("update", stmt, lambda result: result.rowcount)

    async def delete(self, spec: QuerySpec) -> int:
        stmt = self._apply_conditions(sa.delete(sa.table(spec.table)), spec)
        return await self._run("delete", stmt, lambda result: result.rowcount)

    async def count(self, spec: QuerySpec, field: str = "*") -> int:
        expr = sa.func.count() if field == "*" else sa.func.count(sa.column(field))
        stmt = sa.select(expr.label("count")).select_from(sa.table(spec.table))
        stmt = self._apply_conditions(stmt, spec)
        # Some drivers hand back counts as text
        return await self._run("count", stmt, lambda result: int(result.scalar_one()))

    def to_sql(self, spec: QuerySpec) -> str:
        """Render the read statement for the bound dialect with inlined values"""
        stmt = self._build_query(spec)
        dialect = self.client.dialect
        sql = str(stmt.compile(dialect=dialect, compile_kwargs={"literal_binds": True}))
        if dialect.paramstyle in ("format", "pyformat"):
            # Inlined literals keep the %-escaping meant for the driver
            sql = sql.replace("%%", "%")
        return sql
