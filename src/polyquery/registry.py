from typing import Any, Dict, Optional


class ClientRegistry:
    """
    Shared context holding the backend clients adapters borrow.

    Supports:
    - register_sql(name, engine) → named relational client (AsyncEngine)
    - register_mongo(database) → async MongoDB database handle
    - get_sql(name) / mongo → lookup, None when absent

    The registry never opens or closes connections; lifecycle stays with
    whoever registered the client.
    """

    def __init__(self):
        self._sql: Dict[str, Any] = {}
        self._mongo: Optional[Any] = None

    def register_sql(self, name: str, engine: Any) -> "ClientRegistry":
        if engine is None:
            raise ValueError(f"Relational client for binding '{name}' must not be None")
        self._sql[name] = engine
        return self

    def register_mongo(self, database: Any) -> "ClientRegistry":
        if database is None:
            raise ValueError("MongoDB database handle must not be None")
        self._mongo = database
        return self

    def get_sql(self, name: str) -> Optional[Any]:
        return self._sql.get(name)

    @property
    def mongo(self) -> Optional[Any]:
        return self._mongo

    @property
    def sql_bindings(self):
        return list(self._sql)
