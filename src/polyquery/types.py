from __future__ import annotations

from typing import Any, Dict, List, Protocol, Union, runtime_checkable

from .query import QuerySpec

JsonDict = Dict[str, Any]
InsertData = Union[JsonDict, List[JsonDict]]


@runtime_checkable
class StatementRenderer(Protocol):
    """Adapters that can render the built read statement as text"""

    def to_sql(self, spec: QuerySpec) -> str: ...
