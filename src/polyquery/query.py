from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from enum import Enum


class Operator(Enum):
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"
    LIKE = "like"
    IN = "in"
    NOT_IN = "not_in"

    @classmethod
    def parse(cls, tag: Any) -> Optional[Operator]:
        """Normalize an operator tag; None when the tag is not in the vocabulary"""
        if isinstance(tag, Operator):
            return tag
        if not isinstance(tag, str):
            return None
        return _ALIASES.get(tag.strip().lower())


_ALIASES: Dict[str, Operator] = {
    "=": Operator.EQ,
    "==": Operator.EQ,
    "eq": Operator.EQ,
    "!=": Operator.NE,
    "<>": Operator.NE,
    "ne": Operator.NE,
    ">": Operator.GT,
    "gt": Operator.GT,
    ">=": Operator.GTE,
    "gte": Operator.GTE,
    "<": Operator.LT,
    "lt": Operator.LT,
    "<=": Operator.LTE,
    "lte": Operator.LTE,
    "like": Operator.LIKE,
    "in": Operator.IN,
    "not in": Operator.NOT_IN,
    "not_in": Operator.NOT_IN,
    "nin": Operator.NOT_IN,
}


@dataclass
class Condition:
    field: str
    operator: str
    value: Any


@dataclass
class QuerySpec:
    """Backend-agnostic description of one query, accumulated by a QueryBuilder"""

    table: Optional[str] = None
    conditions: List[Condition] = field(default_factory=list)
    fields: List[str] = field(default_factory=list)
    sorts: Dict[str, str] = field(default_factory=dict)  # field -> direction
    limit_value: Optional[int] = None
    skip_value: Optional[int] = None

    def add_condition(self, field: str, operator: Any, value: Any) -> None:
        if isinstance(operator, Operator):
            operator = operator.value
        self.conditions.append(Condition(field, operator, value))
