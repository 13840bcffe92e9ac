"""
Predicate builder for optional list filters

Each FieldPredicate pairs a column with a match policy; compose() turns
(predicate, value) pairs into SQLAlchemy clauses, dropping every pair whose
value is empty, so callers never build SQL text.
"""
import enum
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from sqlalchemy.sql.elements import ColumnElement


class Match(str, enum.Enum):
    EXACT = "exact"
    CONTAINS = "contains"
    AT_LEAST = "at_least"
    BEFORE = "before"


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


@dataclass(frozen=True)
class FieldPredicate:
    column: Any
    match: Match = Match.EXACT

    def clause(self, value: Any) -> Optional[ColumnElement]:
        """Build the clause for one value, or None when the filter is unset"""
        if is_empty(value):
            return None
        if self.match is Match.CONTAINS:
            return self.column.like(f"%{_escape_like(str(value))}%", escape="\\")
        if self.match is Match.AT_LEAST:
            return self.column >= value
        if self.match is Match.BEFORE:
            return self.column < value
        return self.column == value


def compose(pairs: Sequence[Tuple[FieldPredicate, Any]]) -> List[ColumnElement]:
    """AND-able clauses for every pair with a non-empty value"""
    clauses = []
    for predicate, value in pairs:
        clause = predicate.clause(value)
        if clause is not None:
            clauses.append(clause)
    return clauses
