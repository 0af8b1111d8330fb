"""
Small SQL-building helpers shared by the feature repositories.

Column names only ever come from code (an endpoint's allow-list); request
values are always bound as positional parameters ($n), never interpolated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping


@dataclass(frozen=True)
class Assignments:
    """
    A `SET` fragment plus its ordered parameters.

    `sql` looks like "lot_name = $2, country = $3"; `next_index` is the first
    placeholder number still free for the caller's WHERE clause.
    """

    sql: str = ""
    params: list[Any] = field(default_factory=list)
    next_index: int = 1

    @property
    def is_empty(self) -> bool:
        return not self.params


def build_assignments(
    changes: Mapping[str, Any],
    allowed: Iterable[str],
    *,
    start: int = 1,
) -> Assignments:
    """
    Build `col = $n` pairs for every allow-listed column present in `changes`.

    Keys missing from `changes` are skipped; keys that are not on the
    allow-list are ignored. An explicit None is kept (it sets the column NULL).
    """
    parts: list[str] = []
    params: list[Any] = []
    index = start
    for column in allowed:
        if column not in changes:
            continue
        parts.append(f"{column} = ${index}")
        params.append(changes[column])
        index += 1
    return Assignments(sql=", ".join(parts), params=params, next_index=index)


class QueryParams:
    """
    Accumulates positional parameters and AND-ed WHERE conditions.

        qp = QueryParams()
        qp.where("status = {}", "published")
        qp.where("(price_per_kg IS NULL OR price_per_kg <= {})", 9.5)
        sql = f"SELECT ... FROM coffee_lots {qp.where_sql()} LIMIT {qp.bind(50)}"
        rows = await db.fetch_all(sql, *qp.values)
    """

    def __init__(self) -> None:
        self.values: list[Any] = []
        self.conditions: list[str] = []

    def bind(self, value: Any) -> str:
        self.values.append(value)
        return f"${len(self.values)}"

    def where(self, template: str, *values: Any) -> None:
        placeholders = [self.bind(v) for v in values]
        self.conditions.append(template.format(*placeholders))

    def where_sql(self) -> str:
        if not self.conditions:
            return ""
        return "WHERE " + " AND ".join(self.conditions)
