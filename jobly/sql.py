"""
Builders for the variable parts of SQL statements.

Every builder returns a Fragment: a piece of SQL text using positional
``$n`` placeholders plus the list of values to bind, where ``values[n - 1]``
is the value for ``$n``. Builders never execute anything.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from .errors import BadRequestError, EmptyPayloadError

Payload = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


@dataclass(frozen=True)
class Fragment:
    clause: str = ""
    values: List[Any] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.clause)


def quote_identifier(name: str) -> str:
    """Quote a column name, doubling any embedded double quote."""
    if not isinstance(name, str) or not name:
        raise BadRequestError(f"Invalid column name: {name!r}")
    return '"' + name.replace('"', '""') + '"'


def ordered_items(data: Payload) -> List[Tuple[str, Any]]:
    """Return (name, value) pairs in payload order; duplicate names are rejected."""
    if isinstance(data, Mapping):
        return list(data.items())

    items = list(data)
    seen = set()
    for name, _ in items:
        if name in seen:
            raise BadRequestError(f"Duplicate field in update: {name}")
        seen.add(name)
    return items


def sql_for_partial_update(
    data: Payload,
    js_to_sql: Optional[Mapping[str, str]] = None,
    start: int = 1,
) -> Fragment:
    """
    Build the SET part of an UPDATE that only touches the supplied fields.

    Args:
        data: {fieldName: new value} or an ordered list of (fieldName, value)
        js_to_sql: {fieldName: column_name}; fields not listed keep their name
        start: placeholder number for the first value

    Returns:
        Fragment('"first_name"=$1, "age"=$2', ["Aliya", 32])

    Raises:
        EmptyPayloadError: if there is nothing to update
    """
    items = ordered_items(data)
    if not items:
        raise EmptyPayloadError("No data")

    js_to_sql = js_to_sql or {}
    cols = [
        f"{quote_identifier(js_to_sql.get(name, name))}=${idx}"
        for idx, (name, _) in enumerate(items, start=start)
    ]
    return Fragment(", ".join(cols), [value for _, value in items])


class WhereBuilder:
    """
    Accumulates AND-ed predicates, numbering placeholders as values are added.

        where = WhereBuilder()
        where.add("salary", ">=", 200)
        where.add("title", "ILIKE", "%eng%")
        where.build()  # Fragment('"salary" >= $1 AND "title" ILIKE $2', [200, "%eng%"])
    """

    def __init__(self, start: int = 1):
        self._start = start
        self._predicates: List[str] = []
        self._values: List[Any] = []

    def add(self, column: str, operator: str, value: Any) -> "WhereBuilder":
        """Append ``"column" <operator> $n`` bound to value."""
        # Push first so the placeholder number is always len(values).
        self._values.append(value)
        placeholder = f"${self._start + len(self._values) - 1}"
        self._predicates.append(f"{quote_identifier(column)} {operator} {placeholder}")
        return self

    def build(self) -> Fragment:
        return Fragment(" AND ".join(self._predicates), list(self._values))


def where_sql(fragment: Fragment) -> str:
    """Return ' WHERE <clause>' for a non-empty fragment, '' otherwise."""
    if not fragment:
        return ""
    return f" WHERE {fragment.clause}"
