"""
Filter records for list queries and the criteria that lower them to SQL.

A criterion contributes a predicate only when its field was supplied.
"Not supplied" is the UNSET sentinel, so 0, "" and False still count as
supplied values.
"""

from dataclasses import dataclass, fields
from typing import Any, Callable, Mapping, Optional, Tuple

from .errors import BadRequestError
from .sql import Fragment, WhereBuilder


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class Criterion:
    field: str
    column: str
    operator: str
    # Maps the supplied value to the bound value, or _SKIP for no predicate.
    bind: Callable[[Any], Any]

    def lower(self, value: Any, where: WhereBuilder) -> None:
        bound = self.bind(value)
        if bound is _SKIP:
            return
        where.add(self.column, self.operator, bound)


_SKIP = object()


def at_least(field: str, column: str) -> Criterion:
    return Criterion(field, column, ">=", lambda v: v)


def at_most(field: str, column: str) -> Criterion:
    return Criterion(field, column, "<=", lambda v: v)


def contains(field: str, column: str) -> Criterion:
    """Case-insensitive substring match."""
    return Criterion(field, column, "ILIKE", lambda v: None if v is None else f"%{v}%")


def positive(field: str, column: str) -> Criterion:
    """Only narrows: True keeps rows with column > 0, anything else adds nothing."""
    return Criterion(field, column, ">", lambda v: 0 if v is True else _SKIP)


def build_where(criteria: Any, declared: Tuple[Criterion, ...]) -> Fragment:
    """
    Lower a filter record to a WHERE fragment.

    Predicates follow the order of ``declared``, so identical criteria always
    produce identical SQL. Returns an empty Fragment when nothing was supplied.
    """
    where = WhereBuilder()
    if criteria is None:
        return where.build()
    for criterion in declared:
        value = getattr(criteria, criterion.field, UNSET)
        if value is UNSET:
            continue
        criterion.lower(value, where)
    return where.build()


class _FilterMixin:
    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]):
        """Build a filter from a mapping; unknown keys are rejected."""
        data = data or {}
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise BadRequestError(f"Unknown filter(s): {', '.join(unknown)}")
        return cls(**data)

    def supplied(self) -> dict:
        """Return only the fields that were supplied."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }


@dataclass(frozen=True)
class JobFilter(_FilterMixin):
    min_salary: Any = UNSET
    title: Any = UNSET
    has_equity: Any = UNSET


@dataclass(frozen=True)
class CompanyFilter(_FilterMixin):
    name_like: Any = UNSET
    min_employees: Any = UNSET
    max_employees: Any = UNSET


JOB_CRITERIA = (
    at_least("min_salary", "salary"),
    contains("title", "title"),
    positive("has_equity", "equity"),
)

COMPANY_CRITERIA = (
    contains("name_like", "name"),
    at_least("min_employees", "num_employees"),
    at_most("max_employees", "num_employees"),
)
