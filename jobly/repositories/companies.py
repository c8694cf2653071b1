"""
Companies Repository.

Responsibilities:
- CRUD operations for the companies table.
- Filtered listing through CompanyFilter.

Invariant:
Every value reaches the database as a bound parameter.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from ..database import Database
from ..errors import BadRequestError, EmptyPayloadError, NotFoundError
from ..filters import COMPANY_CRITERIA, CompanyFilter, build_where
from ..sql import Payload, ordered_items, sql_for_partial_update, where_sql

COMPANY_COLUMNS = (
    'handle, name, description, num_employees AS "numEmployees", logo_url AS "logoUrl"'
)
JS_TO_SQL = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}
UPDATABLE_FIELDS = ("name", "description", "numEmployees", "logoUrl")


class CompanyRepository:
    def __init__(self, db: Database):
        self.db = db

    def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a company and return it.

        Data should be {handle, name, description, numEmployees, logoUrl}.

        Raises:
            BadRequestError: if the handle is already taken
        """
        handle = data.get("handle")
        duplicate = self.db.query("SELECT handle FROM companies WHERE handle = $1", [handle])
        if duplicate:
            raise BadRequestError(f"Duplicate company: {handle}")

        rows = self.db.query(
            f"""INSERT INTO companies (handle, name, description, num_employees, logo_url)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {COMPANY_COLUMNS}""",
            [
                handle,
                data.get("name"),
                data.get("description"),
                data.get("numEmployees"),
                data.get("logoUrl"),
            ],
        )
        return rows[0]

    def find_all(
        self, filters: Optional[Union[CompanyFilter, Mapping[str, Any]]] = None
    ) -> List[Dict[str, Any]]:
        """
        Find all companies ordered by name.

        Filters: name_like (case-insensitive partial match), min_employees,
        max_employees. Checking that min <= max is up to the caller.
        """
        if filters is not None and not isinstance(filters, CompanyFilter):
            filters = CompanyFilter.from_mapping(filters)

        where = build_where(filters, COMPANY_CRITERIA)
        sql = f"SELECT {COMPANY_COLUMNS} FROM companies{where_sql(where)} ORDER BY name"
        return self.db.query(sql, where.values)

    def get(self, handle: str) -> Dict[str, Any]:
        """
        Return the company with its jobs.

        Jobs are [{id, title, salary, equity}, ...] ordered by id.
        """
        rows = self.db.query(f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = $1", [handle])
        if not rows:
            raise NotFoundError(f"No company: {handle}")

        company = rows[0]
        company["jobs"] = self.db.query(
            "SELECT id, title, salary, equity FROM jobs WHERE company_handle = $1 ORDER BY id",
            [handle],
        )
        return company

    def update(self, handle: str, data: Payload) -> Dict[str, Any]:
        """
        Partial update: only the supplied fields change.

        Data can include {name, description, numEmployees, logoUrl}.
        """
        items = ordered_items(data)
        if not items:
            raise EmptyPayloadError("No data")
        unknown = [name for name, _ in items if name not in UPDATABLE_FIELDS]
        if unknown:
            raise BadRequestError(f"Cannot update company field(s): {', '.join(unknown)}")

        set_cols = sql_for_partial_update(items, JS_TO_SQL)
        handle_idx = len(set_cols.values) + 1
        rows = self.db.query(
            f"""UPDATE companies
                SET {set_cols.clause}
                WHERE handle = ${handle_idx}
                RETURNING {COMPANY_COLUMNS}""",
            [*set_cols.values, handle],
        )
        if not rows:
            raise NotFoundError(f"No company: {handle}")
        return rows[0]

    def remove(self, handle: str) -> None:
        """Delete the company; its jobs go with it."""
        rows = self.db.query(
            "DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle]
        )
        if not rows:
            raise NotFoundError(f"No company: {handle}")
