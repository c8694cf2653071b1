"""
Jobs Repository.

Responsibilities:
- CRUD operations for the jobs table.
- Filtered listing through JobFilter.

Non-Responsibilities:
- No input validation beyond refusing unknown update fields.

Invariant:
Every value reaches the database as a bound parameter.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from ..database import Database
from ..errors import BadRequestError, EmptyPayloadError, NotFoundError
from ..filters import JOB_CRITERIA, JobFilter, build_where
from ..sql import Payload, ordered_items, sql_for_partial_update, where_sql

JOB_COLUMNS = "id, title, salary, equity, company_handle"
UPDATABLE_FIELDS = ("title", "salary", "equity")


class JobRepository:
    def __init__(self, db: Database):
        self.db = db

    def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a job from data and return the stored job.

        Data should be {title, salary, equity, company_handle}; several jobs
        may share a title.
        """
        rows = self.db.query(
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {JOB_COLUMNS}""",
            [
                data.get("title"),
                data.get("salary"),
                data.get("equity"),
                data.get("company_handle"),
            ],
        )
        return rows[0]

    def find_all(
        self, filters: Optional[Union[JobFilter, Mapping[str, Any]]] = None
    ) -> List[Dict[str, Any]]:
        """
        Find all jobs, optionally narrowed by filters.

        Filters: min_salary, title (case-insensitive partial match), has_equity.
        """
        if filters is not None and not isinstance(filters, JobFilter):
            filters = JobFilter.from_mapping(filters)

        where = build_where(filters, JOB_CRITERIA)
        sql = f"SELECT {JOB_COLUMNS} FROM jobs{where_sql(where)} ORDER BY company_handle, id"
        return self.db.query(sql, where.values)

    def get(self, job_id: int) -> Dict[str, Any]:
        rows = self.db.query(f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1", [job_id])
        if not rows:
            raise NotFoundError(f"No job with id: {job_id}")
        return rows[0]

    def update(self, job_id: int, data: Payload) -> Dict[str, Any]:
        """
        Partial update: only the supplied fields change.

        Data can include {title, salary, equity}.

        Raises:
            EmptyPayloadError: if data is empty
            BadRequestError: if data names a field that cannot be updated
            NotFoundError: if no job has this id
        """
        items = ordered_items(data)
        if not items:
            raise EmptyPayloadError("No data")
        unknown = [name for name, _ in items if name not in UPDATABLE_FIELDS]
        if unknown:
            raise BadRequestError(f"Cannot update job field(s): {', '.join(unknown)}")

        set_cols = sql_for_partial_update(items, {})
        id_idx = len(set_cols.values) + 1
        rows = self.db.query(
            f"""UPDATE jobs
                SET {set_cols.clause}
                WHERE id = ${id_idx}
                RETURNING {JOB_COLUMNS}""",
            [*set_cols.values, job_id],
        )
        if not rows:
            raise NotFoundError(f"No job with id: {job_id}")
        return rows[0]

    def remove(self, job_id: int) -> None:
        rows = self.db.query("DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id])
        if not rows:
            raise NotFoundError(f"No job with id: {job_id}")
