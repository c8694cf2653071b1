"""
Load companies and jobs from a JSON document into the database.

Expected shape:
    {"companies": [{handle, name, description, ...}, ...],
     "jobs": [{title, salary, equity, company_handle}, ...]}
"""

import json
from pathlib import Path
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError

from .database import Database
from .errors import BadRequestError
from .logger import get_logger
from .repositories import CompanyRepository, JobRepository
from .schema import validate_company_new, validate_job_new


def load_seed(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise BadRequestError(f"Seed file must contain a JSON object: {path}")
    return data


def seed(db: Database, data: Dict[str, Any], dry_run: bool = False) -> Dict[str, int]:
    """
    Insert the companies, then the jobs, from data.

    Invalid records, duplicate company handles and jobs whose company is
    missing are skipped, not fatal.

    Returns:
        Counts: {"companies": n, "jobs": n, "skipped": n}
    """
    logger = get_logger()
    companies = CompanyRepository(db)
    jobs = JobRepository(db)
    counts = {"companies": 0, "jobs": 0, "skipped": 0}

    for company in data.get("companies", []):
        errors = validate_company_new(company)
        if errors:
            logger.warning("Skipping invalid company", handle=company.get("handle"), errors=errors)
            counts["skipped"] += 1
            continue
        if dry_run:
            counts["companies"] += 1
            continue
        try:
            companies.create(company)
        except BadRequestError as e:
            logger.warning("Skipping company", handle=company.get("handle"), error=e.message)
            counts["skipped"] += 1
            continue
        counts["companies"] += 1

    for job in data.get("jobs", []):
        errors = validate_job_new(job)
        if errors:
            logger.warning("Skipping invalid job", title=job.get("title"), errors=errors)
            counts["skipped"] += 1
            continue
        if dry_run:
            counts["jobs"] += 1
            continue
        try:
            jobs.create(job)
        except IntegrityError as e:
            logger.warning(
                "Skipping job", title=job.get("title"), company_handle=job.get("company_handle"), error=str(e.orig)
            )
            counts["skipped"] += 1
            continue
        counts["jobs"] += 1

    logger.info("Seed complete", dry_run=dry_run, **counts)
    return counts
