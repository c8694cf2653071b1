"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import Dict, Any, List

from jobly.database import Database
from jobly.logger import StructuredLogger, reset_logger
from jobly.repositories import CompanyRepository, JobRepository


COMPANIES: List[Dict[str, Any]] = [
    {
        "handle": "c1",
        "name": "C1",
        "description": "Desc1",
        "numEmployees": 1,
        "logoUrl": "http://c1.img",
    },
    {
        "handle": "c2",
        "name": "C2",
        "description": "Desc2",
        "numEmployees": 2,
        "logoUrl": "http://c2.img",
    },
    {
        "handle": "c3",
        "name": "C3",
        "description": "Desc3",
        "numEmployees": 3,
        "logoUrl": "http://c3.img",
    },
]

JOBS: List[Dict[str, Any]] = [
    {"title": "Job 1", "salary": 100, "equity": 0.0, "company_handle": "c1"},
    {"title": "Job 2", "salary": 200, "equity": 0.05, "company_handle": "c1"},
    {"title": "Job 3", "salary": 300, "equity": None, "company_handle": "c2"},
]


@pytest.fixture(autouse=True)
def _fresh_logger():
    """Each test gets its own global logger."""
    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def quiet_logger() -> StructuredLogger:
    return StructuredLogger(name="jobly-test", level="DEBUG", enable_console=False)


@pytest.fixture
def db_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'jobly.db'}"


@pytest.fixture
def db(db_url, quiet_logger) -> Database:
    """Empty database with the schema created."""
    database = Database(db_url, logger=quiet_logger)
    database.init_schema()
    yield database
    database.dispose()


@pytest.fixture
def seeded_db(db) -> Database:
    """Database holding three companies and three jobs (ids 1, 2, 3)."""
    companies = CompanyRepository(db)
    jobs = JobRepository(db)
    for company in COMPANIES:
        companies.create(company)
    for job in JOBS:
        jobs.create(job)
    return db


@pytest.fixture
def job_repo(seeded_db) -> JobRepository:
    return JobRepository(seeded_db)


@pytest.fixture
def company_repo(seeded_db) -> CompanyRepository:
    return CompanyRepository(seeded_db)
