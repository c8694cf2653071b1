"""
Tests for database.py - schema creation and statement execution.
"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError

from jobly.database import Database, bind_positional, init_database


class TestBindPositional:
    """Test $n placeholder rewriting."""

    def test_rewrites_placeholders(self):
        sql, params = bind_positional("SELECT * FROM jobs WHERE salary >= $1 AND id = $2", [200, 3])
        assert sql == "SELECT * FROM jobs WHERE salary >= :p1 AND id = :p2"
        assert params == {"p1": 200, "p2": 3}

    def test_double_digit_placeholders(self):
        values = list(range(12))
        sql, params = bind_positional("$12, $1", values)
        assert sql == ":p12, :p1"
        assert params["p12"] == 11

    def test_missing_value_raises(self):
        with pytest.raises(ValueError):
            bind_positional("SELECT $2", [1])

    def test_no_placeholders(self):
        assert bind_positional("SELECT 1", []) == ("SELECT 1", {})


class TestDatabaseInit:
    """Test database initialization."""

    def test_init_creates_database_file(self, tmp_path, quiet_logger):
        db_path = tmp_path / "nested" / "dir" / "test.db"
        assert not db_path.parent.exists()

        db = Database(f"sqlite:///{db_path}", logger=quiet_logger)
        db.init_schema()

        assert db_path.exists()
        db.dispose()

    def test_init_creates_tables(self, db):
        tables = set(inspect(db.engine).get_table_names())
        assert {"companies", "jobs"} <= tables

    def test_init_database_helper(self, tmp_path):
        db = init_database(f"sqlite:///{tmp_path / 'x.db'}")
        assert db.query("SELECT COUNT(*) AS n FROM jobs") == [{"n": 0}]
        db.dispose()


class TestQuery:
    """Test Database.query."""

    def test_select_returns_dicts(self, seeded_db):
        rows = seeded_db.query("SELECT id, title FROM jobs WHERE salary >= $1 ORDER BY id", [200])
        assert rows == [{"id": 2, "title": "Job 2"}, {"id": 3, "title": "Job 3"}]

    def test_ilike_works_on_sqlite(self, seeded_db):
        rows = seeded_db.query("SELECT id FROM jobs WHERE title ILIKE $1 ORDER BY id", ["%job 1%"])
        assert rows == [{"id": 1}]

    def test_statement_without_rows(self, seeded_db):
        assert seeded_db.query("UPDATE jobs SET salary = $1 WHERE id = $2", [1, 1]) == []

    def test_metrics_recorded(self, seeded_db, quiet_logger):
        before = quiet_logger.get_metrics()["queries_executed"]
        seeded_db.query("SELECT id FROM jobs")
        metrics = quiet_logger.get_metrics()
        assert metrics["queries_executed"] == before + 1
        assert metrics["statements_by_kind"]["select"] >= 1

    def test_foreign_keys_enforced(self, db, quiet_logger):
        with pytest.raises(IntegrityError):
            db.query(
                "INSERT INTO jobs (title, salary, equity, company_handle) VALUES ($1, $2, $3, $4)",
                ["orphan", 1, 0, "nope"],
            )
        assert quiet_logger.get_metrics()["errors_by_type"]["IntegrityError"] == 1

    def test_check_constraint(self, seeded_db):
        with pytest.raises(IntegrityError):
            seeded_db.query("UPDATE jobs SET equity = $1 WHERE id = $2", [1.5, 1])

    def test_negative_equity_rejected(self, seeded_db):
        with pytest.raises(IntegrityError):
            seeded_db.query("UPDATE jobs SET equity = $1 WHERE id = $2", [-0.1, 1])
