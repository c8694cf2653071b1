"""
Database schema and statement execution.

Tables are declared with SQLAlchemy models; every read and write goes
through Database.query with a hand-built statement using $n placeholders.
"""

import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import (
    CheckConstraint,
    Column,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    create_engine,
    event,
    text,
)
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base

from .logger import StructuredLogger, get_logger

Base = declarative_base()

_PLACEHOLDER = re.compile(r"\$(\d+)")
_ILIKE = re.compile(r"\bILIKE\b")


class Company(Base):
    """Company model."""

    __tablename__ = "companies"

    handle = Column(String(25), primary_key=True)
    name = Column(Text, nullable=False, unique=True)
    num_employees = Column(Integer, CheckConstraint("num_employees >= 0"))
    description = Column(Text, nullable=False)
    logo_url = Column(Text)


class Job(Base):
    """Job posting model."""

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    salary = Column(Integer, CheckConstraint("salary >= 0"))
    equity = Column(Float, CheckConstraint("equity >= 0 AND equity <= 1.0"))
    company_handle = Column(
        String(25),
        ForeignKey("companies.handle", ondelete="CASCADE"),
        nullable=False,
    )


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def bind_positional(sql: str, values: Sequence[Any]) -> tuple:
    """
    Rewrite $n placeholders as named bind parameters.

    Returns (sql, params) where $n became :pn and params["pn"] is values[n - 1].

    Raises:
        ValueError: if a placeholder has no matching value
    """
    def _replace(match: "re.Match") -> str:
        index = int(match.group(1))
        if index < 1 or index > len(values):
            raise ValueError(
                f"Placeholder ${index} has no value ({len(values)} value(s) given)"
            )
        return f":p{index}"

    rewritten = _PLACEHOLDER.sub(_replace, sql)
    params = {f"p{i}": value for i, value in enumerate(values, start=1)}
    return rewritten, params


def _statement_kind(sql: str) -> str:
    words = sql.split(None, 1)
    return words[0].lower() if words else "unknown"


class Database:
    """
    Runs single parameterized statements against a SQLAlchemy engine.

    Use as:
        db = Database("sqlite:///data/jobly.db")
        rows = db.query("SELECT * FROM jobs WHERE salary >= $1", [200])
    """

    def __init__(
        self,
        url: str,
        engine: Optional[Engine] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        self.url = url
        self.engine = engine or self._create_engine(url)
        self.logger = logger or get_logger()

    @staticmethod
    def _create_engine(url: str) -> Engine:
        parsed = make_url(url)
        if parsed.get_backend_name() == "sqlite" and parsed.database not in (None, "", ":memory:"):
            Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(url)
        if engine.dialect.name == "sqlite":
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    def init_schema(self) -> None:
        """Create the companies and jobs tables if missing."""
        Base.metadata.create_all(self.engine)

    def _dialect_sql(self, sql: str) -> str:
        # SQLite has no ILIKE; its LIKE is already case-insensitive for ASCII.
        if self.engine.dialect.name == "sqlite":
            return _ILIKE.sub("LIKE", sql)
        return sql

    def query(self, sql: str, values: Optional[Sequence[Any]] = None) -> List[Dict[str, Any]]:
        """
        Execute one statement and return its rows as dicts.

        Args:
            sql: Statement text using $1, $2, ... placeholders
            values: Values bound positionally to the placeholders

        Returns:
            Rows as dicts (empty for statements without a result set)
        """
        values = list(values or [])
        kind = _statement_kind(sql)
        bound_sql, params = bind_positional(self._dialect_sql(sql), values)

        self.logger.debug("Executing statement", kind=kind, sql=" ".join(sql.split()), params=len(values))
        try:
            with self.engine.begin() as conn:
                result = conn.execute(text(bound_sql), params)
                rows = [dict(row) for row in result.mappings()] if result.returns_rows else []
        except SQLAlchemyError as e:
            self.logger.record_error(type(e).__name__)
            self.logger.error(f"Statement failed: {e}", kind=kind, error=type(e).__name__)
            raise

        self.logger.record_query(kind, len(rows))
        return rows

    def dispose(self) -> None:
        self.engine.dispose()


def init_database(url: str) -> Database:
    """
    Initialize database and create tables.

    Args:
        url: SQLAlchemy database URL

    Returns:
        Database bound to the URL
    """
    db = Database(url)
    db.init_schema()
    return db
