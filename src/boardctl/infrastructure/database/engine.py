"""Database engine setup for SQLite.

SQLAlchemy Core (not ORM): boardctl is a short-lived process that issues
set-based range updates, so there is nothing for an identity map to do.

pysqlite's own transaction handling is disabled so the ``begin`` listener
picks the statement. A connection carrying :data:`WRITE_OPTIONS` begins
with ``BEGIN IMMEDIATE``: a reorder takes the write lock before it reads
the entity it moves, so concurrent reorders serialize. Every other
connection begins with a deferred ``BEGIN`` and, under WAL, reads while
another connection writes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from boardctl.infrastructure.database.schema import metadata

# Execution options for a connection that will write.
WRITE_OPTIONS: dict[str, Any] = {"boardctl_immediate": True}


def create_db_engine(db_path: Path, *, busy_timeout: float = 5.0) -> Engine:
    """Create a SQLite engine with WAL mode, foreign keys, and opt-in immediate writes."""
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"timeout": busy_timeout},
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _begin(conn: Any) -> None:
        if conn.get_execution_options().get("boardctl_immediate"):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")

    return engine


def init_database(db_path: Path, *, busy_timeout: float = 5.0) -> Engine:
    """Create the database file and all tables at *db_path*.

    Idempotent, so safe to call on an existing database. Returns the engine
    ready for use.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path, busy_timeout=busy_timeout)
    metadata.create_all(engine)
    return engine
