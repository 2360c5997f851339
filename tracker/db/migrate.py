"""Idempotent, additive SQLite migrations for databases from older releases.

Early releases stored tickets without labels, an assignee or a status, and
had no unique index on user emails. ``run_migrations`` fills those gaps in
place and never drops data.
"""

from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy import text
from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

TICKET_COLUMNS: dict[str, str] = {
    "labels": "TEXT NOT NULL DEFAULT '[]'",
    "assigned_user": "INTEGER",
    "status": "TEXT NOT NULL DEFAULT 'Open'",
}


def _column_names(engine: Engine, table: str) -> set[str]:
    with engine.connect() as conn:
        rows = conn.execute(text(f"PRAGMA table_info({table})")).mappings().all()
    return {row["name"] for row in rows}


def _add_column_sqlite(engine: Engine, table: str, col_def: str) -> None:
    with engine.begin() as conn:
        conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {col_def}"))


def _create_index_if_not_exists(engine: Engine, table: str, name: str, cols: Iterable[str], unique: bool = False) -> None:
    cols_sql = ", ".join(cols)
    unique_sql = "UNIQUE " if unique else ""
    with engine.begin() as conn:
        conn.execute(text(f"CREATE {unique_sql}INDEX IF NOT EXISTS {name} ON {table} ({cols_sql})"))


def _has_duplicate_emails(engine: Engine) -> bool:
    with engine.connect() as conn:
        row = conn.execute(
            text("SELECT email FROM users GROUP BY email HAVING COUNT(*) > 1 LIMIT 1")
        ).first()
    return row is not None


def run_migrations(engine: Engine) -> None:
    """Bring an existing SQLite schema up to date; no-op on fresh databases."""

    if engine.dialect.name != "sqlite":
        return

    tcols = _column_names(engine, "tickets")
    if tcols:
        for name, dtype in TICKET_COLUMNS.items():
            if name not in tcols:
                _add_column_sqlite(engine, "tickets", f"{name} {dtype}")
                logger.info("migration.column_added", extra={"extra_data": {"table": "tickets", "column": name}})
        _create_index_if_not_exists(engine, "tickets", "ix_tickets_status", ["status"])
        _create_index_if_not_exists(engine, "tickets", "ix_tickets_assigned_user", ["assigned_user"])

    ucols = _column_names(engine, "users")
    if ucols:
        if _has_duplicate_emails(engine):
            logger.warning("migration.skipped_unique_email", extra={"extra_data": {"table": "users"}})
        else:
            _create_index_if_not_exists(engine, "users", "ix_users_email", ["email"], unique=True)
