"""Ticket store behaviour against an in-memory SQLite database."""

import os
import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from tracker.core.errors import NotFoundError, StorageError
from tracker.core.ticket_types import Label, Status
from tracker.crud import tickets as tickets_crud
from tracker.crud.tickets import (
    create_ticket,
    delete_ticket,
    edit_ticket,
    get_ticket,
    list_tickets,
)
from tracker.db.session import Base
from tracker.models.ticket import Ticket


@pytest.fixture()
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def _count(db_session) -> int:
    return db_session.execute(select(func.count()).select_from(Ticket)).scalar_one()


def test_create_ticket_sets_timestamps_and_open_status(db_session):
    ticket = create_ticket(db_session, "Test Title", "Test Body", [Label.BUG], assigned_user=1)

    assert ticket.id is not None
    assert ticket.status == Status.OPEN.value
    assert ticket.created == ticket.last_modified
    assert ticket.created.isdigit()
    assert ticket.assigned_user == 1


def test_labels_are_deduplicated_in_declaration_order(db_session):
    ticket = create_ticket(
        db_session,
        "Labels",
        "Body",
        [Label.IN_PROGRESS, Label.BUG, Label.IN_PROGRESS],
    )

    assert ticket.labels == [Label.BUG, Label.IN_PROGRESS]
    assert ticket.labels_blob == '["Bug", "InProgress"]'


def test_list_tickets_decodes_label_column(db_session):
    create_ticket(db_session, "First", "Body", [Label.FEATURE])
    create_ticket(db_session, "Second", "Body", [])

    tickets = list_tickets(db_session)

    assert [t.title for t in tickets] == ["First", "Second"]
    assert tickets[0].labels == [Label.FEATURE]
    assert tickets[1].labels == []


def test_unreadable_label_column_reads_as_empty(db_session):
    ticket = create_ticket(db_session, "Broken", "Body", [Label.BUG])
    ticket.labels_blob = "not json"
    db_session.commit()

    assert get_ticket(db_session, ticket.id).labels == []


def test_get_missing_ticket_raises_not_found(db_session):
    with pytest.raises(NotFoundError):
        get_ticket(db_session, 42)


def test_edit_overwrites_fields_and_bumps_last_modified(db_session, monkeypatch):
    monkeypatch.setattr(tickets_crud, "now_millis", lambda: "1688587842815")
    ticket = create_ticket(db_session, "Old", "Old body", [Label.BUG], assigned_user=3)

    monkeypatch.setattr(tickets_crud, "now_millis", lambda: "1688587900000")
    updated = edit_ticket(db_session, ticket.id, "New", "New body", [Label.DONE], Status.CLOSED)

    assert updated.title == "New"
    assert updated.body == "New body"
    assert updated.labels == [Label.DONE]
    assert updated.status == "Closed"
    assert updated.created == "1688587842815"
    assert updated.last_modified == "1688587900000"
    # Assignee is not part of an edit.
    assert updated.assigned_user == 3


def test_edit_missing_ticket_leaves_table_unchanged(db_session):
    create_ticket(db_session, "Only", "Body", [Label.BUG])

    with pytest.raises(NotFoundError):
        edit_ticket(db_session, 999, "X", "Y", [], Status.CLOSED)

    tickets = list_tickets(db_session)
    assert len(tickets) == 1
    assert tickets[0].title == "Only"


def test_delete_twice_second_call_not_found(db_session):
    ticket = create_ticket(db_session, "Gone", "Body", [])

    deleted = delete_ticket(db_session, ticket.id)
    assert deleted.title == "Gone"
    assert _count(db_session) == 0

    with pytest.raises(NotFoundError):
        delete_ticket(db_session, ticket.id)


def _fail_commits(monkeypatch, db_session):
    def broken_commit():
        raise SQLAlchemyError("disk I/O error")

    monkeypatch.setattr(db_session, "commit", broken_commit)


def test_failed_create_rolls_back_and_session_stays_usable(db_session, monkeypatch):
    _fail_commits(monkeypatch, db_session)

    with pytest.raises(StorageError) as excinfo:
        create_ticket(db_session, "Lost", "Body", [Label.BUG])
    assert isinstance(excinfo.value.__cause__, SQLAlchemyError)

    monkeypatch.undo()
    assert _count(db_session) == 0
    assert create_ticket(db_session, "Kept", "Body", []).title == "Kept"


def test_failed_edit_keeps_previous_values(db_session, monkeypatch):
    ticket = create_ticket(db_session, "Before", "Body", [Label.BUG])
    _fail_commits(monkeypatch, db_session)

    with pytest.raises(StorageError):
        edit_ticket(db_session, ticket.id, "After", "Body", [], Status.CLOSED)

    monkeypatch.undo()
    reloaded = get_ticket(db_session, ticket.id)
    assert reloaded.title == "Before"
    assert reloaded.status == "Open"
    assert reloaded.labels == [Label.BUG]
