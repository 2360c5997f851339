import os
import sys
from pathlib import Path
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from tracker.core.ticket_types import Label, Status
from tracker.crud.tickets import create_ticket, edit_ticket, filter_tickets
from tracker.db.session import Base
from tracker.schemas.ticket import TicketFilter
from tracker.services.filters import (
    matches_assigned_user,
    matches_labels,
    matches_status,
    matches_title,
    matches_unassigned,
    ticket_matches,
)


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


def _ticket(**overrides):
    fields = {
        "title": "Test Title",
        "labels": [Label.BUG, Label.IN_PROGRESS],
        "assigned_user": 1,
        "status": "Open",
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)


def test_absent_criteria_always_match():
    ticket = _ticket()

    assert matches_title(None, ticket)
    assert matches_assigned_user(None, ticket)
    assert matches_unassigned(False, ticket)
    assert matches_labels(None, ticket)
    assert matches_status(None, ticket)
    assert ticket_matches(TicketFilter(), ticket)


def test_title_is_case_sensitive_substring():
    ticket = _ticket(title="Login Bug on Safari")

    assert matches_title("Bug on", ticket)
    assert not matches_title("bug on", ticket)


def test_labels_require_every_requested_label():
    ticket = _ticket()

    assert matches_labels([Label.IN_PROGRESS, Label.BUG], ticket)
    assert matches_labels([], ticket)
    assert not matches_labels([Label.BUG, Label.DONE], ticket)


def test_missing_assignee_never_matches_a_user_id():
    ticket = _ticket(assigned_user=None)

    assert not matches_assigned_user(0, ticket)
    assert not matches_assigned_user(1, ticket)
    assert matches_unassigned(True, ticket)
    assert not matches_unassigned(True, _ticket(assigned_user=0))


def test_status_equality_accepts_enum_or_text():
    ticket = _ticket(status="Closed")

    assert matches_status(Status.CLOSED, ticket)
    assert matches_status("Closed", ticket)
    assert not matches_status(Status.OPEN, ticket)


def test_filter_example_from_one_row_store(db_session):
    ticket = create_ticket(
        db_session,
        "Test Title",
        "Test Body",
        [Label.BUG, Label.IN_PROGRESS],
        assigned_user=1,
    )

    by_labels = filter_tickets(db_session, TicketFilter(labels=[Label.IN_PROGRESS, Label.BUG]))
    assert [t.id for t in by_labels] == [ticket.id]

    assert filter_tickets(db_session, TicketFilter(assigned_user=999)) == []


def test_filter_without_criteria_returns_everything(db_session):
    ids = [create_ticket(db_session, f"T{i}", "B", []).id for i in range(3)]

    assert [t.id for t in filter_tickets(db_session, TicketFilter())] == ids


def test_filter_combines_criteria_with_and(db_session):
    keep = create_ticket(db_session, "Crash on save", "B", [Label.BUG], assigned_user=2)
    create_ticket(db_session, "Crash on load", "B", [Label.FEATURE], assigned_user=2)
    closed = create_ticket(db_session, "Crash on exit", "B", [Label.BUG], assigned_user=2)
    edit_ticket(db_session, closed.id, closed.title, closed.body, [Label.BUG], Status.CLOSED)
    unassigned = create_ticket(db_session, "Crash on idle", "B", [Label.BUG])

    criteria = TicketFilter(title="Crash", labels=[Label.BUG], status=Status.OPEN, assigned_user=2)
    assert [t.id for t in filter_tickets(db_session, criteria)] == [keep.id]

    only_unassigned = filter_tickets(db_session, TicketFilter(unassigned=True))
    assert [t.id for t in only_unassigned] == [unassigned.id]

    closed_only = filter_tickets(db_session, TicketFilter(status=Status.CLOSED))
    assert [t.id for t in closed_only] == [closed.id]
