from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.clock import now_millis
from ..core.errors import NotFoundError, StorageError
from ..core.messages import (
    ERROR_COULD_NOT_CREATE_TICKET,
    ERROR_COULD_NOT_DELETE,
    ERROR_COULD_NOT_GET,
    ERROR_COULD_NOT_UPDATE,
    ERROR_NOT_FOUND,
    with_id,
)
from ..core.ticket_types import Label, Status, encode_labels
from ..models.ticket import Ticket
from ..services.filters import FilterCriteria, ticket_matches

logger = logging.getLogger(__name__)


def create_ticket(
    db: Session,
    title: str,
    body: str,
    labels: Iterable[Label] | None,
    assigned_user: int | None = None,
) -> Ticket:
    now = now_millis()
    ticket = Ticket(
        title=title,
        body=body,
        created=now,
        last_modified=now,
        labels_blob=encode_labels(labels),
        assigned_user=assigned_user,
        # Creating a closed ticket makes no sense, whatever the client sent.
        status=Status.OPEN.value,
    )
    try:
        db.add(ticket)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError(ERROR_COULD_NOT_CREATE_TICKET) from exc
    db.refresh(ticket)
    logger.info("ticket.created", extra={"extra_data": {"ticket_id": ticket.id}})
    return ticket


def list_tickets(db: Session) -> list[Ticket]:
    try:
        return list(db.execute(select(Ticket).order_by(Ticket.id)).scalars().all())
    except SQLAlchemyError as exc:
        raise StorageError(ERROR_COULD_NOT_GET) from exc


def get_ticket(db: Session, ticket_id: int) -> Ticket:
    try:
        ticket = db.get(Ticket, ticket_id)
    except SQLAlchemyError as exc:
        raise StorageError(ERROR_COULD_NOT_GET) from exc
    if ticket is None:
        raise NotFoundError(with_id(ERROR_NOT_FOUND, ticket_id))
    return ticket


def edit_ticket(
    db: Session,
    ticket_id: int,
    title: str,
    body: str,
    labels: Iterable[Label] | None,
    status: Status,
) -> Ticket:
    """Overwrite the mutable fields of a ticket and bump ``last_modified``."""

    ticket = get_ticket(db, ticket_id)
    ticket.title = title
    ticket.body = body
    ticket.labels_blob = encode_labels(labels)
    ticket.status = Status(status).value
    ticket.last_modified = now_millis()
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError(with_id(ERROR_COULD_NOT_UPDATE, ticket_id)) from exc
    db.refresh(ticket)
    logger.info("ticket.updated", extra={"extra_data": {"ticket_id": ticket_id}})
    return ticket


def delete_ticket(db: Session, ticket_id: int) -> Ticket:
    """Remove a ticket and hand back the row as it was before deletion."""

    ticket = get_ticket(db, ticket_id)
    try:
        db.delete(ticket)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError(with_id(ERROR_COULD_NOT_DELETE, ticket_id)) from exc
    logger.info("ticket.deleted", extra={"extra_data": {"ticket_id": ticket_id}})
    return ticket


def filter_tickets(db: Session, criteria: FilterCriteria) -> list[Ticket]:
    # Labels live in a JSON text column, so only the exact-match criteria can
    # be pushed into SQL; the predicates decide the final result.
    stmt = select(Ticket)
    if criteria.status is not None:
        stmt = stmt.where(Ticket.status == Status(criteria.status).value)
    if criteria.assigned_user is not None:
        stmt = stmt.where(Ticket.assigned_user == criteria.assigned_user)
    if criteria.unassigned:
        stmt = stmt.where(Ticket.assigned_user.is_(None))
    try:
        rows = db.execute(stmt.order_by(Ticket.id)).scalars().all()
    except SQLAlchemyError as exc:
        raise StorageError(ERROR_COULD_NOT_GET) from exc
    return [ticket for ticket in rows if ticket_matches(criteria, ticket)]
