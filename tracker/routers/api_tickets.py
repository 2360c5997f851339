from __future__ import annotations

import re
from typing import Optional

from fastapi import APIRouter, Body, Depends, Path
from sqlalchemy.orm import Session

from ..core.errors import ClientError
from ..core.messages import ERROR_INVALID_ID
from ..crud.tickets import (
    create_ticket,
    delete_ticket,
    edit_ticket,
    filter_tickets,
    get_ticket,
    list_tickets,
)
from ..db.session import get_db
from ..deps.auth import require_session
from ..schemas.ticket import TicketCreate, TicketFilter, TicketOut, TicketUpdate

router = APIRouter(tags=["tickets"])

TICKET_ID_PATTERN = re.compile(r"-?[0-9]+")


def valid_ticket_id(ticket_id: str = Path(..., description="Positive integer ticket id")) -> int:
    # Plain ASCII digits only; int() would also take "1_0" or " 7 ".
    if not TICKET_ID_PATTERN.fullmatch(ticket_id):
        raise ClientError(ERROR_INVALID_ID)
    value = int(ticket_id)
    if value < 1:
        raise ClientError(ERROR_INVALID_ID)
    return value


@router.post(
    "/tickets",
    response_model=TicketOut,
    status_code=201,
    dependencies=[Depends(require_session)],
)
def api_create(payload: TicketCreate, db: Session = Depends(get_db)):
    return create_ticket(db, payload.title, payload.body, payload.labels, payload.assigned_user)


@router.get("/tickets", response_model=list[TicketOut])
def api_list(db: Session = Depends(get_db)):
    return list_tickets(db)


@router.get("/tickets/{ticket_id}", response_model=TicketOut)
def api_get(ticket_id: int = Depends(valid_ticket_id), db: Session = Depends(get_db)):
    return get_ticket(db, ticket_id)


@router.post(
    "/tickets/{ticket_id}",
    response_model=TicketOut,
    dependencies=[Depends(require_session)],
)
def api_edit(
    payload: TicketUpdate,
    ticket_id: int = Depends(valid_ticket_id),
    db: Session = Depends(get_db),
):
    return edit_ticket(db, ticket_id, payload.title, payload.body, payload.labels, payload.status)


@router.delete(
    "/tickets/{ticket_id}",
    response_model=TicketOut,
    dependencies=[Depends(require_session)],
)
def api_delete(ticket_id: int = Depends(valid_ticket_id), db: Session = Depends(get_db)):
    return delete_ticket(db, ticket_id)


@router.post("/filter", response_model=list[TicketOut])
def api_filter(
    criteria: Optional[TicketFilter] = Body(default=None),
    db: Session = Depends(get_db),
):
    return filter_tickets(db, criteria or TicketFilter())
