from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core.ticket_types import Label, Status


class TicketBase(BaseModel):
    title: str
    body: str
    labels: list[Label]


class TicketCreate(TicketBase):
    assigned_user: Optional[int] = None
    # Accepted for compatibility; new tickets always start out Open.
    status: Optional[Status] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Login button broken",
                "body": "Nothing happens on click",
                "labels": ["Bug"],
                "assigned_user": 1,
            }
        }
    )


class TicketUpdate(TicketBase):
    status: Status


class TicketOut(BaseModel):
    id: int
    title: str
    body: str
    created: str
    last_modified: str
    labels: list[Label] = Field(default_factory=list)
    assigned_user: Optional[int] = None
    status: Status

    model_config = ConfigDict(from_attributes=True)


class TicketFilter(BaseModel):
    """Every supplied criterion must hold; omitted ones always match."""

    title: Optional[str] = None
    assigned_user: Optional[int] = None
    unassigned: bool = False
    labels: Optional[list[Label]] = None
    status: Optional[Status] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"labels": ["Bug", "InProgress"], "status": "Open"}
        }
    )
