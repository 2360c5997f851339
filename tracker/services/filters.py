"""Boolean predicates used by the ticket filter.

Each predicate treats a missing criterion as a match, so ``ticket_matches``
is simply the AND of all of them.
"""

from __future__ import annotations

from typing import Iterable, Protocol

from ..core.ticket_types import Label, Status


class FilterCriteria(Protocol):
    title: str | None
    assigned_user: int | None
    unassigned: bool
    labels: list[Label] | None
    status: Status | None


def matches_title(title: str | None, ticket) -> bool:
    if title is None:
        return True
    # "Bug" does not match "bug".
    return title in ticket.title


def matches_assigned_user(user_id: int | None, ticket) -> bool:
    if user_id is None:
        return True
    return ticket.assigned_user is not None and ticket.assigned_user == user_id


def matches_unassigned(unassigned: bool, ticket) -> bool:
    if not unassigned:
        return True
    return ticket.assigned_user is None


def matches_labels(labels: Iterable[Label] | None, ticket) -> bool:
    if labels is None:
        return True
    present = set(ticket.labels)
    return all(Label(label) in present for label in labels)


def matches_status(status: Status | str | None, ticket) -> bool:
    if status is None:
        return True
    return Status(ticket.status) == Status(status)


def ticket_matches(criteria: FilterCriteria, ticket) -> bool:
    return (
        matches_title(criteria.title, ticket)
        and matches_assigned_user(criteria.assigned_user, ticket)
        and matches_unassigned(criteria.unassigned, ticket)
        and matches_labels(criteria.labels, ticket)
        and matches_status(criteria.status, ticket)
    )


__all__ = [
    "FilterCriteria",
    "matches_assigned_user",
    "matches_labels",
    "matches_status",
    "matches_title",
    "matches_unassigned",
    "ticket_matches",
]
