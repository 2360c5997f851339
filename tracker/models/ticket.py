"""SQLAlchemy model for tracked tickets."""

from __future__ import annotations

from sqlalchemy import Column, Integer, Text

from ..core.ticket_types import Label, Status, decode_labels, encode_labels
from ..db.session import Base


class Ticket(Base):
    __tablename__ = "tickets"
    __allow_unmapped__ = True

    id = Column(Integer, primary_key=True, index=True)
    title = Column(Text, nullable=False)
    body = Column(Text, nullable=False)
    # Epoch milliseconds, stored as text.
    created = Column(Text, nullable=False)
    last_modified = Column(Text, nullable=False)
    labels_blob = Column("labels", Text, nullable=False, default="[]")
    # Weak reference to users.id, no foreign key.
    assigned_user = Column(Integer, nullable=True, index=True)
    status = Column(Text, nullable=False, default=Status.OPEN.value, index=True)

    @property
    def labels(self) -> list[Label]:
        return decode_labels(self.labels_blob)

    @labels.setter
    def labels(self, value) -> None:
        self.labels_blob = encode_labels(value)

    def __repr__(self) -> str:
        return f"<Ticket id={self.id} status={self.status} title={self.title!r}>"


__all__ = ["Ticket"]
