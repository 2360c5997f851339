"""Server-side record of an issued bearer token.

A row existing is necessary but not sufficient: the token it holds must also
verify and be unexpired. Deleting the row is the only way to revoke it.
"""

from __future__ import annotations

from sqlalchemy import Column, Integer, Text

from ..db.session import Base


class AuthSession(Base):
    __tablename__ = "sessions"

    id = Column(Integer, primary_key=True, index=True)
    token = Column(Text, nullable=False, unique=True, index=True)
    user_id = Column(Integer, nullable=True, index=True)
    created = Column(Text, nullable=True)


__all__ = ["AuthSession"]
