from __future__ import annotations

from sqlalchemy import Column, Integer, Text

from ..db.session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    display_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False, unique=True, index=True)
    # bcrypt hash of the peppered password, never the plaintext.
    password = Column(Text, nullable=False)


__all__ = ["User"]
