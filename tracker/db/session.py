"""SQLAlchemy engine, session factory and the per-request dependency."""

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from ..core.config import settings

# SQLite connections are handed between FastAPI worker threads.
CONNECT_ARGS = {"check_same_thread": False} if settings.is_sqlite else {}

# An in-memory database only lives as long as its connection, so keep one.
ENGINE_ARGS = {"poolclass": StaticPool} if settings.is_memory_sqlite else {}

engine = create_engine(settings.DB_URL, connect_args=CONNECT_ARGS, **ENGINE_ARGS)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Yield a session for one request and always close it."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
