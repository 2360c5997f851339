from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.clock import now_millis
from ..core.errors import NotFoundError, StorageError
from ..core.messages import ERROR_CANNOT_LOGOUT, ERROR_NOT_LOGGED_IN
from ..models.session import AuthSession


def create_session(db: Session, token: str, user_id: int) -> AuthSession:
    row = AuthSession(token=token, user_id=user_id, created=now_millis())
    try:
        db.add(row)
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError("Could not store session") from exc
    db.refresh(row)
    return row


def session_exists(db: Session, token: str) -> bool:
    try:
        found = db.execute(select(AuthSession.id).where(AuthSession.token == token)).first()
    except SQLAlchemyError as exc:
        raise StorageError(ERROR_NOT_LOGGED_IN) from exc
    return found is not None


def delete_session(db: Session, token: str) -> None:
    try:
        removed = db.execute(delete(AuthSession).where(AuthSession.token == token)).rowcount
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError(ERROR_CANNOT_LOGOUT) from exc
    if not removed:
        raise NotFoundError(ERROR_NOT_LOGGED_IN)


def list_session_tokens(db: Session) -> list[tuple[int, str]]:
    try:
        return [tuple(row) for row in db.execute(select(AuthSession.id, AuthSession.token)).all()]
    except SQLAlchemyError as exc:
        raise StorageError("Could not read sessions") from exc


def delete_sessions_by_id(db: Session, session_ids: list[int]) -> int:
    if not session_ids:
        return 0
    try:
        removed = db.execute(delete(AuthSession).where(AuthSession.id.in_(session_ids))).rowcount
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError("Could not delete sessions") from exc
    return removed or 0
