from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.errors import ConflictError, NotFoundError, StorageError
from ..core.messages import (
    ERROR_COULD_NOT_CREATE_USER,
    ERROR_NO_USER_FOUND,
    ERROR_USER_ALREADY_EXISTS,
)
from ..models.user import User


def find_user_by_email(db: Session, email: str) -> User | None:
    try:
        return db.execute(select(User).where(User.email == email)).scalars().first()
    except SQLAlchemyError as exc:
        raise StorageError(ERROR_NO_USER_FOUND) from exc


def get_user_by_email(db: Session, email: str) -> User:
    user = find_user_by_email(db, email)
    if user is None:
        raise NotFoundError(ERROR_NO_USER_FOUND)
    return user


def get_user(db: Session, user_id: int) -> User:
    try:
        user = db.get(User, user_id)
    except SQLAlchemyError as exc:
        raise StorageError(ERROR_NO_USER_FOUND) from exc
    if user is None:
        raise NotFoundError(ERROR_NO_USER_FOUND)
    return user


def create_user(db: Session, display_name: str, email: str, password_hash: str) -> User:
    """Insert a user whose password has already been hashed."""

    if find_user_by_email(db, email) is not None:
        raise ConflictError(ERROR_USER_ALREADY_EXISTS)
    user = User(display_name=display_name, email=email, password=password_hash)
    try:
        db.add(user)
        db.commit()
    except IntegrityError as exc:
        # Lost a race against a concurrent signup for the same email.
        db.rollback()
        raise ConflictError(ERROR_USER_ALREADY_EXISTS) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError(ERROR_COULD_NOT_CREATE_USER) from exc
    db.refresh(user)
    return user
