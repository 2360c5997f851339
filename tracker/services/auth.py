"""Signup, login, logout and per-request token checks.

State machine: anonymous -> authenticated (login writes a session row) ->
anonymous (logout deletes the row, or the token expires). A request is
authenticated only if its token has a session row *and* verifies.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from sqlalchemy.orm import Session

from ..core.errors import AuthenticationError
from ..core.messages import ERROR_INCORRECT_PASSWORD, ERROR_INVALID_TOKEN, ERROR_NOT_LOGGED_IN
from ..core.security import IssuedToken, TokenClaims, decode_token, hash_password, issue_token, verify_password
from ..crud import sessions as session_store
from ..crud import users as user_store
from ..models.user import User

logger = logging.getLogger(__name__)


def signup(db: Session, display_name: str, email: str, password: str) -> User:
    user = user_store.create_user(db, display_name, email, hash_password(password))
    logger.info("auth.signup", extra={"extra_data": {"user_id": user.id}})
    return user


def login(db: Session, email: str, password: str, expires_delta: timedelta | None = None) -> IssuedToken:
    user = user_store.get_user_by_email(db, email)
    if not verify_password(password, user.password):
        logger.info("auth.login_rejected", extra={"extra_data": {"user_id": user.id}})
        raise AuthenticationError(ERROR_INCORRECT_PASSWORD)
    issued = issue_token(user.id, expires_delta)
    session_store.create_session(db, issued.token, user.id)
    logger.info("auth.login", extra={"extra_data": {"user_id": user.id}})
    return issued


def logout(db: Session, token: str) -> None:
    session_store.delete_session(db, token)
    logger.info("auth.logout")


def authenticate(db: Session, token: str) -> TokenClaims:
    if not token or not session_store.session_exists(db, token):
        raise AuthenticationError(ERROR_NOT_LOGGED_IN)
    try:
        return decode_token(token)
    except ValueError as exc:
        # Expired rows stay in the table; they just stop authenticating.
        raise AuthenticationError(ERROR_INVALID_TOKEN) from exc


def purge_expired_sessions(db: Session) -> int:
    """Delete session rows whose token no longer verifies.

    Nothing schedules this; expiry is enforced lazily by ``authenticate``.
    """

    stale: list[int] = []
    for session_id, token in session_store.list_session_tokens(db):
        try:
            decode_token(token)
        except ValueError:
            stale.append(session_id)
    removed = session_store.delete_sessions_by_id(db, stale)
    if removed:
        logger.info("auth.sessions_purged", extra={"extra_data": {"count": removed}})
    return removed
