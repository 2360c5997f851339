from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.messages import SUCCESS_LOGOUT
from ..crud.users import get_user
from ..db.session import get_db
from ..deps.auth import AuthContext, require_session, require_token
from ..schemas.auth import LoginRequest, MessageResponse, SignupRequest, TokenResponse, UserOut
from ..services import auth as auth_service

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=UserOut, status_code=201, summary="Create an account")
def api_signup(payload: SignupRequest, db: Session = Depends(get_db)):
    return auth_service.signup(db, payload.display_name, payload.email, payload.password)


@router.post("/login", response_model=TokenResponse, summary="Exchange credentials for a bearer token")
def api_login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)):
    issued = auth_service.login(db, payload.email, payload.password)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=issued.token,
        max_age=issued.expires_in,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
    )
    return TokenResponse(access_token=issued.token, expires_in=issued.expires_in)


@router.post("/logout", response_model=MessageResponse, summary="Revoke the current session")
def api_logout(
    response: Response,
    token: str = Depends(require_token),
    db: Session = Depends(get_db),
):
    # Revocation only needs the row; an already-removed row is a 404.
    auth_service.logout(db, token)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return MessageResponse(message=SUCCESS_LOGOUT)


@router.get("/me", response_model=UserOut, summary="Current user")
def api_me(auth: AuthContext = Depends(require_session), db: Session = Depends(get_db)):
    return get_user(db, auth.user_id)
