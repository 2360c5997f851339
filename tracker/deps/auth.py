from __future__ import annotations

from fastapi import Depends, Header, Request
from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy.orm import Session

from ..core.config import settings
from ..core.errors import AuthenticationError
from ..core.messages import ERROR_NOT_LOGGED_IN
from ..core.security import TokenClaims
from ..db.session import get_db
from ..middlewares import principal_ctx_var
from ..services.auth import authenticate


class AuthContext:
    def __init__(self, *, user_id: int, token: str, claims: TokenClaims) -> None:
        self.user_id = user_id
        self.token = token
        self.claims = claims


def _set_principal(request: Request, principal: str) -> None:
    principal_ctx_var.set(principal)
    request.state.principal = principal


def extract_token(request: Request, authorization: str | None) -> str | None:
    """Bearer header first, then the cookie written at login."""

    if authorization:
        scheme, credentials = get_authorization_scheme_param(authorization)
        if scheme.lower() == "bearer" and credentials:
            return credentials
        return None
    return request.cookies.get(settings.SESSION_COOKIE_NAME) or None


async def require_token(
    request: Request,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> str:
    """Presented bearer token, unchecked; 401 only when none was sent."""

    token = extract_token(request, authorization)
    if not token:
        raise AuthenticationError(ERROR_NOT_LOGGED_IN)
    return token


async def require_session(
    request: Request,
    token: str = Depends(require_token),
    db: Session = Depends(get_db),
) -> AuthContext:
    claims = authenticate(db, token)
    _set_principal(request, f"user:{claims.user_id}")
    request.state.token_claims = claims
    return AuthContext(user_id=claims.user_id, token=token, claims=claims)
