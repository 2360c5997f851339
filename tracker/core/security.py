from __future__ import annotations

import hashlib
import hmac
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

import bcrypt
from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

from .config import settings

ALGORITHM = "HS256"
AUDIENCE = "ticket-tracker-clients"
ISSUER = "ticket-tracker"


class IssuedToken(BaseModel):
    token: str
    expires_at: datetime
    expires_in: int


class TokenClaims(BaseModel):
    sub: str
    exp: datetime
    iat: datetime
    jti: str
    aud: str
    iss: str

    @property
    def user_id(self) -> int:
        return int(self.sub)


def _now() -> datetime:
    return datetime.now(tz=timezone.utc)


def _peppered(plain: str) -> bytes:
    # bcrypt only reads the first 72 bytes; the hex digest keeps every
    # password well under that while binding it to HASH_SECRET.
    digest = hmac.new(settings.HASH_SECRET.encode("utf-8"), plain.encode("utf-8"), hashlib.sha256)
    return digest.hexdigest().encode("ascii")


def hash_password(plain: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(_peppered(plain), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_peppered(plain), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


def issue_token(user_id: int, expires_delta: timedelta | None = None) -> IssuedToken:
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_TTL_MIN)
    now = _now()
    expires_at = now + expires_delta
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int(expires_at.timestamp()),
        "jti": uuid4().hex,
        "aud": AUDIENCE,
        "iss": ISSUER,
    }
    token = jwt.encode(payload, settings.JWT_SECRET, algorithm=ALGORITHM)
    return IssuedToken(
        token=token,
        expires_at=expires_at,
        expires_in=max(int(expires_delta.total_seconds()), 0),
    )


def decode_token(token: str) -> TokenClaims:
    """Verify signature, audience, issuer and expiry of ``token``."""

    try:
        decoded = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[ALGORITHM],
            audience=AUDIENCE,
            issuer=ISSUER,
        )
    except JWTError as exc:
        raise ValueError("Invalid token") from exc
    try:
        return TokenClaims.model_validate(decoded)
    except ValidationError as exc:
        raise ValueError("Invalid token payload") from exc
