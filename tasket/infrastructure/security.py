"""Bearer token helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from tasket.config import get_settings
from tasket.domain.errors import AuthenticationError

_ALGORITHM = "HS256"
_BEARER_PREFIX = "Bearer "


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Sign ``data`` into a JWT. Used by the login collaborator and in tests."""

    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=_ALGORITHM)


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[_ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def strip_bearer_prefix(token: str) -> str:
    return token[len(_BEARER_PREFIX):] if token.startswith(_BEARER_PREFIX) else token


def resolve_user_id(token: object) -> int:
    """Verify ``token`` and return the user id from its ``sub`` claim."""

    if not token or not isinstance(token, str):
        raise AuthenticationError("No token provided")
    clean = strip_bearer_prefix(token.strip())
    if not clean:
        raise AuthenticationError("No token provided")
    try:
        payload = decode_access_token(clean)
    except ValueError as exc:
        raise AuthenticationError("Invalid token") from exc

    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError) as exc:
        raise AuthenticationError("Invalid token") from exc


__all__ = [
    "create_access_token",
    "decode_access_token",
    "resolve_user_id",
    "strip_bearer_prefix",
]
