"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from tasket.domain.entities import UserSummary
from tasket.domain.errors import AuthenticationError
from tasket.infrastructure.database import get_db
from tasket.infrastructure.realtime import RealtimeHub
from tasket.infrastructure.repositories import EmployeeRepository
from tasket.infrastructure.security import resolve_user_id

# Tokens are issued by the login service; this only reads the header.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> UserSummary:
    """Return the active employee behind the bearer token."""

    try:
        user_id = resolve_user_id(token)
    except AuthenticationError as exc:
        raise _unauthorized("Invalid credentials") from exc

    user = EmployeeRepository(db).get_active_summary(user_id)
    if user is None:
        raise _unauthorized("User not found")
    return user


def get_realtime_hub(request: Request) -> RealtimeHub:
    """Return the hub created by the application lifespan."""

    return request.app.state.realtime_hub
