"""
Session verification.

Login and token issuance belong to the identity provider. This module
only verifies the bearer token it hands out (claims ``sub`` = profile id
and ``email``) and resolves it to a Profile.
"""

from datetime import datetime, timedelta

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from bookclub.core.config import get_settings
from bookclub.core.database import get_db
from bookclub.core.exceptions import PermissionDeniedError
from bookclub.core.logging import get_logger, profile_id_var
from bookclub.models.profile import Profile

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(profile_id: int, email: str, expires_delta: timedelta | None = None) -> str:
    """Sign a session token the way the identity provider does (dev tooling and tests)."""
    settings = get_settings()
    expire = datetime.utcnow() + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {"sub": str(profile_id), "email": email, "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> tuple[int, str] | None:
    """Return (profile id, email) for a valid token, None otherwise."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None

    sub = payload.get("sub")
    email = payload.get("email")
    if not sub or not email:
        return None
    try:
        return int(sub), email
    except (TypeError, ValueError):
        return None


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Profile:
    """
    FastAPI dependency resolving the session to the caller's profile.

    Runs on the event loop, so the profile id it puts on the logging
    context carries into the endpoint's threadpool call.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    claims = decode_access_token(credentials.credentials)
    if claims is None:
        raise credentials_exception
    profile_id, email = claims

    if not get_settings().is_email_allowed(email):
        logger.warning(
            "Rejected session outside the team domain",
            extra={"extra_fields": {"profile_id": profile_id}},
        )
        raise credentials_exception

    profile = db.query(Profile).filter(Profile.id == profile_id).first()
    if not profile or profile.email.lower() != email.lower():
        raise credentials_exception
    profile_id_var.set(profile.id)
    return profile


def ensure_admin(profile: Profile) -> None:
    if not profile.is_admin:
        raise PermissionDeniedError("Admins only.")


def require_admin(current_user: Profile = Depends(get_current_user)) -> Profile:
    """FastAPI dependency for admin-only mutations."""
    ensure_admin(current_user)
    return current_user
