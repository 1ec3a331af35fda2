from __future__ import annotations
from datetime import datetime, timedelta, timezone
import secrets

from jose import JWTError, jwt

from jobsync.core.config import settings


def verify_login(username: str, password: str) -> bool:
    user_ok = secrets.compare_digest(username.encode(), settings.auth_username.encode())
    password_ok = secrets.compare_digest(password.encode(), settings.auth_password.encode())
    return user_ok and password_ok


def create_access_token(subject: str, expires_in: timedelta | None = None) -> str:
    lifetime = expires_in or timedelta(minutes=settings.jwt_expire_minutes)
    now = datetime.now(timezone.utc)
    claims = {"sub": subject, "iat": now, "exp": now + lifetime}
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def token_subject(token: str) -> str | None:
    """Return the ``sub`` claim of a valid operator token, else None."""
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    return claims.get("sub")
