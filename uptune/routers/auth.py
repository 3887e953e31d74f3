"""
Optional user identity from a JWT in the ``access_token`` cookie or a bearer header.

Uptune never requires login: a missing or invalid token simply means the
caller is a guest and must identify itself with a guest session id.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request
from jose import JWTError, jwt

from uptune.config import settings

COOKIE_KEY = "access_token"


def create_access_token(data: dict) -> str:
    """Create a signed JWT with an expiry claim."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def _token_from_request(request: Request) -> Optional[str]:
    auth_header = request.headers.get("authorization", "")
    if auth_header.lower().startswith("bearer "):
        return auth_header[7:].strip() or None
    return request.cookies.get(COOKIE_KEY)


async def get_current_user_id(request: Request) -> Optional[str]:
    """
    Decode the caller's JWT and return its ``sub`` claim.
    Returns None when no valid token is present.
    """
    token = _token_from_request(request)
    if not token:
        return None
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return None

    user_id = payload.get("sub")
    return str(user_id) if user_id else None
