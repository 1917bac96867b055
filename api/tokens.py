import time

import jwt
from django.conf import settings

from .exceptions import InvalidTokenError


def issue_token(user: dict) -> str:
    """Sign a session token for a user record (needs "id" and "username")."""
    now = int(time.time())
    payload = {
        "id": user["id"],
        "username": user.get("username"),
        "iat": now,
        "exp": now + settings.TOKEN_EXPIRE_SECONDS,
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as exc:
        raise InvalidTokenError("token expired") from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError(str(exc)) from exc
