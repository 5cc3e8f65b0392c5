# app/core/security.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from app.core.errors import TokenExpiredError, TokenMalformedError, UnauthenticatedError
from app.core.settings import settings

logger = logging.getLogger(__name__)

_DURATION_RE = re.compile(
    r"^\s*(\d+)\s*(s|sec|secs|seconds?|m|min|mins|minutes?|h|hr|hrs|hours?|d|days?)?\s*$",
    re.IGNORECASE,
)
_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400}


@dataclass(frozen=True)
class Identity:
    """Identitatea apelantului, derivată strict din claim-urile token-ului."""
    id: str
    role: str
    email: Optional[str] = None


def parse_duration(raw: str) -> timedelta:
    """'24h' / '24 hours' / '30m' / '7d' / '3600' -> timedelta."""
    m = _DURATION_RE.match(raw or "")
    if not m:
        raise ValueError(f"Invalid duration: {raw!r}")
    amount = int(m.group(1))
    unit = (m.group(2) or "s").lower()
    return timedelta(seconds=amount * _UNIT_SECONDS[unit[0]])


def extract_token(authorization: Optional[str], x_access_token: Optional[str]) -> Optional[str]:
    """Preferă `Authorization: Bearer <token>`; altfel header-ul `x-access-token`."""
    auth = (authorization or "").strip()
    if auth.startswith("Bearer "):
        token = auth[len("Bearer "):].strip()
        return token or None
    fallback = (x_access_token or "").strip()
    return fallback or None


def create_access_token(
    user_id: str,
    role: str,
    email: Optional[str] = None,
    *,
    expires_in: Optional[timedelta] = None,
    secret: Optional[str] = None,
) -> str:
    now = datetime.now(timezone.utc)
    lifetime = expires_in if expires_in is not None else parse_duration(settings.TOKEN_EXPIRATION)
    claims: Dict[str, Any] = {
        "id": user_id,
        "role": role,
        "email": email,
        "iat": now,
        "exp": now + lifetime,
    }
    return jwt.encode(claims, secret or settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def authenticate(token: Optional[str]) -> Identity:
    """
    Verifică semnătura + expirarea și întoarce Identity.
    Nu citește nimic din DB: identitatea vine doar din claim-uri.
    """
    if not token:
        logger.info("Authentication failed: token not provided")
        raise UnauthenticatedError("Authentication required: send Authorization: Bearer <token>")

    try:
        claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        logger.info("Authentication failed: token expired")
        raise TokenExpiredError() from e
    except jwt.InvalidTokenError as e:
        logger.info("Authentication failed: %s", type(e).__name__)
        raise TokenMalformedError() from e

    user_id = claims.get("id")
    role = claims.get("role")
    if not user_id or not role:
        logger.info("Authentication failed: token without id/role claims")
        raise TokenMalformedError()

    return Identity(id=str(user_id), role=str(role), email=claims.get("email"))


__all__ = [
    "Identity",
    "authenticate",
    "create_access_token",
    "extract_token",
    "parse_duration",
]
