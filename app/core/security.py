"""Bearer token issuance and the identity context resolved from it."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from app.core.config import Settings
from app.core.errors import UnauthenticatedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentityContext:
    """The authenticated caller; passed explicitly into every service call."""

    user_id: int
    email: str
    name: str


def create_access_token(identity: IdentityContext, settings: Settings) -> tuple[str, int]:
    """Sign a token for ``identity`` and return it with its lifetime in seconds."""

    lifetime = timedelta(minutes=settings.jwt_expire_minutes)
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": identity.email,
        "userId": identity.user_id,
        "userEmail": identity.email,
        "name": identity.name,
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + lifetime,
    }
    token = jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return token, int(lifetime.total_seconds())


def decode_access_token(token: str, settings: Settings) -> IdentityContext:
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
    except jwt.ExpiredSignatureError as exc:
        raise UnauthenticatedError("Token has expired") from exc
    except jwt.InvalidTokenError as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise UnauthenticatedError("Invalid token") from exc

    try:
        return IdentityContext(
            user_id=int(payload["userId"]),
            email=str(payload["userEmail"]),
            name=str(payload.get("name", "")),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise UnauthenticatedError("Token is missing identity claims") from exc


def ensure_identity(identity: IdentityContext | None) -> IdentityContext:
    """Short-circuit before any store access when no caller is known."""

    if identity is None or identity.user_id <= 0 or not identity.email:
        raise UnauthenticatedError()
    return identity
