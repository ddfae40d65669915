"""Salted password hashing and the credential gate in front of mutations."""

import logging

from werkzeug.security import check_password_hash, generate_password_hash

from app.core.errors import ForbiddenError

logger = logging.getLogger(__name__)


def hash_secret(secret: str) -> str:
    """Return a salted one-way hash suitable for storage."""

    return generate_password_hash(secret)


def authorize(stored_hash: str | None, supplied_secret: str | None) -> bool:
    """Return True only when ``supplied_secret`` matches ``stored_hash``."""

    if not stored_hash or not supplied_secret:
        return False
    try:
        return check_password_hash(stored_hash, supplied_secret)
    except ValueError:
        # Unknown or malformed hash format.
        logger.warning("Stored credential hash could not be parsed")
        return False


def require_secret(stored_hash: str | None, supplied_secret: str | None, subject: str) -> None:
    """Raise ForbiddenError unless the secret is valid; callers mutate only after this returns."""

    if not authorize(stored_hash, supplied_secret):
        logger.warning("Credential check failed for %s", subject)
        raise ForbiddenError("Invalid credentials")
