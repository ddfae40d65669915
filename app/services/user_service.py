from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from app import models
from app.core.config import Settings
from app.core.errors import ConflictError, NotFoundError, UnauthenticatedError
from app.core.security import IdentityContext, create_access_token, ensure_identity
from app.repositories.customer_repository import CustomerRepository
from app.repositories.user_repository import UserRecord, UserRepository
from app.schemas.user import PasswordChange, UserRegister, UserUpdate
from app.services.credentials import authorize, hash_secret, require_secret
from app.services.lookup_cache import LookupCache

logger = logging.getLogger(__name__)


class UserService:
    """Registration, login and password-gated self-service for accounts."""

    def __init__(self, db: Session, cache: LookupCache) -> None:
        self._users = UserRepository(db, cache)
        self._customers = CustomerRepository(db, cache)

    def register(self, payload: UserRegister) -> UserRecord:
        if self._users.find_by_email(payload.email) is not None:
            raise ConflictError("A user with this email already exists")

        user = models.User(
            name=payload.name,
            email=payload.email,
            address=payload.address,
            phone_number=payload.phone_number,
            password_hash=hash_secret(payload.password),
        )
        record = self._users.add(user)
        logger.info("User %s registered", record.email)
        return record

    def login(self, email: str, password: str, settings: Settings) -> tuple[str, int, UserRecord]:
        """Verify credentials and issue a bearer token."""

        record = self._users.find_by_email(email)
        if record is None or not authorize(record.password_hash, password):
            logger.info("Failed login attempt for %s", email)
            raise UnauthenticatedError("Invalid email or password")

        token, expires_in = create_access_token(
            IdentityContext(user_id=record.id, email=record.email, name=record.name),
            settings,
        )
        return token, expires_in, record

    def resolve_identity(self, identity: IdentityContext | None) -> IdentityContext:
        """Confirm the token subject still exists; repeated calls are served from the cache."""

        identity = ensure_identity(identity)
        record = self._users.find_by_email(identity.email)
        if record is None or record.id != identity.user_id:
            raise UnauthenticatedError("Account no longer exists")
        return identity

    def get_profile(self, identity: IdentityContext) -> UserRecord:
        return self._own_record(identity)

    def edit_profile(self, identity: IdentityContext, payload: UserUpdate) -> UserRecord:
        record = self._own_record(identity)
        require_secret(record.password_hash, payload.password, f"user {record.email}")

        user = self._load(record)
        if payload.name is not None:
            user.name = payload.name
        if payload.address is not None:
            user.address = payload.address
        if payload.phone_number is not None:
            user.phone_number = payload.phone_number

        updated = self._users.save(user)
        logger.info("User %s updated their profile", updated.email)
        return updated

    def change_password(self, identity: IdentityContext, payload: PasswordChange) -> UserRecord:
        record = self._own_record(identity)
        require_secret(record.password_hash, payload.old_password, f"user {record.email}")

        user = self._load(record)
        user.password_hash = hash_secret(payload.new_password)
        updated = self._users.save(user)
        logger.info("User %s changed their password", updated.email)
        return updated

    def delete_account(self, identity: IdentityContext, password: str) -> UserRecord:
        record = self._own_record(identity)
        require_secret(record.password_hash, password, f"user {record.email}")

        # Cached customer snapshots still list this user among their owners.
        owned = self._customers.owned_emails(record.id)
        self._users.delete(self._load(record))
        for email in owned:
            self._customers.forget(email)
        logger.info("User %s deleted their account", record.email)
        return record

    def _own_record(self, identity: IdentityContext) -> UserRecord:
        identity = ensure_identity(identity)
        record = self._users.find_by_email(identity.email)
        if record is None or record.id != identity.user_id:
            raise NotFoundError("User not found")
        return record

    def _load(self, record: UserRecord) -> models.User:
        user = self._users.load(record)
        if user is None:
            raise NotFoundError("User not found")
        return user
