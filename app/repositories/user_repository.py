from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from app import models
from app.db.guard import store_guard
from app.services.lookup_cache import LookupCache


@dataclass(frozen=True)
class UserRecord:
    """Immutable user snapshot held in the lookup cache."""

    id: int
    name: str
    address: str | None
    email: str
    password_hash: str
    phone_number: str | None
    created_at: datetime
    updated_at: datetime


class UserRepository:
    """Cached user access keyed by email; every write refreshes or drops the entry."""

    def __init__(self, db: Session, cache: LookupCache) -> None:
        self._db = db
        self._cache = cache

    @staticmethod
    def cache_key(email: str) -> str:
        return f"user:{email}"

    def find_by_email(self, email: str) -> UserRecord | None:
        cached = self._cache.get(self.cache_key(email))
        if cached is not None:
            return cached

        with store_guard(self._db, "looking up a user"):
            user = self._db.scalar(select(models.User).where(models.User.email == email))
        if user is None:
            return None

        record = self._snapshot(user)
        self._cache.set(self.cache_key(email), record)
        return record

    def load(self, record: UserRecord) -> models.User | None:
        with store_guard(self._db, "loading a user"):
            user = self._db.get(models.User, record.id)
        if user is None:
            self._cache.invalidate(self.cache_key(record.email))
        return user

    def add(self, user: models.User) -> UserRecord:
        with store_guard(self._db, "registering a user"):
            self._db.add(user)
            self._db.commit()
            self._db.refresh(user)
        record = self._snapshot(user)
        self._cache.set(self.cache_key(record.email), record)
        return record

    def save(self, user: models.User) -> UserRecord:
        with store_guard(self._db, "updating a user"):
            self._db.commit()
            self._db.refresh(user)
        record = self._snapshot(user)
        self._cache.set(self.cache_key(record.email), record)
        return record

    def delete(self, user: models.User) -> None:
        email = user.email
        with store_guard(self._db, "deleting a user"):
            self._db.delete(user)
            self._db.commit()
        self._cache.invalidate(self.cache_key(email))

    @staticmethod
    def _snapshot(user: models.User) -> UserRecord:
        return UserRecord(
            id=user.id,
            name=user.name,
            address=user.address,
            email=user.email,
            password_hash=user.password_hash,
            phone_number=user.phone_number,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
