from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from app import models
from app.db.guard import store_guard
from app.models.enums import CustomerStatus
from app.services.lookup_cache import LookupCache


@dataclass(frozen=True)
class CustomerRecord:
    """Immutable customer snapshot held in the lookup cache."""

    id: int
    name: str
    address: str | None
    email: str
    password_hash: str
    phone_number: str | None
    status: CustomerStatus
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None
    owner_ids: frozenset[int]

    def is_owned_by(self, user_id: int) -> bool:
        return user_id in self.owner_ids


class CustomerRepository:
    """Single access path for customers; keeps the email cache coherent with writes."""

    def __init__(self, db: Session, cache: LookupCache) -> None:
        self._db = db
        self._cache = cache

    @staticmethod
    def cache_key(email: str) -> str:
        return f"customer:{email}"

    def find_by_email(self, email: str) -> CustomerRecord | None:
        cached = self._cache.get(self.cache_key(email))
        if cached is not None:
            return cached

        with store_guard(self._db, "looking up a customer"):
            customer = self._db.scalar(select(models.Customer).where(models.Customer.email == email))
            if customer is None:
                return None
            record = self._snapshot(customer)

        self._cache.set(self.cache_key(email), record)
        return record

    def load(self, record: CustomerRecord) -> models.Customer | None:
        """Fetch the live row behind a snapshot for mutation."""

        with store_guard(self._db, "loading a customer"):
            customer = self._db.get(models.Customer, record.id)
        if customer is None:
            self._cache.invalidate(self.cache_key(record.email))
        return customer

    def is_linked(self, customer_id: int, user_id: int) -> bool:
        """Check ownership against the store, bypassing the cached ``owner_ids``."""

        stmt = select(models.UserCustomerRelation.customer_id).where(
            models.UserCustomerRelation.customer_id == customer_id,
            models.UserCustomerRelation.user_id == user_id,
        )
        with store_guard(self._db, "checking customer ownership"):
            return self._db.scalar(stmt) is not None

    def owned_emails(self, user_id: int) -> list[str]:
        stmt = (
            select(models.Customer.email)
            .join(models.UserCustomerRelation, models.UserCustomerRelation.customer_id == models.Customer.id)
            .where(models.UserCustomerRelation.user_id == user_id)
        )
        with store_guard(self._db, "listing owned customer emails"):
            return list(self._db.scalars(stmt).all())

    def forget(self, email: str) -> None:
        self._cache.invalidate(self.cache_key(email))

    def add(self, customer: models.Customer, owner_id: int) -> CustomerRecord:
        with store_guard(self._db, "creating a customer"):
            self._db.add(customer)
            self._db.flush()
            self._db.add(models.UserCustomerRelation(user_id=owner_id, customer_id=customer.id))
            self._db.commit()
            self._db.refresh(customer)
            record = self._snapshot(customer)
        self._cache.set(self.cache_key(record.email), record)
        return record

    def save(self, customer: models.Customer) -> CustomerRecord:
        with store_guard(self._db, "updating a customer"):
            self._db.commit()
            self._db.refresh(customer)
            record = self._snapshot(customer)
        self._cache.set(self.cache_key(record.email), record)
        return record

    def delete(self, customer: models.Customer) -> None:
        email = customer.email
        with store_guard(self._db, "deleting a customer"):
            self._db.delete(customer)
            self._db.commit()
        self._cache.invalidate(self.cache_key(email))

    def _snapshot(self, customer: models.Customer) -> CustomerRecord:
        owner_ids = self._db.scalars(
            select(models.UserCustomerRelation.user_id).where(models.UserCustomerRelation.customer_id == customer.id)
        ).all()
        return CustomerRecord(
            id=customer.id,
            name=customer.name,
            address=customer.address,
            email=customer.email,
            password_hash=customer.password_hash,
            phone_number=customer.phone_number,
            status=customer.status,
            created_at=customer.created_at,
            updated_at=customer.updated_at,
            deleted_at=customer.deleted_at,
            owner_ids=frozenset(owner_ids),
        )
