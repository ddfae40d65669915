from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app import models
from app.core.errors import ConflictError, NotFoundError
from app.core.security import IdentityContext, ensure_identity
from app.db.guard import store_guard
from app.models.enums import CustomerStatus, OrderBy
from app.repositories.customer_repository import CustomerRecord, CustomerRepository
from app.schemas.customer import CustomerCreate, CustomerUpdate
from app.services import queries
from app.services.credentials import hash_secret, require_secret
from app.services.lookup_cache import LookupCache
from app.services.pagination import PageResult, paginate

logger = logging.getLogger(__name__)


class CustomerService:
    """Customer operations scoped to the customers the caller owns."""

    def __init__(self, db: Session, cache: LookupCache) -> None:
        self._db = db
        self._customers = CustomerRepository(db, cache)

    def add_customer(self, identity: IdentityContext, payload: CustomerCreate) -> CustomerRecord:
        identity = ensure_identity(identity)
        if self._customers.find_by_email(payload.email) is not None:
            raise ConflictError("A customer with this email already exists")

        customer = models.Customer(
            name=payload.name,
            email=payload.email,
            address=payload.address,
            phone_number=payload.phone_number,
            status=payload.status,
            password_hash=hash_secret(payload.password),
        )
        record = self._customers.add(customer, owner_id=identity.user_id)
        logger.info("Customer %s added by user %s", record.email, identity.user_id)
        return record

    def get_customer(self, identity: IdentityContext, email: str) -> CustomerRecord:
        return self._find_owned(identity, email)

    def list_customers(
        self,
        identity: IdentityContext,
        *,
        page: int,
        page_size: int,
        search: str | None = None,
        order_by: OrderBy | None = None,
    ) -> PageResult[models.Customer]:
        identity = ensure_identity(identity)
        with store_guard(self._db, "listing customers"):
            return paginate(
                self._db,
                queries.owned_customers(identity.user_id),
                page=page,
                page_size=page_size,
                search=search,
                search_column=models.Customer.name,
                order_by=order_by,
                sort_key=queries.invoice_count_per_customer(),
                tiebreaker=models.Customer.id,
            )

    def edit_customer(self, identity: IdentityContext, email: str, payload: CustomerUpdate) -> CustomerRecord:
        record = self._find_owned(identity, email)
        require_secret(record.password_hash, payload.password, f"customer {email}")

        customer = self._load(identity, record)
        if payload.name is not None:
            customer.name = payload.name
        if payload.address is not None:
            customer.address = payload.address
        if payload.phone_number is not None:
            customer.phone_number = payload.phone_number

        updated = self._customers.save(customer)
        logger.info("Customer %s updated", email)
        return updated

    def change_status(self, identity: IdentityContext, email: str, status: CustomerStatus) -> CustomerRecord:
        record = self._find_owned(identity, email)
        customer = self._load(identity, record)
        customer.status = status
        updated = self._customers.save(customer)
        logger.info("Customer %s status changed to %s", email, status.value)
        return updated

    def delete_customer(self, identity: IdentityContext, email: str) -> None:
        record = self._find_owned(identity, email)

        with store_guard(self._db, "counting customer invoices"):
            invoice_count = self._db.scalar(
                select(func.count(models.Invoice.id)).where(models.Invoice.customer_id == record.id)
            )
        if invoice_count:
            logger.info("Customer %s has %s invoices and cannot be deleted", email, invoice_count)
            raise ConflictError(f"Customer has {invoice_count} invoices and cannot be deleted")

        self._customers.delete(self._load(identity, record))
        logger.info("Customer %s deleted", email)

    def _find_owned(self, identity: IdentityContext, email: str) -> CustomerRecord:
        identity = ensure_identity(identity)
        record = self._customers.find_by_email(email)
        if record is None:
            logger.info("Customer %s not found", email)
            raise NotFoundError("Customer not found")
        if not record.is_owned_by(identity.user_id):
            logger.info("Customer %s does not belong to user %s", email, identity.user_id)
            raise NotFoundError("Customer not found")
        return record

    def _load(self, identity: IdentityContext, record: CustomerRecord) -> models.Customer:
        """Fetch the live row for mutation after re-checking ownership in the store."""

        if not self._customers.is_linked(record.id, identity.user_id):
            logger.info("Customer %s is no longer linked to user %s", record.email, identity.user_id)
            self._customers.forget(record.email)
            raise NotFoundError("Customer not found")
        customer = self._customers.load(record)
        if customer is None:
            raise NotFoundError("Customer not found")
        return customer
