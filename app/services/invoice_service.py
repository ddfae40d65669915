from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app import models
from app.core.errors import ConflictError, InvalidArgumentError, NotFoundError
from app.core.security import IdentityContext, ensure_identity
from app.db.guard import store_guard
from app.models.enums import LOCKED_INVOICE_STATUSES, InvoiceStatus, OrderBy
from app.schemas.invoice import InvoiceCreate, InvoiceRowCreate, InvoiceUpdate
from app.services import queries
from app.services.invoice_math import recalculate
from app.services.pagination import PageResult, paginate

logger = logging.getLogger(__name__)


class InvoiceService:
    """Invoice lifecycle for invoices whose customer the caller owns."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def create_invoice(self, identity: IdentityContext, payload: InvoiceCreate) -> models.Invoice:
        identity = ensure_identity(identity)
        self._ensure_customer_owned(identity, payload.customer_id)

        invoice = models.Invoice(
            customer_id=payload.customer_id,
            start_date=payload.start_date,
            end_date=payload.end_date,
            comment=payload.comment,
            status=payload.status,
        )
        invoice.rows = self._build_rows(payload.rows)
        recalculate(invoice)

        with store_guard(self._db, "creating an invoice"):
            self._db.add(invoice)
            self._db.commit()
            self._db.refresh(invoice)
        logger.info("Invoice %s created for customer %s", invoice.id, invoice.customer_id)
        return invoice

    def get_invoice(self, identity: IdentityContext, invoice_id: int) -> models.Invoice:
        return self._find_owned(identity, invoice_id)

    def list_invoices(
        self,
        identity: IdentityContext,
        *,
        page: int,
        page_size: int,
        search: str | None = None,
        order_by: OrderBy | None = None,
    ) -> PageResult[models.Invoice]:
        identity = ensure_identity(identity)
        with store_guard(self._db, "listing invoices"):
            return paginate(
                self._db,
                queries.owned_invoices(identity.user_id).options(selectinload(models.Invoice.rows)),
                page=page,
                page_size=page_size,
                search=search,
                search_column=models.Invoice.comment,
                order_by=order_by,
                sort_key=queries.row_count_per_invoice(),
                tiebreaker=models.Invoice.id,
            )

    def edit_invoice(self, identity: IdentityContext, invoice_id: int, payload: InvoiceUpdate) -> models.Invoice:
        invoice = self._find_owned(identity, invoice_id)
        self._ensure_editable(invoice)

        updates = payload.model_dump(exclude_unset=True, exclude_none=True)
        if "customer_id" in updates and updates["customer_id"] != invoice.customer_id:
            self._ensure_customer_owned(identity, updates["customer_id"])

        start_date = updates.get("start_date", invoice.start_date)
        end_date = updates.get("end_date", invoice.end_date)
        if _naive(start_date) > _naive(end_date):
            raise InvalidArgumentError("start_date must not be later than end_date")

        for field_name, value in updates.items():
            setattr(invoice, field_name, value)

        return self._commit(invoice, "updating an invoice")

    def change_status(self, identity: IdentityContext, invoice_id: int, status: InvoiceStatus) -> models.Invoice:
        invoice = self._find_owned(identity, invoice_id)
        previous = invoice.status
        invoice.status = status
        invoice = self._commit(invoice, "changing invoice status")
        logger.info("Invoice %s status changed from %s to %s", invoice_id, previous.value, status.value)
        return invoice

    def replace_rows(
        self, identity: IdentityContext, invoice_id: int, rows: Sequence[InvoiceRowCreate]
    ) -> models.Invoice:
        invoice = self._find_owned(identity, invoice_id)
        self._ensure_editable(invoice)
        invoice.rows = self._build_rows(rows)
        recalculate(invoice)
        return self._commit(invoice, "replacing invoice rows")

    def add_row(self, identity: IdentityContext, invoice_id: int, row: InvoiceRowCreate) -> models.Invoice:
        invoice = self._find_owned(identity, invoice_id)
        self._ensure_editable(invoice)
        invoice.rows.extend(self._build_rows([row]))
        recalculate(invoice)
        return self._commit(invoice, "adding an invoice row")

    def remove_row(self, identity: IdentityContext, invoice_id: int, row_id: int) -> models.Invoice:
        invoice = self._find_owned(identity, invoice_id)
        self._ensure_editable(invoice)

        target = next((row for row in invoice.rows if row.id == row_id), None)
        if target is None:
            raise NotFoundError("Invoice row not found")
        if len(invoice.rows) == 1:
            raise InvalidArgumentError("An invoice must keep at least one row")

        invoice.rows.remove(target)
        recalculate(invoice)
        return self._commit(invoice, "removing an invoice row")

    def delete_invoice(self, identity: IdentityContext, invoice_id: int) -> models.Invoice:
        invoice = self._find_owned(identity, invoice_id)
        if invoice.status in LOCKED_INVOICE_STATUSES:
            logger.info("Invoice %s is %s and cannot be deleted", invoice_id, invoice.status.value)
            raise ConflictError(f"Invoice in status {invoice.status.value} cannot be deleted")

        # Rows are loaded so the deleted invoice can still be returned in full.
        _ = list(invoice.rows)
        with store_guard(self._db, "deleting an invoice"):
            self._db.delete(invoice)
            self._db.commit()
        logger.info("Invoice %s deleted", invoice_id)
        return invoice

    def _find_owned(self, identity: IdentityContext, invoice_id: int) -> models.Invoice:
        identity = ensure_identity(identity)
        stmt = (
            queries.owned_invoices(identity.user_id)
            .options(selectinload(models.Invoice.rows))
            .where(models.Invoice.id == invoice_id)
        )
        with store_guard(self._db, "looking up an invoice"):
            invoice = self._db.scalar(stmt)
        if invoice is None:
            raise NotFoundError("Invoice not found")
        return invoice

    def _ensure_customer_owned(self, identity: IdentityContext, customer_id: int) -> None:
        stmt = select(models.UserCustomerRelation).where(
            models.UserCustomerRelation.user_id == identity.user_id,
            models.UserCustomerRelation.customer_id == customer_id,
        )
        with store_guard(self._db, "checking customer ownership"):
            link = self._db.scalar(stmt)
        if link is None:
            logger.info("Customer %s does not belong to user %s", customer_id, identity.user_id)
            raise NotFoundError("Customer not found")

    @staticmethod
    def _ensure_editable(invoice: models.Invoice) -> None:
        if invoice.status in LOCKED_INVOICE_STATUSES:
            raise ConflictError(f"Invoice in status {invoice.status.value} cannot be edited")

    @staticmethod
    def _build_rows(rows: Sequence[InvoiceRowCreate]) -> list[models.InvoiceRow]:
        return [models.InvoiceRow(service=row.service, quantity=row.quantity, amount=row.amount) for row in rows]

    def _commit(self, invoice: models.Invoice, action: str) -> models.Invoice:
        with store_guard(self._db, action):
            self._db.commit()
            self._db.refresh(invoice)
        return invoice


def _naive(value: datetime) -> datetime:
    # SQLite hands back naive datetimes while payloads may carry an offset.
    return value.replace(tzinfo=None) if value.tzinfo is not None else value
