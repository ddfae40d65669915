from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from app import models
from app.core.security import IdentityContext, ensure_identity
from app.db.guard import store_guard
from app.models.enums import OrderBy
from app.schemas.report import CustomerReportRow, InvoiceReportRow
from app.services import queries
from app.services.pagination import PageResult, paginate

logger = logging.getLogger(__name__)


class ReportService:
    """Tabular summaries over the caller's customers and invoices."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def customer_report(
        self,
        identity: IdentityContext,
        *,
        page: int,
        page_size: int,
        search: str | None = None,
        order_by: OrderBy | None = None,
    ) -> PageResult[CustomerReportRow]:
        """One row per owned customer with its invoice count and invoiced total."""

        identity = ensure_identity(identity)
        invoice_count = queries.invoice_count_per_customer()
        statement = select(
            models.Customer,
            invoice_count.label("invoice_count"),
            queries.invoiced_total_per_customer().label("invoiced_total"),
        ).where(models.Customer.id.in_(queries.owned_customer_ids(identity.user_id)))

        with store_guard(self._db, "building the customer report"):
            result = paginate(
                self._db,
                statement,
                page=page,
                page_size=page_size,
                search=search,
                search_column=models.Customer.name,
                order_by=order_by,
                sort_key=invoice_count,
                tiebreaker=models.Customer.id,
            )

        rows = [
            CustomerReportRow(
                customer_id=customer.id,
                name=customer.name,
                email=customer.email,
                phone_number=customer.phone_number,
                status=customer.status,
                invoice_count=count or 0,
                invoiced_total=Decimal(str(total or 0)),
            )
            for customer, count, total in result.items
        ]
        logger.debug("Customer report page %s built with %s rows", page, len(rows))
        return PageResult(items=rows, meta=result.meta)

    def invoice_report(
        self,
        identity: IdentityContext,
        *,
        page: int,
        page_size: int,
        search: str | None = None,
        order_by: OrderBy | None = None,
    ) -> PageResult[InvoiceReportRow]:
        """One row per owned invoice, joined with its customer's name."""

        identity = ensure_identity(identity)
        row_count = queries.row_count_per_invoice()
        statement = (
            select(models.Invoice, models.Customer.name, row_count.label("row_count"))
            .join(models.Customer, models.Invoice.customer_id == models.Customer.id)
            .where(models.Invoice.customer_id.in_(queries.owned_customer_ids(identity.user_id)))
        )

        with store_guard(self._db, "building the invoice report"):
            result = paginate(
                self._db,
                statement,
                page=page,
                page_size=page_size,
                search=search,
                search_column=models.Invoice.comment,
                order_by=order_by,
                sort_key=row_count,
                tiebreaker=models.Invoice.id,
            )

        rows = [
            InvoiceReportRow(
                invoice_id=invoice.id,
                customer_id=invoice.customer_id,
                customer_name=customer_name,
                total_sum=invoice.total_sum,
                status=invoice.status,
                comment=invoice.comment,
                row_count=count or 0,
                created_at=invoice.created_at,
                start_date=invoice.start_date,
                end_date=invoice.end_date,
            )
            for invoice, customer_name, count in result.items
        ]
        logger.debug("Invoice report page %s built with %s rows", page, len(rows))
        return PageResult(items=rows, meta=result.meta)
