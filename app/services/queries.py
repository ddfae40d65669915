"""Reusable select fragments for the ownership fence and child-count sort keys."""

from typing import Any

from sqlalchemy import ColumnElement, Select, func, select

from app import models


def owned_customer_ids(user_id: int) -> Select[Any]:
    return select(models.UserCustomerRelation.customer_id).where(models.UserCustomerRelation.user_id == user_id)


def invoice_count_per_customer() -> ColumnElement[int]:
    return (
        select(func.count(models.Invoice.id))
        .where(models.Invoice.customer_id == models.Customer.id)
        .correlate(models.Customer)
        .scalar_subquery()
    )


def invoiced_total_per_customer() -> ColumnElement[Any]:
    return (
        select(func.coalesce(func.sum(models.Invoice.total_sum), 0))
        .where(models.Invoice.customer_id == models.Customer.id)
        .correlate(models.Customer)
        .scalar_subquery()
    )


def row_count_per_invoice() -> ColumnElement[int]:
    return (
        select(func.count(models.InvoiceRow.id))
        .where(models.InvoiceRow.invoice_id == models.Invoice.id)
        .correlate(models.Invoice)
        .scalar_subquery()
    )


def owned_customers(user_id: int) -> Select[Any]:
    return select(models.Customer).where(models.Customer.id.in_(owned_customer_ids(user_id)))


def owned_invoices(user_id: int) -> Select[Any]:
    return select(models.Invoice).where(models.Invoice.customer_id.in_(owned_customer_ids(user_id)))
