from datetime import datetime
from decimal import Decimal

from app import models
from app.services.invoice_math import invoice_total, recalculate, row_sum


def test_row_sum_is_quantity_times_amount() -> None:
    assert row_sum(Decimal("3"), Decimal("12.50")) == Decimal("37.50")


def test_row_sum_is_never_rounded() -> None:
    assert row_sum(Decimal("0.333"), Decimal("1.00")) == Decimal("0.333")
    assert row_sum(Decimal("1.5"), Decimal("0.33")) == Decimal("0.495")


def test_invoice_total_keeps_sub_cent_precision() -> None:
    assert invoice_total([Decimal("0.495"), Decimal("0.005"), Decimal("100")]) == Decimal("100.500")


def test_invoice_total_of_no_rows_is_zero() -> None:
    assert invoice_total([]) == Decimal("0")


def test_recalculate_refreshes_rows_and_total() -> None:
    invoice = models.Invoice(customer_id=1, start_date=datetime(2024, 1, 1), end_date=datetime(2024, 1, 31))
    invoice.rows = [
        models.InvoiceRow(service="Design", quantity=Decimal("3"), amount=Decimal("12.50")),
        models.InvoiceRow(service="Hosting", quantity=Decimal("3"), amount=Decimal("12.50")),
    ]

    recalculate(invoice)

    assert [row.sum for row in invoice.rows] == [Decimal("37.50"), Decimal("37.50")]
    assert [row.position for row in invoice.rows] == [0, 1]
    assert invoice.total_sum == Decimal("75.00")

    invoice.rows.pop()
    recalculate(invoice)
    assert invoice.total_sum == Decimal("37.50")
