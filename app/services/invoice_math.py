from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal

from app import models


def row_sum(quantity: Decimal, amount: Decimal) -> Decimal:
    """Exact line total.

    Quantities carry at most 3 decimal places and amounts at most 2, so the
    product always fits the 5-place ``invoice_rows.sum`` column unrounded.
    """

    return Decimal(quantity) * Decimal(amount)


def invoice_total(sums: Iterable[Decimal]) -> Decimal:
    return sum((Decimal(value) for value in sums), Decimal("0"))


def recalculate(invoice: models.Invoice) -> None:
    """Renumber rows and refresh every derived amount on ``invoice``.

    Must run after any change to the row set; ``total_sum`` is never assigned
    anywhere else.
    """

    for position, row in enumerate(invoice.rows):
        row.position = position
        row.sum = row_sum(row.quantity, row.amount)
    invoice.total_sum = invoice_total(row.sum for row in invoice.rows)
