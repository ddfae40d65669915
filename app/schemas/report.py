from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from app.models.enums import CustomerStatus, InvoiceStatus


class CustomerReportRow(BaseModel):
    customer_id: int
    name: str
    email: str
    phone_number: str | None = None
    status: CustomerStatus
    invoice_count: int
    invoiced_total: Decimal


class InvoiceReportRow(BaseModel):
    invoice_id: int
    customer_id: int
    customer_name: str
    total_sum: Decimal
    status: InvoiceStatus
    comment: str | None = None
    row_count: int
    created_at: datetime
    start_date: datetime
    end_date: datetime
