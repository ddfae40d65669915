from enum import Enum


class CustomerStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    SUSPENDED = "Suspended"


class InvoiceStatus(str, Enum):
    CREATED = "Created"
    SENT = "Sent"
    RECEIVED = "Received"
    PAID = "Paid"
    CANCELLED = "Cancelled"
    REJECTED = "Rejected"


class OrderBy(str, Enum):
    ASCENDING = "Ascending"
    DESCENDING = "Descending"


# Invoices that have left draft state; they can no longer be deleted or edited.
LOCKED_INVOICE_STATUSES = frozenset({InvoiceStatus.SENT, InvoiceStatus.RECEIVED, InvoiceStatus.REJECTED})
