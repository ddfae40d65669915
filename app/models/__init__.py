from app.models.customer import Customer
from app.models.invoice import Invoice
from app.models.invoice_row import InvoiceRow
from app.models.user import User
from app.models.user_customer import UserCustomerRelation

__all__ = ["User", "Customer", "UserCustomerRelation", "Invoice", "InvoiceRow"]
