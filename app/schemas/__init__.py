from app.schemas.customer import CustomerCreate, CustomerRead, CustomerStatusUpdate, CustomerUpdate
from app.schemas.invoice import (
    InvoiceCreate,
    InvoiceRead,
    InvoiceRowCreate,
    InvoiceRowRead,
    InvoiceRowsReplace,
    InvoiceStatusUpdate,
    InvoiceUpdate,
)
from app.schemas.pagination import Page, PaginationMeta
from app.schemas.report import CustomerReportRow, InvoiceReportRow
from app.schemas.user import (
    AccountDelete,
    LoginRequest,
    PasswordChange,
    TokenResponse,
    UserRead,
    UserRegister,
    UserUpdate,
)

__all__ = [
	"AccountDelete",
	"CustomerCreate",
	"CustomerRead",
	"CustomerReportRow",
	"CustomerStatusUpdate",
	"CustomerUpdate",
	"InvoiceCreate",
	"InvoiceRead",
	"InvoiceReportRow",
	"InvoiceRowCreate",
	"InvoiceRowRead",
	"InvoiceRowsReplace",
	"InvoiceStatusUpdate",
	"InvoiceUpdate",
	"LoginRequest",
	"Page",
	"PaginationMeta",
	"PasswordChange",
	"TokenResponse",
	"UserRead",
	"UserRegister",
	"UserUpdate",
]
