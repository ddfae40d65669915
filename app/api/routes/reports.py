from fastapi import APIRouter, Depends

from app.api.deps import ListParams, get_identity, get_list_params, get_report_service
from app.core.security import IdentityContext
from app.schemas.pagination import Page, PaginationMeta
from app.schemas.report import CustomerReportRow, InvoiceReportRow
from app.services.report_service import ReportService

router = APIRouter(prefix="/reports", tags=["reports"])


@router.get("/customers", response_model=Page[CustomerReportRow])
def customer_report(
    params: ListParams = Depends(get_list_params),
    identity: IdentityContext = Depends(get_identity),
    reports: ReportService = Depends(get_report_service),
) -> Page[CustomerReportRow]:
    """Customers with their invoice counts and invoiced totals."""

    result = reports.customer_report(
        identity,
        page=params.page,
        page_size=params.page_size,
        search=params.search,
        order_by=params.order_by,
    )
    return Page[CustomerReportRow](items=result.items, meta=PaginationMeta.model_validate(result.meta))


@router.get("/invoices", response_model=Page[InvoiceReportRow])
def invoice_report(
    params: ListParams = Depends(get_list_params),
    identity: IdentityContext = Depends(get_identity),
    reports: ReportService = Depends(get_report_service),
) -> Page[InvoiceReportRow]:
    """Invoices with customer names, totals and row counts."""

    result = reports.invoice_report(
        identity,
        page=params.page,
        page_size=params.page_size,
        search=params.search,
        order_by=params.order_by,
    )
    return Page[InvoiceReportRow](items=result.items, meta=PaginationMeta.model_validate(result.meta))
