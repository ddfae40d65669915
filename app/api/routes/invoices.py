from fastapi import APIRouter, Depends, status

from app.api.deps import ListParams, get_identity, get_invoice_service, get_list_params
from app.core.security import IdentityContext
from app.schemas.invoice import (
    InvoiceCreate,
    InvoiceRead,
    InvoiceRowCreate,
    InvoiceRowsReplace,
    InvoiceStatusUpdate,
    InvoiceUpdate,
)
from app.schemas.pagination import Page, PaginationMeta
from app.services.invoice_service import InvoiceService

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("/", response_model=Page[InvoiceRead])
def list_invoices(
    params: ListParams = Depends(get_list_params),
    identity: IdentityContext = Depends(get_identity),
    invoices: InvoiceService = Depends(get_invoice_service),
) -> Page[InvoiceRead]:
    """Return one page of invoices issued to the caller's customers.

    ``search`` filters by comment; ``order_by`` sorts by the number of rows.
    """

    result = invoices.list_invoices(
        identity,
        page=params.page,
        page_size=params.page_size,
        search=params.search,
        order_by=params.order_by,
    )
    return Page[InvoiceRead](
        items=[InvoiceRead.model_validate(invoice) for invoice in result.items],
        meta=PaginationMeta.model_validate(result.meta),
    )


@router.post("/", response_model=InvoiceRead, status_code=status.HTTP_201_CREATED)
def create_invoice(
    payload: InvoiceCreate,
    identity: IdentityContext = Depends(get_identity),
    invoices: InvoiceService = Depends(get_invoice_service),
) -> InvoiceRead:
    """Persist a new invoice; row sums and the total are computed server-side."""

    return InvoiceRead.model_validate(invoices.create_invoice(identity, payload))


@router.get("/{invoice_id}", response_model=InvoiceRead)
def get_invoice(
    invoice_id: int,
    identity: IdentityContext = Depends(get_identity),
    invoices: InvoiceService = Depends(get_invoice_service),
) -> InvoiceRead:
    return InvoiceRead.model_validate(invoices.get_invoice(identity, invoice_id))


@router.put("/{invoice_id}", response_model=InvoiceRead)
def edit_invoice(
    invoice_id: int,
    payload: InvoiceUpdate,
    identity: IdentityContext = Depends(get_identity),
    invoices: InvoiceService = Depends(get_invoice_service),
) -> InvoiceRead:
    """Update header fields of an invoice that has not been sent."""

    return InvoiceRead.model_validate(invoices.edit_invoice(identity, invoice_id, payload))


@router.patch("/{invoice_id}/status", response_model=InvoiceRead)
def change_invoice_status(
    invoice_id: int,
    payload: InvoiceStatusUpdate,
    identity: IdentityContext = Depends(get_identity),
    invoices: InvoiceService = Depends(get_invoice_service),
) -> InvoiceRead:
    return InvoiceRead.model_validate(invoices.change_status(identity, invoice_id, payload.status))


@router.put("/{invoice_id}/rows", response_model=InvoiceRead)
def replace_invoice_rows(
    invoice_id: int,
    payload: InvoiceRowsReplace,
    identity: IdentityContext = Depends(get_identity),
    invoices: InvoiceService = Depends(get_invoice_service),
) -> InvoiceRead:
    return InvoiceRead.model_validate(invoices.replace_rows(identity, invoice_id, payload.rows))


@router.post("/{invoice_id}/rows", response_model=InvoiceRead, status_code=status.HTTP_201_CREATED)
def add_invoice_row(
    invoice_id: int,
    payload: InvoiceRowCreate,
    identity: IdentityContext = Depends(get_identity),
    invoices: InvoiceService = Depends(get_invoice_service),
) -> InvoiceRead:
    return InvoiceRead.model_validate(invoices.add_row(identity, invoice_id, payload))


@router.delete("/{invoice_id}/rows/{row_id}", response_model=InvoiceRead)
def remove_invoice_row(
    invoice_id: int,
    row_id: int,
    identity: IdentityContext = Depends(get_identity),
    invoices: InvoiceService = Depends(get_invoice_service),
) -> InvoiceRead:
    return InvoiceRead.model_validate(invoices.remove_row(identity, invoice_id, row_id))


@router.delete("/{invoice_id}", response_model=InvoiceRead)
def delete_invoice(
    invoice_id: int,
    identity: IdentityContext = Depends(get_identity),
    invoices: InvoiceService = Depends(get_invoice_service),
) -> InvoiceRead:
    """Delete a draft invoice and return it as it was."""

    return InvoiceRead.model_validate(invoices.delete_invoice(identity, invoice_id))
