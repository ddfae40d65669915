from fastapi import APIRouter, Depends, status

from app.api.deps import ListParams, get_customer_service, get_identity, get_list_params
from app.core.security import IdentityContext
from app.schemas.customer import CustomerCreate, CustomerRead, CustomerStatusUpdate, CustomerUpdate
from app.schemas.pagination import Page, PaginationMeta
from app.services.customer_service import CustomerService

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get("/", response_model=Page[CustomerRead])
def list_customers(
    params: ListParams = Depends(get_list_params),
    identity: IdentityContext = Depends(get_identity),
    customers: CustomerService = Depends(get_customer_service),
) -> Page[CustomerRead]:
    """Return one page of the caller's customers.

    ``search`` filters by name (case-sensitive substring); ``order_by`` sorts
    by the number of invoices per customer.
    """

    result = customers.list_customers(
        identity,
        page=params.page,
        page_size=params.page_size,
        search=params.search,
        order_by=params.order_by,
    )
    return Page[CustomerRead](
        items=[CustomerRead.model_validate(customer) for customer in result.items],
        meta=PaginationMeta.model_validate(result.meta),
    )


@router.post("/", response_model=CustomerRead, status_code=status.HTTP_201_CREATED)
def create_customer(
    payload: CustomerCreate,
    identity: IdentityContext = Depends(get_identity),
    customers: CustomerService = Depends(get_customer_service),
) -> CustomerRead:
    """Create a customer and link it to the caller."""

    return CustomerRead.model_validate(customers.add_customer(identity, payload))


@router.get("/{email}", response_model=CustomerRead)
def get_customer(
    email: str,
    identity: IdentityContext = Depends(get_identity),
    customers: CustomerService = Depends(get_customer_service),
) -> CustomerRead:
    return CustomerRead.model_validate(customers.get_customer(identity, email))


@router.put("/{email}", response_model=CustomerRead)
def edit_customer(
    email: str,
    payload: CustomerUpdate,
    identity: IdentityContext = Depends(get_identity),
    customers: CustomerService = Depends(get_customer_service),
) -> CustomerRead:
    """Update contact fields; requires the customer's current password."""

    return CustomerRead.model_validate(customers.edit_customer(identity, email, payload))


@router.patch("/{email}/status", response_model=CustomerRead)
def change_customer_status(
    email: str,
    payload: CustomerStatusUpdate,
    identity: IdentityContext = Depends(get_identity),
    customers: CustomerService = Depends(get_customer_service),
) -> CustomerRead:
    return CustomerRead.model_validate(customers.change_status(identity, email, payload.status))


@router.delete("/{email}", status_code=status.HTTP_204_NO_CONTENT)
def delete_customer(
    email: str,
    identity: IdentityContext = Depends(get_identity),
    customers: CustomerService = Depends(get_customer_service),
) -> None:
    """Delete a customer that has no invoices."""

    customers.delete_customer(identity, email)
