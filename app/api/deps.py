from collections.abc import Generator
from dataclasses import dataclass
from functools import lru_cache

from fastapi import Depends, Query
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.errors import UnauthenticatedError
from app.core.security import IdentityContext, decode_access_token
from app.db.session import SessionLocal
from app.models.enums import OrderBy
from app.services.customer_service import CustomerService
from app.services.invoice_service import InvoiceService
from app.services.lookup_cache import LookupCache
from app.services.report_service import ReportService
from app.services.user_service import UserService

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """Provide a scoped database session dependency."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@lru_cache
def get_lookup_cache() -> LookupCache:
    """Return the process-wide email lookup cache."""

    return LookupCache(ttl_seconds=get_settings().lookup_cache_ttl_seconds)


def get_user_service(
    db: Session = Depends(get_db),
    cache: LookupCache = Depends(get_lookup_cache),
) -> UserService:
    return UserService(db, cache)


def get_customer_service(
    db: Session = Depends(get_db),
    cache: LookupCache = Depends(get_lookup_cache),
) -> CustomerService:
    return CustomerService(db, cache)


def get_invoice_service(db: Session = Depends(get_db)) -> InvoiceService:
    return InvoiceService(db)


def get_report_service(db: Session = Depends(get_db)) -> ReportService:
    return ReportService(db)


def get_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
    users: UserService = Depends(get_user_service),
) -> IdentityContext:
    """Resolve the caller from the bearer token, rejecting unknown or deleted accounts."""

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise UnauthenticatedError()
    identity = decode_access_token(credentials.credentials, settings)
    return users.resolve_identity(identity)


@dataclass(frozen=True)
class ListParams:
    page: int
    page_size: int
    search: str | None
    order_by: OrderBy | None


def get_list_params(
    page: int = Query(default=1, ge=1),
    page_size: int | None = Query(default=None, ge=1),
    search: str | None = Query(default=None),
    order_by: OrderBy | None = Query(default=None),
) -> ListParams:
    """Collect the shared pagination, search and ordering query parameters."""

    resolved_size = page_size if page_size is not None else get_settings().default_page_size
    return ListParams(page=page, page_size=resolved_size, search=search, order_by=order_by)
