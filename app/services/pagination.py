"""Generic filter/sort/paginate over a SQLAlchemy select."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.errors import InvalidArgumentError
from app.models.enums import OrderBy

T = TypeVar("T")


@dataclass(frozen=True)
class PageMeta:
    page: int
    page_size: int
    total_pages: int


@dataclass
class PageResult(Generic[T]):
    items: list[T] = field(default_factory=list)
    meta: PageMeta = field(default_factory=lambda: PageMeta(page=1, page_size=1, total_pages=0))


def validate_page_request(page: int, page_size: int) -> None:
    max_page_size = get_settings().max_page_size
    if page < 1:
        raise InvalidArgumentError("page must be greater than or equal to 1")
    if page_size < 1:
        raise InvalidArgumentError("page_size must be greater than or equal to 1")
    if page_size > max_page_size:
        raise InvalidArgumentError(f"page_size must not exceed {max_page_size}")


def total_pages_for(count: int, page_size: int) -> int:
    return math.ceil(count / page_size)


def paginate(
    db: Session,
    statement: Select[Any],
    *,
    page: int,
    page_size: int,
    search: str | None = None,
    search_column: ColumnElement[Any] | None = None,
    order_by: OrderBy | None = None,
    sort_key: ColumnElement[Any] | None = None,
    tiebreaker: ColumnElement[Any] | None = None,
) -> PageResult[Any]:
    """Apply search, sort and offset/limit to ``statement`` and fetch one page.

    ``total_pages`` is computed from the count of ``statement`` *before* the
    search filter is applied, so it describes the whole base collection
    rather than the filtered result.

    ``search`` is matched as a case-sensitive substring of ``search_column``.
    ``sort_key`` is used for ``Ascending``/``Descending``; ``tiebreaker``
    (usually the primary key) is always appended so consecutive pages never
    overlap.
    """

    validate_page_request(page, page_size)

    base_count = db.scalar(select(func.count()).select_from(statement.order_by(None).subquery())) or 0

    filtered = statement
    if search:
        if search_column is None:
            raise InvalidArgumentError("This listing does not support search")
        filtered = filtered.where(search_column.contains(search, autoescape=True))

    if order_by is not None:
        if sort_key is None:
            raise InvalidArgumentError("This listing does not support ordering")
        filtered = filtered.order_by(sort_key.asc() if order_by is OrderBy.ASCENDING else sort_key.desc())
    if tiebreaker is not None:
        filtered = filtered.order_by(tiebreaker)

    page_stmt = filtered.offset((page - 1) * page_size).limit(page_size)
    rows = db.execute(page_stmt).all()
    # Single-entity selects come back as 1-tuples; multi-column selects stay as rows.
    items = [row[0] if len(row) == 1 else row for row in rows]

    return PageResult(
        items=items,
        meta=PageMeta(page=page, page_size=page_size, total_pages=total_pages_for(base_count, page_size)),
    )
