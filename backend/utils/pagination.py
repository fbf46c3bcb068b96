"""
Pagination utilities.

A `PageRequest` is built from the `page`, `size` and `sort` query parameters,
applied to a SQLAlchemy query with `paginate`, and the resulting `Page` is
described to clients through `X-Total-Count` and RFC 5988 `Link` headers.
"""

import math
import os
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from fastapi import HTTPException, Query

DEFAULT_PAGE_SIZE = int(os.environ.get("DEFAULT_PAGE_SIZE", "20"))
MAX_PAGE_SIZE = int(os.environ.get("MAX_PAGE_SIZE", "100"))
# Keeps page * size inside SQLite's 64-bit integer range
MAX_PAGE_NUMBER = 10_000_000

T = TypeVar("T")


def parse_sort(sort: str) -> tuple[str, bool]:
    """
    Parse a `field[,asc|desc]` sort expression.

    Returns:
        (field, descending) tuple

    Raises:
        ValueError: if the direction is neither asc nor desc
    """
    field, _, direction = sort.partition(",")
    direction = direction.strip().lower() or "asc"
    if direction not in ("asc", "desc"):
        raise ValueError(f"Invalid sort direction '{direction}'")
    return field.strip(), direction == "desc"


@dataclass(frozen=True)
class PageRequest:
    page: int = 0
    size: int = DEFAULT_PAGE_SIZE
    sort: Optional[str] = None

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page(Generic[T]):
    content: list[T]
    number: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 0
        return math.ceil(self.total_elements / self.size)

    @property
    def has_next(self) -> bool:
        return self.number + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.number > 0


def paginate(query, page_request: PageRequest, sort_columns: dict, default_order: list) -> Page:
    """
    Run `query` for a single page.

    Args:
        query: SQLAlchemy ORM query, unordered
        page_request: requested page
        sort_columns: sortable field name -> column
        default_order: order_by clauses used when the request carries no sort
    """
    total = query.order_by(None).count()

    if page_request.sort:
        field, descending = parse_sort(page_request.sort)
        if field not in sort_columns:
            raise ValueError(f"Cannot sort by '{field}'")
        column = sort_columns[field]
        order = [column.desc() if descending else column.asc()]
        # Stable paging when the sort column has ties
        if field != "id" and "id" in sort_columns:
            order.append(sort_columns["id"].asc())
    else:
        order = default_order

    content = query.order_by(*order).offset(page_request.offset).limit(page_request.size).all()
    return Page(content=content, number=page_request.page, size=page_request.size, total_elements=total)


def page_request_dependency(sort_fields: set[str]):
    """Build a FastAPI dependency that reads and validates paging query parameters."""

    def get_page_request(
        page: int = Query(0, ge=0, le=MAX_PAGE_NUMBER),
        size: int = Query(DEFAULT_PAGE_SIZE),
        sort: Optional[str] = Query(None),
    ) -> PageRequest:
        size = min(max(size, 1), MAX_PAGE_SIZE)
        if sort:
            try:
                field, _ = parse_sort(sort)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
            if field not in sort_fields:
                raise HTTPException(status_code=400, detail=f"Cannot sort by '{field}'")
        return PageRequest(page=page, size=size, sort=sort or None)

    return get_page_request


def _page_link(base_url: str, page: Page, number: int, sort: Optional[str], rel: str) -> str:
    url = f"{base_url}?page={number}&size={page.size}"
    if sort:
        url += f"&sort={sort}"
    return f'<{url}>; rel="{rel}"'


def generate_pagination_headers(page: Page, base_url: str, sort: Optional[str] = None) -> dict[str, str]:
    """Build `X-Total-Count` and `Link` headers for a page served at `base_url`."""
    links = []
    if page.has_next:
        links.append(_page_link(base_url, page, page.number + 1, sort, "next"))
    if page.has_previous:
        links.append(_page_link(base_url, page, page.number - 1, sort, "prev"))
    last_page = max(page.total_pages - 1, 0)
    links.append(_page_link(base_url, page, last_page, sort, "last"))
    links.append(_page_link(base_url, page, 0, sort, "first"))

    return {
        "X-Total-Count": str(page.total_elements),
        "Link": ",".join(links),
    }
