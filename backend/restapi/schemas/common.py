"""Shared / generic schemas."""

import math
from typing import Generic, TypeVar

from pydantic import BaseModel

from restapi.config import settings

T = TypeVar("T")


class ErrorResponse(BaseModel):
    """Error envelope written for every failed request.

    Only :func:`restapi.core.errors.classify` builds these.
    """

    status: int
    message: str
    details: dict[str, list[str]] | None = None

    model_config = {"frozen": True}

    def to_body(self) -> dict:
        return self.model_dump(exclude_none=True)


class Page(BaseModel, Generic[T]):
    """A pagination window over a resource listing.

    ``total_count`` is the size of the whole store, not ``len(items)``.
    """

    page: int
    per_page: int
    page_count: int
    total_count: int
    items: list[T] = []

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page


def normalize_window(page: int | None, per_page: int | None) -> tuple[int, int]:
    """Apply the page defaults and the page size cap; no store size needed."""
    if per_page is None or per_page <= 0:
        per_page = settings.DEFAULT_PAGE_SIZE
    if per_page > settings.MAX_PAGE_SIZE:
        per_page = settings.MAX_PAGE_SIZE
    if page is None or page < 1:
        page = 1
    return page, per_page


def new_page(page: int | None, per_page: int | None, total_count: int) -> Page:
    """Normalize the requested window and compute ``page_count``."""
    page, per_page = normalize_window(page, per_page)
    page_count = math.ceil(total_count / per_page) if total_count > 0 else 0
    if page_count and page > page_count:
        page = page_count
    return Page(page=page, per_page=per_page, page_count=page_count, total_count=total_count)
