"""Generic CRUD orchestration over a :class:`Repository`.

Subclasses describe one resource: how to validate incoming requests, how to
build a new entity and which stored fields a request changes.  The flow
itself lives here:

- validation always runs before the repository is touched, so an invalid
  request never causes a partial write;
- updates are read-modify-write: the current item is loaded first (absent
  items fail as not-found) and ``updated_at`` is refreshed;
- listings report ``total_count`` from the repository, which may differ from
  the number of items in the returned window.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from restapi.repositories.base import Repository
from restapi.schemas.common import Page, new_page, normalize_window

logger = logging.getLogger(__name__)

T = TypeVar("T")
C = TypeVar("C")
U = TypeVar("U")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_id() -> str:
    return str(uuid.uuid4())


class ResourceService(Generic[T, C, U]):
    """CRUD over a repository of ``T`` with create requests ``C`` and update requests ``U``."""

    resource_name = "resource"

    def __init__(self, repository: Repository[T]) -> None:
        self.repository = repository

    # ── hooks ────────────────────────────────────────────────────────────────

    def validate_create(self, request: C) -> None:
        """Raise a validation error if *request* cannot be created."""

    def validate_update(self, request: U) -> None:
        """Raise a validation error if *request* cannot be applied."""

    def build(self, request: C, id: str, now: datetime) -> T:
        raise NotImplementedError

    def changes(self, request: U, current: T) -> dict[str, Any]:
        raise NotImplementedError

    # ── operations ───────────────────────────────────────────────────────────

    def count(self) -> int:
        _, total = self.repository.list(0, 0)
        return total

    def query(self, page: int | None = None, per_page: int | None = None) -> Page:
        page, per_page = normalize_window(page, per_page)
        items, total = self.repository.list((page - 1) * per_page, per_page)
        window = new_page(page, per_page, total)
        if window.page != page:
            # Asked past the last page: serve the last one instead
            items, total = self.repository.list(window.offset, window.limit)
            window = new_page(window.page, per_page, total)
        return window.model_copy(update={"items": items})

    def get(self, id: str) -> T:
        return self.repository.get(id)

    def create(self, request: C) -> T:
        self.validate_create(request)
        entity = self.build(request, generate_id(), _utcnow())
        created = self.repository.create(entity)
        logger.debug("Created %s %s", self.resource_name, getattr(created, "id", "?"))
        return created

    def update(self, id: str, request: U) -> T:
        self.validate_update(request)
        current = self.repository.get(id)
        fields = self.changes(request, current)
        fields["updated_at"] = _utcnow()
        return self.repository.update(id, fields)

    def delete(self, id: str) -> T:
        deleted = self.repository.delete(id)
        logger.debug("Deleted %s %s", self.resource_name, id)
        return deleted
