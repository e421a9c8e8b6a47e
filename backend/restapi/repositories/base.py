"""Repository port shared by every resource service.

Implementations own their own synchronization: a repository instance may be
called from many requests at once.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from restapi.schemas.user import User

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """Persistence capabilities over one resource type."""

    @abstractmethod
    def list(self, offset: int, limit: int) -> tuple[list[T], int]:
        """Return one window of items ordered by id, plus the full item count."""
        raise NotImplementedError

    @abstractmethod
    def get(self, id: str) -> T:
        """Return the item with *id*; raise a not-found failure if absent."""
        raise NotImplementedError

    @abstractmethod
    def create(self, entity: T) -> T:
        raise NotImplementedError

    @abstractmethod
    def update(self, id: str, fields: dict[str, Any]) -> T:
        """Apply *fields* to the stored item and return the new value."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, id: str) -> T:
        """Remove the item and return what was removed."""
        raise NotImplementedError


class UserRepository(ABC):
    """Lookup and storage of known credentials."""

    @abstractmethod
    def get_by_username(self, username: str) -> User | None:
        raise NotImplementedError

    @abstractmethod
    def create(self, username: str, hashed_password: str) -> User:
        raise NotImplementedError
