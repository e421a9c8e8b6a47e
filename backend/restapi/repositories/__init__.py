"""Repository port and its SQLAlchemy implementations."""

from restapi.repositories.base import Repository, UserRepository  # noqa: F401
from restapi.repositories.album import SqlAlchemyAlbumRepository  # noqa: F401
from restapi.repositories.user import SqlAlchemyUserRepository  # noqa: F401
