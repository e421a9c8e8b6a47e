"""FastAPI dependencies shared across routes."""

from typing import TypeVar

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from sqlalchemy.orm import Session

from restapi.api.middleware import request_log
from restapi.core.errors import unauthorized
from restapi.core.logging import RequestLogger
from restapi.db.session import get_db
from restapi.repositories.album import SqlAlchemyAlbumRepository
from restapi.repositories.base import Repository
from restapi.repositories.user import SqlAlchemyUserRepository
from restapi.schemas.album import Album
from restapi.schemas.user import Identity
from restapi.services.album import AlbumService
from restapi.services.auth import Authenticator, AuthService

BodyT = TypeVar("BodyT", bound=BaseModel)

# Missing or non-bearer headers yield None; require_identity turns that into a 401
bearer_scheme = HTTPBearer(auto_error=False)


def get_album_repository(db: Session = Depends(get_db)) -> Repository[Album]:
    return SqlAlchemyAlbumRepository(db)


def get_album_service(
    repository: Repository[Album] = Depends(get_album_repository),
) -> AlbumService:
    return AlbumService(repository)


def get_auth_service(db: Session = Depends(get_db)) -> Authenticator:
    return AuthService(SqlAlchemyUserRepository(db))


def require_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth: Authenticator = Depends(get_auth_service),
) -> Identity:
    """Verify the bearer token and attach the identity to the request, or 401.

    A missing token is rejected exactly like an invalid one.
    """
    if credentials is None or not credentials.credentials:
        raise unauthorized()
    identity = auth.verify_token(credentials.credentials)

    request.state.identity = identity
    log = request_log(request)
    if isinstance(log, RequestLogger):
        request.state.logger = log.bind(user_id=identity.id)
    return identity


def authenticated_body(model: type[BodyT]):
    """Dependency parsing the JSON body into *model* once the bearer token checks out.

    FastAPI reads declared body parameters before any dependency runs, so a
    mutating route takes its body through this instead: a request without a
    valid token is rejected with 401 whatever its body looks like.
    """

    async def parse(
        request: Request, _identity: Identity = Depends(require_identity)
    ) -> BodyT:
        return model.model_validate_json(await request.body())

    return parse
