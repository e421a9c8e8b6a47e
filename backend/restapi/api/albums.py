"""Album CRUD routes.

Reads are public; every mutation requires a bearer token, checked before
the request body is read.
"""

from fastapi import APIRouter, Depends, status

from restapi.api.deps import authenticated_body, get_album_service, require_identity
from restapi.schemas.album import Album, CreateAlbumRequest, UpdateAlbumRequest
from restapi.schemas.common import Page
from restapi.schemas.user import Identity
from restapi.services.album import AlbumService

router = APIRouter()


@router.get("", response_model=Page[Album])
def list_albums(
    page: int | None = None,
    per_page: int | None = None,
    service: AlbumService = Depends(get_album_service),
):
    """List albums one page at a time; ``total_count`` covers all albums."""
    return service.query(page, per_page)


@router.get("/{album_id}", response_model=Album)
def get_album(album_id: str, service: AlbumService = Depends(get_album_service)):
    return service.get(album_id)


@router.post("", response_model=Album, status_code=status.HTTP_201_CREATED)
def create_album(
    body: CreateAlbumRequest = Depends(authenticated_body(CreateAlbumRequest)),
    service: AlbumService = Depends(get_album_service),
):
    return service.create(body)


@router.put("/{album_id}", response_model=Album)
def update_album(
    album_id: str,
    body: UpdateAlbumRequest = Depends(authenticated_body(UpdateAlbumRequest)),
    service: AlbumService = Depends(get_album_service),
):
    return service.update(album_id, body)


@router.delete("/{album_id}", response_model=Album)
def delete_album(
    album_id: str,
    _identity: Identity = Depends(require_identity),
    service: AlbumService = Depends(get_album_service),
):
    """Delete an album and echo the deleted value."""
    return service.delete(album_id)
