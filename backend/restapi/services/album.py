"""Album business rules on top of the generic CRUD service."""

from datetime import datetime
from typing import Any

from restapi.core.errors import validation_error
from restapi.schemas.album import Album, CreateAlbumRequest, UpdateAlbumRequest
from restapi.services.crud import ResourceService

NAME_MAX_LENGTH = 128


def validate_album_name(name: str) -> None:
    problems: list[str] = []
    if not name.strip():
        problems.append("cannot be blank")
    if len(name) > NAME_MAX_LENGTH:
        problems.append(f"the length must be no more than {NAME_MAX_LENGTH}")
    if problems:
        raise validation_error({"name": problems})


class AlbumService(ResourceService[Album, CreateAlbumRequest, UpdateAlbumRequest]):
    resource_name = "album"

    def validate_create(self, request: CreateAlbumRequest) -> None:
        validate_album_name(request.name)

    def validate_update(self, request: UpdateAlbumRequest) -> None:
        validate_album_name(request.name)

    def build(self, request: CreateAlbumRequest, id: str, now: datetime) -> Album:
        return Album(id=id, name=request.name, created_at=now, updated_at=now)

    def changes(self, request: UpdateAlbumRequest, current: Album) -> dict[str, Any]:
        return {"name": request.name}
