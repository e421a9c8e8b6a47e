"""Album schemas."""

from datetime import datetime

from pydantic import BaseModel


class Album(BaseModel):
    """Album returned from API and passed between service and repository."""

    id: str
    name: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class CreateAlbumRequest(BaseModel):
    """POST /albums"""

    name: str


class UpdateAlbumRequest(BaseModel):
    """PUT /albums/{id}"""

    name: str
