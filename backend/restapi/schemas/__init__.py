"""Pydantic schemas — re‑exported for convenience."""

from restapi.schemas.common import ErrorResponse, Page  # noqa: F401
from restapi.schemas.album import (  # noqa: F401
    Album,
    CreateAlbumRequest,
    UpdateAlbumRequest,
)
from restapi.schemas.user import (  # noqa: F401
    Identity,
    LoginRequest,
    Token,
    User,
)
