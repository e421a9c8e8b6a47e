"""API route package — imports all routers for main.py."""

from restapi.api.health import router as health_router  # noqa: F401
from restapi.api.auth import router as auth_router  # noqa: F401
from restapi.api.albums import router as albums_router  # noqa: F401
