"""Health check endpoint."""

from fastapi import APIRouter

from restapi.config import settings

router = APIRouter()


@router.api_route("/healthcheck", methods=["GET", "HEAD"])
async def healthcheck():
    return f"OK {settings.APP_VERSION}"
