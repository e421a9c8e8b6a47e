"""Login route."""

from fastapi import APIRouter, Depends

from restapi.api.deps import get_auth_service
from restapi.schemas.user import LoginRequest, Token
from restapi.services.auth import Authenticator

router = APIRouter()


@router.post("/login", response_model=Token)
def login(body: LoginRequest, service: Authenticator = Depends(get_auth_service)):
    """Authenticate and return a signed bearer token."""
    return Token(token=service.login(body.username, body.password))
