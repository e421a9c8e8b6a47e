"""Login and bearer-token verification."""

import logging
from abc import ABC, abstractmethod

from restapi.config import settings
from restapi.core.errors import unauthorized
from restapi.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from restapi.repositories.base import UserRepository
from restapi.schemas.user import Identity

logger = logging.getLogger(__name__)


class Authenticator(ABC):
    """What the request pipeline needs from authentication."""

    @abstractmethod
    def login(self, username: str, password: str) -> str:
        """Return a bearer token for a known credential pair, or raise unauthorized."""
        raise NotImplementedError

    @abstractmethod
    def verify_token(self, token: str) -> Identity:
        """Return the identity a token was issued to, or raise unauthorized."""
        raise NotImplementedError


class AuthService(Authenticator):
    """Checks credentials against the users table and issues signed tokens.

    Every rejected login raises the same unauthorized error, whatever the
    reason; only the server log tells an unknown username from a wrong
    password.
    """

    def __init__(self, users: UserRepository) -> None:
        self.users = users

    def login(self, username: str, password: str) -> str:
        user = self.users.get_by_username(username)
        if user is None:
            logger.info("Login rejected: unknown username %r", username)
            raise unauthorized()
        if not verify_password(password, user.hashed_password):
            logger.info("Login rejected: wrong password for user %s", user.id)
            raise unauthorized()
        return create_access_token(data={"sub": user.id, "name": user.username})

    def verify_token(self, token: str) -> Identity:
        payload = decode_access_token(token)
        if payload is None:
            raise unauthorized()
        user_id = payload.get("sub")
        name = payload.get("name")
        if not user_id or not name:
            raise unauthorized()
        return Identity(id=user_id, name=name)

    def ensure_default_user(self) -> bool:
        """Create the configured default account if missing.

        Returns True when a user was created.
        """
        if self.users.get_by_username(settings.DEFAULT_USERNAME) is not None:
            return False
        self.users.create(settings.DEFAULT_USERNAME, hash_password(settings.DEFAULT_PASSWORD))
        logger.info("Seeded default user %r", settings.DEFAULT_USERNAME)
        return True
