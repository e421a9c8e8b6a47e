"""SQLAlchemy-backed user lookup used by the auth service."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from restapi.db.models import UserRow
from restapi.repositories.base import UserRepository
from restapi.schemas.user import User


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, db: Session) -> None:
        self.db = db

    def get_by_username(self, username: str) -> User | None:
        row = self.db.scalars(select(UserRow).where(UserRow.username == username)).first()
        return User.model_validate(row) if row else None

    def create(self, username: str, hashed_password: str) -> User:
        row = UserRow(username=username, hashed_password=hashed_password)
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return User.model_validate(row)
