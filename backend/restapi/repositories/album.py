"""SQLAlchemy-backed album repository."""

from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from restapi.db.models import AlbumRow
from restapi.repositories.base import Repository
from restapi.schemas.album import Album


class SqlAlchemyAlbumRepository(Repository[Album]):
    """Album persistence over a request-scoped session.

    Missing rows surface as ``sqlalchemy.exc.NoResultFound``; the error layer
    turns that into a 404.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def list(self, offset: int, limit: int) -> tuple[list[Album], int]:
        total = self.db.scalar(select(func.count()).select_from(AlbumRow)) or 0
        rows = self.db.scalars(
            select(AlbumRow).order_by(AlbumRow.id).offset(offset).limit(limit)
        ).all()
        return [Album.model_validate(r) for r in rows], total

    def get(self, id: str) -> Album:
        return Album.model_validate(self._row(id))

    def create(self, entity: Album) -> Album:
        row = AlbumRow(**entity.model_dump())
        self.db.add(row)
        self.db.commit()
        self.db.refresh(row)
        return Album.model_validate(row)

    def update(self, id: str, fields: dict[str, Any]) -> Album:
        row = self._row(id)
        for key, value in fields.items():
            setattr(row, key, value)
        self.db.commit()
        self.db.refresh(row)
        return Album.model_validate(row)

    def delete(self, id: str) -> Album:
        row = self._row(id)
        album = Album.model_validate(row)
        self.db.delete(row)
        self.db.commit()
        return album

    def _row(self, id: str) -> AlbumRow:
        return self.db.execute(select(AlbumRow).where(AlbumRow.id == id)).scalar_one()
