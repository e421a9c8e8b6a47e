"""One-time DB setup: create tables and seed the default login and a few albums."""
from restapi.config import settings
from restapi.db.session import get_engine, get_session_factory, init_db
from restapi.repositories.album import SqlAlchemyAlbumRepository
from restapi.repositories.user import SqlAlchemyUserRepository
from restapi.schemas.album import CreateAlbumRequest
from restapi.services.album import AlbumService
from restapi.services.auth import AuthService

_SAMPLE_ALBUMS = ["Kind of Blue", "A Love Supreme", "Blue Train"]

# 1. Create all tables
init_db(get_engine())
print(f"✅ Tables ready at {settings.DATABASE_URL}")

session_factory = get_session_factory()
with session_factory() as db:
    # 2. Default login
    if AuthService(SqlAlchemyUserRepository(db)).ensure_default_user():
        print(f"✅ Created user: {settings.DEFAULT_USERNAME} / {settings.DEFAULT_PASSWORD}")
    else:
        print("  Default user already exists")

    # 3. Sample albums, only into an empty table
    albums = AlbumService(SqlAlchemyAlbumRepository(db))
    if albums.count() == 0:
        for name in _SAMPLE_ALBUMS:
            albums.create(CreateAlbumRequest(name=name))
        print(f"✅ Created {len(_SAMPLE_ALBUMS)} sample albums")
    else:
        print("  Albums already present")

print("\n🎉 Database is ready to use!")
