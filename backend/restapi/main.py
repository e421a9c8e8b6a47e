"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from restapi.api import albums_router, auth_router, health_router
from restapi.api.middleware import (
    ErrorHandlerMiddleware,
    RequestContextMiddleware,
    register_error_handlers,
)
from restapi.config import settings
from restapi.core.logging import configure_logging
from restapi.db.session import get_engine, init_db
from restapi.repositories.user import SqlAlchemyUserRepository
from restapi.services.auth import AuthService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(app.state.engine)
    if settings.SEED_DEFAULT_USER:
        with app.state.session_factory() as db:
            AuthService(SqlAlchemyUserRepository(db)).ensure_default_user()
    logger.info("Album API %s starting…", settings.APP_VERSION)
    yield
    logger.info("Album API shut down")


def create_app(engine: Engine | None = None) -> FastAPI:
    """Build the application around *engine* (the configured database by default).

    The engine and its session factory are kept on ``app.state``; every
    request opens its own session from that factory.
    """
    configure_logging(level="DEBUG" if settings.DEBUG else settings.LOG_LEVEL)

    app = FastAPI(
        title="Album API",
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.engine = engine if engine is not None else get_engine()
    app.state.session_factory = sessionmaker(
        bind=app.state.engine, autocommit=False, autoflush=False
    )

    # ── Middleware (last added runs first) ───────────────────────────────────

    app.add_middleware(RequestContextMiddleware)
    app.add_middleware(ErrorHandlerMiddleware)
    register_error_handlers(app)

    # ── Routers ──────────────────────────────────────────────────────────────

    app.include_router(health_router, tags=["Health"])
    app.include_router(auth_router, tags=["Auth"])
    app.include_router(albums_router, prefix="/albums", tags=["Albums"])

    return app


app = create_app()
