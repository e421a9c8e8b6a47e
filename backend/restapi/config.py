"""Service configuration loaded from environment variables."""

from pathlib import Path

from pydantic_settings import BaseSettings

# Always resolve .env relative to this file, no matter where uvicorn is started from
_ENV_FILE = Path(__file__).resolve().parent.parent / ".env"


class Settings(BaseSettings):
    """Application settings — all values sourced from env / .env file."""

    # ── Server ──────────────────────────────────────────────────────────
    HOST: str = "0.0.0.0"
    PORT: int = 8080
    DEBUG: bool = False
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # ── Database ────────────────────────────────────────────────────────
    DATABASE_URL: str = "sqlite:///./albums.db"
    DATABASE_ECHO: bool = False

    # ── JWT / Auth ──────────────────────────────────────────────────────
    JWT_SIGNING_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRATION_HOURS: int = 72

    # Account created on startup when the users table has no such username
    SEED_DEFAULT_USER: bool = True
    DEFAULT_USERNAME: str = "demo"
    DEFAULT_PASSWORD: str = "pass"

    # ── Pagination ──────────────────────────────────────────────────────
    DEFAULT_PAGE_SIZE: int = 100
    MAX_PAGE_SIZE: int = 1000

    model_config = {"env_file": str(_ENV_FILE), "case_sensitive": True, "extra": "ignore"}


settings = Settings()
