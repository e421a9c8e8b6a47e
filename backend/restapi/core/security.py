"""Password hashing and JWT token utilities."""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
import bcrypt

from restapi.config import settings

# ── Password hashing ──────────────────────────────────────────────────────────

BCRYPT_MAX_BYTES = 72


def hash_password(plain: str) -> str:
    """Return the bcrypt hash of *plain*, used to store known credentials.

    Raises:
        ValueError: bcrypt only reads the first 72 bytes, so longer
            passwords are refused rather than silently truncated.
    """
    raw = plain.encode("utf-8")
    if len(raw) > BCRYPT_MAX_BYTES:
        raise ValueError(
            f"Password is {len(raw)} bytes; bcrypt accepts at most {BCRYPT_MAX_BYTES}."
        )
    return bcrypt.hashpw(raw, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Check *plain* against *hashed* password.

    A malformed stored hash counts as a mismatch.
    """
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        return False


# ── JWT tokens ────────────────────────────────────────────────────────────────


def create_access_token(
    data: dict,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign *data* into a bearer token that expires after *expires_delta*
    (``JWT_EXPIRATION_HOURS`` by default)."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(hours=settings.JWT_EXPIRATION_HOURS)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SIGNING_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT. Returns payload dict or None on failure."""
    try:
        return jwt.decode(token, settings.JWT_SIGNING_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        return None
