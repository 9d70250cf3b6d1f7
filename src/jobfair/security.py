"""Password hashing and access tokens."""

from datetime import datetime, timedelta

import bcrypt
import structlog
from jose import JWTError, jwt

from jobfair.config import get_settings

logger = structlog.get_logger()

BCRYPT_ROUNDS = 10
BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    password_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def is_password_hashed(value: str) -> bool:
    """bcrypt hashes start with $2a$, $2b$ or $2y$."""
    return value.startswith("$2")


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against its bcrypt hash."""
    try:
        return bcrypt.checkpw(
            password.encode("utf-8")[:BCRYPT_MAX_BYTES],
            hashed.encode("utf-8"),
        )
    except ValueError:
        logger.warning("password_hash_malformed")
        return False


def next_midnight(now: datetime | None = None) -> datetime:
    """Start of the next day in local time."""
    now = now or datetime.now().astimezone()
    return (now + timedelta(days=1)).replace(hour=0, minute=0, second=0, microsecond=0)


def create_access_token(user_id: int, email: str, role: str) -> str:
    """
    Create a signed token for a user.

    Tokens expire at the next local midnight, so a session never spans
    two days.
    """
    settings = get_settings()
    payload = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "exp": next_midnight(),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict | None:
    """Decode and verify a token. Returns None when invalid or expired."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
