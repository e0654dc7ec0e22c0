"""Authentication service for password hashing and JWT management."""

import logging
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from tomanfolio.config import settings

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    # Pre-computed bcrypt hash for timing-consistent password verification
    # Used when the user doesn't exist so login timing doesn't reveal usernames
    _DUMMY_HASH = "$2b$12$LQv3c1yqBWVHxkd0LHAkCOYz6TtxMQJqhN8/X4.VTtYA9dWQ6E3Ky"

    @staticmethod
    def get_dummy_hash() -> str:
        return AuthService._DUMMY_HASH

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password using bcrypt."""
        hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt())
        return hashed.decode("utf-8")

    @staticmethod
    def verify_password(password: str, hashed: str) -> bool:
        """Verify a password against its hash."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
        except ValueError as e:
            logger.error(f"Password verification error: {e}")
            return False

    @staticmethod
    def create_access_token(
        user_id: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a JWT access token."""
        if expires_delta is None:
            expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

        now = datetime.now(UTC)
        payload = {
            "sub": user_id,
            "exp": now + expires_delta,
            "iat": now,
            "type": "access",
        }
        return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)

    @staticmethod
    def decode_access_token(token: str) -> dict | None:
        """Decode and validate a JWT token."""
        try:
            return jwt.decode(
                token,
                settings.jwt_secret_key,
                algorithms=[settings.jwt_algorithm],
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Token expired")
            return None
        except jwt.InvalidTokenError as e:
            logger.debug(f"Invalid token: {e}")
            return None
