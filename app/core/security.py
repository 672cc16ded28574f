"""
core/security.py
----------------
Password hashing and JWT token utilities.

Design decisions:
  - bcrypt with a configurable work factor (default 12, never below 10).
  - JWT payload carries sub (user_id) and email so protected routes can
    authorise the caller without a DB round-trip.
  - Tokens are signed with HS256 and live for exactly 24 hours.
  - A missing SECRET_KEY is a hard failure; there is no fallback key.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.config import settings
from app.core.exceptions import ConfigurationError, InvalidToken
from app.core.logging import get_logger
from app.schemas.user import MAX_PASSWORD_BYTES, TokenClaims

logger = get_logger(__name__)

ACCESS_TOKEN_EXPIRE_SECONDS = 86400

pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS
)


# ── Password Utilities ────────────────────────────────────────────────────────

def hash_password(plain: str) -> str:
    """Return a bcrypt hash of the plain-text password."""
    return pwd_context.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    """
    Constant-time comparison of plain password against stored hash.
    Passwords past bcrypt's 72-byte input limit never match; bcrypt would
    otherwise compare only their truncated prefix.
    """
    if len(plain.encode("utf-8")) > MAX_PASSWORD_BYTES:
        pwd_context.dummy_verify()
        return False
    return pwd_context.verify(plain, hashed)


def dummy_verify_password() -> bool:
    """Spend one bcrypt verification on a dummy hash; always False."""
    return pwd_context.dummy_verify()


# ── JWT Utilities ─────────────────────────────────────────────────────────────

def _signing_key() -> str:
    if not settings.SECRET_KEY:
        logger.error("SECRET_KEY is not configured; refusing to sign or verify tokens")
        raise ConfigurationError("SECRET_KEY is not configured")
    return settings.SECRET_KEY


def create_access_token(user_id: str, email: str) -> str:
    """
    Mint a JWT access token for the given user.

    Raises:
        ConfigurationError: If no signing key is configured.

    Returns:
        Signed JWT string, valid for ACCESS_TOKEN_EXPIRE_SECONDS.
    """
    key = _signing_key()
    issued_at = datetime.now(timezone.utc)
    payload: Dict[str, Any] = {
        "sub": user_id,
        "email": email,
        "iat": issued_at,
        "exp": issued_at + timedelta(seconds=ACCESS_TOKEN_EXPIRE_SECONDS),
    }
    return jwt.encode(payload, key, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> TokenClaims:
    """
    Decode and validate a JWT access token.

    Raises:
        ConfigurationError: If no signing key is configured.
        InvalidToken: If the token is tampered with, expired, or lacks claims.
    """
    key = _signing_key()
    try:
        payload = jwt.decode(token, key, algorithms=[settings.ALGORITHM])
    except JWTError as exc:
        logger.warning("JWT decode failed", error=str(exc))
        raise InvalidToken() from exc

    user_id = payload.get("sub")
    email = payload.get("email")
    if not user_id or not email:
        logger.warning("JWT missing required claims", claims=sorted(payload))
        raise InvalidToken()
    return TokenClaims(user_id=user_id, email=email)
