"""
Password hashing, JWT issuance/validation and the bearer-token dependency.
"""
import hashlib
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import bcrypt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from movieapi.core.config import get_settings
from movieapi.core.exceptions import ConfigurationException

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class AuthenticatedUser:
    """Caller identity taken from a verified access token."""
    user_id: str
    username: Optional[str] = None
    email: Optional[str] = None


def _pre_hash_password(password: str) -> bytes:
    """
    Pre-hash password with SHA256 to support passwords longer than 72 bytes.
    The 32-byte digest stays under bcrypt's input limit.
    """
    return hashlib.sha256(password.encode("utf-8")).digest()


def get_password_hash(password: str) -> str:
    """Hash a password with bcrypt and return it as a string for storage."""
    hashed = bcrypt.hashpw(_pre_hash_password(password), bcrypt.gensalt())
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_pre_hash_password(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(
    user_id: str,
    username: str,
    email: Optional[str],
    expires_delta: Optional[timedelta] = None,
) -> Tuple[str, datetime]:
    """Create a signed JWT for the user. Returns the token and its expiry (UTC)."""
    settings = get_settings()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    claims = {
        "sub": user_id,
        "name": username,
        "email": email or "",
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": now,
        "exp": expire,
    }
    try:
        token = jwt.encode(claims, settings.JWT_KEY, algorithm=settings.JWT_ALGORITHM)
    except JWTError as e:
        raise ConfigurationException(f"Could not sign access token: {e}") from e
    return token, expire


def decode_access_token(token: str) -> Optional[dict]:
    """Decode and verify a JWT (signature, expiry, issuer, audience)."""
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.JWT_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
        )
    except JWTError:
        return None


def generate_refresh_token() -> str:
    """Opaque refresh token handed to the client; only its hash is stored."""
    return secrets.token_urlsafe(48)


def hash_refresh_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthenticatedUser:
    """Resolve the caller from the Authorization header or fail with 401."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User ID claim not found.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return AuthenticatedUser(
        user_id=user_id,
        username=payload.get("name"),
        email=payload.get("email") or None,
    )
