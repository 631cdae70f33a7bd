import logging
import re
from datetime import datetime, timedelta, timezone
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from movieapi.core.auth import (
    create_access_token, generate_refresh_token, get_password_hash,
    hash_refresh_token, verify_password
)
from movieapi.core.config import get_settings
from movieapi.core.exceptions import ConfigurationException
from movieapi.core.results import ServiceResult
from movieapi.models.user import User
from movieapi.repositories.user_repository import UserRepository, RefreshTokenRepository
from movieapi.schemas.user import AuthResponse

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials."
USER_NOT_FOUND = "User not found."
INVALID_REFRESH_TOKEN = "Invalid refresh token."

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9\-._@+]+$")

def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value

class AuthService:
    """Registration, credential checks and token issuance"""

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()
        self.user_repository = UserRepository(db)
        self.refresh_token_repository = RefreshTokenRepository(db)

    def register(self, username: str, email: str, password: str) -> ServiceResult[None]:
        """Create a user, reporting every violated rule at once"""
        errors = []
        if not USERNAME_PATTERN.match(username or ""):
            errors.append(f"Username '{username}' is invalid, can only contain letters or digits.")
        elif self.user_repository.username_exists(username):
            errors.append(f"Username '{username}' is already taken.")
        if self.user_repository.email_exists(email):
            errors.append(f"Email '{email}' is already taken.")
        if len(password or "") < self.settings.PASSWORD_MIN_LENGTH:
            errors.append(f"Passwords must be at least {self.settings.PASSWORD_MIN_LENGTH} characters.")

        if errors:
            logger.warning(f"User registration failed for {username}: {', '.join(errors)}")
            return ServiceResult.validation_error(errors)

        try:
            user = self.user_repository.create_user(
                email=email,
                username=username,
                hashed_password=get_password_hash(password),
            )
        except IntegrityError:
            # Lost a race against a concurrent registration
            self.db.rollback()
            logger.warning(f"User registration for {username} hit a uniqueness constraint")
            return ServiceResult.validation_error(["Username or email is already taken."])

        logger.info(f"User {user.username} registered successfully.")
        return ServiceResult.success()

    def login(self, identifier: str, password: str) -> ServiceResult[AuthResponse]:
        """Authenticate by email or username and issue tokens"""
        user = (
            self.user_repository.get_by_email(identifier)
            or self.user_repository.get_by_username(identifier)
        )
        if user is None:
            logger.warning(f"Login failed: user not found for identifier {identifier}")
            return ServiceResult.unauthorized(INVALID_CREDENTIALS)

        if not verify_password(password, user.hashed_password):
            logger.warning(f"Login failed: invalid password for user {user.username}")
            return ServiceResult.unauthorized(INVALID_CREDENTIALS)

        try:
            response = self._issue_tokens(user)
        except (ConfigurationException, SQLAlchemyError):
            logger.exception(f"Error generating tokens for user {user.username}")
            self.db.rollback()
            return ServiceResult.internal_error("An error occurred during login.")

        logger.info(f"User {user.username} logged in successfully.")
        return ServiceResult.success(response)

    def refresh_token(self, user_id: str, refresh_token: str) -> ServiceResult[AuthResponse]:
        """Exchange a stored, unexpired refresh token for a new token pair"""
        user = self.user_repository.get(user_id)
        if user is None:
            logger.warning(f"Token refresh failed: user not found for ID {user_id}")
            return ServiceResult.not_found(USER_NOT_FOUND)

        stored = self.refresh_token_repository.get_for_user(user.id)
        if (
            stored is None
            or stored.token_hash != hash_refresh_token(refresh_token)
            or _as_utc(stored.expires_at) <= datetime.now(timezone.utc)
        ):
            logger.warning(f"Token refresh failed: invalid refresh token for user {user.username}")
            return ServiceResult.unauthorized(INVALID_REFRESH_TOKEN)

        try:
            response = self._issue_tokens(user)
        except (ConfigurationException, SQLAlchemyError):
            logger.exception(f"Error generating tokens during refresh for user {user.username}")
            self.db.rollback()
            return ServiceResult.internal_error("An error occurred during token refresh.")

        logger.info(f"Token refreshed successfully for user {user.username}")
        return ServiceResult.success(response)

    def logout(self, user_id: str) -> ServiceResult[None]:
        """Revoke the user's refresh token"""
        if self.refresh_token_repository.revoke(user_id):
            logger.info(f"Refresh token revoked for user {user_id}")
        return ServiceResult.success()

    def _issue_tokens(self, user: User) -> AuthResponse:
        token, expiration = create_access_token(user.id, user.username, user.email)

        refresh_token = generate_refresh_token()
        refresh_expiration = datetime.now(timezone.utc) + timedelta(days=self.settings.REFRESH_TOKEN_EXPIRE_DAYS)
        # Rotation: storing replaces any previous token for this user
        self.refresh_token_repository.store(user.id, hash_refresh_token(refresh_token), refresh_expiration)

        return AuthResponse(
            user_id=user.id,
            username=user.username,
            email=user.email or "",
            token=token,
            expiration=expiration,
            refresh_token=refresh_token,
            refresh_token_expiration=refresh_expiration,
        )
