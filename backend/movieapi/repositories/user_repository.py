from datetime import datetime
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from movieapi.repositories.base_repository import BaseRepository
from movieapi.models.user import User, RefreshToken

class UserRepository(BaseRepository[User]):
    """User repository with user-specific operations"""

    def __init__(self, db: Session):
        super().__init__(User, db)

    def _by_normalized(self, column, value: str):
        # Identity values compare case-insensitively
        return self.db.query(User).filter(func.lower(column) == (value or "").lower())

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email, ignoring case"""
        return self._by_normalized(User.email, email).first()

    def get_by_username(self, username: str) -> Optional[User]:
        """Get user by username, ignoring case"""
        return self._by_normalized(User.username, username).first()

    def email_exists(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def username_exists(self, username: str) -> bool:
        return self.get_by_username(username) is not None

    def create_user(self, email: str, username: str, hashed_password: str) -> User:
        """Create new user"""
        return self.create({
            "email": email,
            "username": username,
            "hashed_password": hashed_password,
        })

class RefreshTokenRepository(BaseRepository[RefreshToken]):
    """Server-side refresh token store, keyed by user"""

    def __init__(self, db: Session):
        super().__init__(RefreshToken, db)

    def get_for_user(self, user_id: str) -> Optional[RefreshToken]:
        return self.get(user_id)

    def store(self, user_id: str, token_hash: str, expires_at: datetime) -> RefreshToken:
        """Insert or replace the user's refresh token"""
        existing = self.get_for_user(user_id)
        if existing:
            return self.update(existing, {"token_hash": token_hash, "expires_at": expires_at})
        return self.create({
            "user_id": user_id,
            "token_hash": token_hash,
            "expires_at": expires_at,
        })

    def revoke(self, user_id: str) -> bool:
        return self.delete(user_id)
