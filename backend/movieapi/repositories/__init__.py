from .base_repository import BaseRepository
from .user_repository import UserRepository, RefreshTokenRepository
from .comment_repository import CommentRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "RefreshTokenRepository",
    "CommentRepository"
]
