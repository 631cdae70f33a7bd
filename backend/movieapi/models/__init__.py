from movieapi.db import Base
from .user import User, RefreshToken
from .comment import Comment

__all__ = [
    'Base', 'User', 'RefreshToken', 'Comment'
]
