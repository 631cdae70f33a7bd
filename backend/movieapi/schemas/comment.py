from datetime import datetime
from pydantic import Field
from movieapi.schemas.user import CamelModel

class CommentCreate(CamelModel):
    """Length and blankness are checked by the comment service"""
    text: str = Field(..., description="Comment text, 1-1000 characters")

class CommentUpdate(CamelModel):
    text: str = Field(..., description="Replacement text, 1-1000 characters")

class CommentResponse(CamelModel):
    id: int
    movie_id: int
    text: str
    timestamp: datetime
    user_id: str
    username: str
