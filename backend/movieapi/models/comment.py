from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from movieapi.db import Base

MAX_COMMENT_LENGTH = 1000

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

class Comment(Base):
    __tablename__ = "comments"
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    # External catalog id, no FK against movie data
    movie_id = Column(Integer, nullable=False, index=True)
    text = Column(String(MAX_COMMENT_LENGTH), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)

    user = relationship("User", back_populates="comments")
