import logging
from typing import List, Optional
from sqlalchemy import delete
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.orm.exc import ObjectDeletedError, StaleDataError
from movieapi.repositories.base_repository import BaseRepository
from movieapi.models.comment import Comment
from movieapi.models.user import User

logger = logging.getLogger(__name__)

class CommentRepository(BaseRepository[Comment]):
    """Persistence for movie comments"""

    def __init__(self, db: Session):
        super().__init__(Comment, db)

    def get_by_movie(self, movie_id: int) -> List[Comment]:
        """Comments of one movie, newest first, with the author joined in"""
        return (
            self.db.query(Comment)
            .options(joinedload(Comment.user))
            .filter(Comment.movie_id == movie_id)
            .order_by(Comment.timestamp.desc(), Comment.id.desc())
            .all()
        )

    def get_by_id(self, comment_id: int) -> Optional[Comment]:
        return self.get(comment_id)

    def update_comment(self, comment: Comment) -> bool:
        """Flush pending changes of a comment.

        Returns False when the row disappeared between read and write.
        """
        comment_id = comment.id
        self.db.add(comment)
        try:
            self.db.commit()
        except (StaleDataError, ObjectDeletedError):
            self.db.rollback()
            if not self.exists(id=comment_id):
                logger.warning(f"Comment {comment_id} was deleted before the update was written")
                return False
            raise
        self.db.refresh(comment)
        return True

    def delete(self, comment_id: int) -> bool:
        """Delete by id; False when no row matched"""
        result = self.db.execute(delete(Comment).where(Comment.id == comment_id))
        self.db.commit()
        return result.rowcount > 0

    def user_exists(self, user_id: str) -> bool:
        return self.db.query(User.id).filter(User.id == user_id).first() is not None
