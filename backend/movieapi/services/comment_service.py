import logging
from typing import List, Optional, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from movieapi.core.enums import CommentOperationResult
from movieapi.models.comment import Comment, MAX_COMMENT_LENGTH, utc_now
from movieapi.repositories.comment_repository import CommentRepository
from movieapi.schemas.comment import CommentResponse

logger = logging.getLogger(__name__)

UNKNOWN_USER = "Unknown User"

def is_valid_comment_text(text: Optional[str]) -> bool:
    """Non-blank and at most MAX_COMMENT_LENGTH characters"""
    return text is not None and bool(text.strip()) and len(text) <= MAX_COMMENT_LENGTH

def to_response(comment: Comment) -> CommentResponse:
    username = comment.user.username if comment.user is not None else UNKNOWN_USER
    return CommentResponse(
        id=comment.id,
        movie_id=comment.movie_id,
        text=comment.text,
        timestamp=comment.timestamp,
        user_id=comment.user_id,
        username=username,
    )

class CommentService:
    """Comment CRUD with author-only mutation"""

    def __init__(self, db: Session):
        self.db = db
        self.comment_repository = CommentRepository(db)

    def add_comment(self, movie_id: int, user_id: str, text: str) -> Tuple[Optional[CommentResponse], CommentOperationResult]:
        if not is_valid_comment_text(text):
            return None, CommentOperationResult.VALIDATION_ERROR

        try:
            if not self.comment_repository.user_exists(user_id):
                return None, CommentOperationResult.NOT_FOUND

            comment = self.comment_repository.add(Comment(
                movie_id=movie_id,
                user_id=user_id,
                text=text,
                timestamp=utc_now(),
            ))
            return to_response(comment), CommentOperationResult.SUCCESS
        except SQLAlchemyError:
            logger.exception(f"Error adding comment for movie {movie_id}")
            self.db.rollback()
            return None, CommentOperationResult.ERROR

    def get_comments_by_movie(self, movie_id: int) -> List[CommentResponse]:
        return [to_response(c) for c in self.comment_repository.get_by_movie(movie_id)]

    def update_comment(self, comment_id: int, user_id: str, new_text: str) -> CommentOperationResult:
        if not is_valid_comment_text(new_text):
            return CommentOperationResult.VALIDATION_ERROR

        try:
            comment = self.comment_repository.get_by_id(comment_id)
            if comment is None:
                return CommentOperationResult.NOT_FOUND
            if comment.user_id != user_id:
                return CommentOperationResult.FORBIDDEN

            comment.text = new_text
            comment.timestamp = utc_now()
            if not self.comment_repository.update_comment(comment):
                return CommentOperationResult.NOT_FOUND
            return CommentOperationResult.SUCCESS
        except SQLAlchemyError:
            logger.exception(f"Error updating comment {comment_id}")
            self.db.rollback()
            return CommentOperationResult.ERROR

    def delete_comment(self, comment_id: int, user_id: str) -> CommentOperationResult:
        try:
            comment = self.comment_repository.get_by_id(comment_id)
            if comment is None:
                return CommentOperationResult.NOT_FOUND
            if comment.user_id != user_id:
                return CommentOperationResult.FORBIDDEN

            if not self.comment_repository.delete(comment_id):
                return CommentOperationResult.NOT_FOUND
            return CommentOperationResult.SUCCESS
        except SQLAlchemyError:
            logger.exception(f"Error deleting comment {comment_id}")
            self.db.rollback()
            return CommentOperationResult.ERROR
