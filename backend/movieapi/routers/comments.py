from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from movieapi.db import get_db
from movieapi.core.auth import AuthenticatedUser, get_current_user
from movieapi.core.enums import CommentOperationResult
from movieapi.schemas.comment import CommentCreate, CommentUpdate, CommentResponse
from movieapi.services.comment_service import CommentService

router = APIRouter(prefix="/movies/{movie_id}/comments", tags=["comments"])

INVALID_TEXT = "Invalid comment text."

ACTION_GERUNDS = {"create": "creating", "update": "updating", "delete": "deleting"}

def _raise_for(result: CommentOperationResult, action: str, comment_id: Optional[int] = None) -> None:
    """Translate a non-success outcome into an HTTP error"""
    if result == CommentOperationResult.VALIDATION_ERROR:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_TEXT)
    if result == CommentOperationResult.NOT_FOUND:
        detail = "User not found." if comment_id is None else f"Comment with ID {comment_id} not found."
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail)
    if result == CommentOperationResult.FORBIDDEN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"You are not authorized to {action} this comment."
        )
    raise HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"An error occurred while {ACTION_GERUNDS[action]} the comment."
    )

@router.get("", response_model=List[CommentResponse])
def get_comments(movie_id: int, db: Session = Depends(get_db)):
    """All comments of a movie, newest first"""
    return CommentService(db).get_comments_by_movie(movie_id)

@router.post("", response_model=CommentResponse, status_code=status.HTTP_201_CREATED)
def post_comment(
    movie_id: int,
    comment_data: CommentCreate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    comment, result = CommentService(db).add_comment(movie_id, current_user.user_id, comment_data.text)
    if result != CommentOperationResult.SUCCESS:
        _raise_for(result, "create")
    return comment

@router.put("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_comment(
    movie_id: int,
    comment_id: int,
    comment_data: CommentUpdate,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    result = CommentService(db).update_comment(comment_id, current_user.user_id, comment_data.text)
    if result != CommentOperationResult.SUCCESS:
        _raise_for(result, "update", comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_comment(
    movie_id: int,
    comment_id: int,
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    result = CommentService(db).delete_comment(comment_id, current_user.user_id)
    if result != CommentOperationResult.SUCCESS:
        _raise_for(result, "delete", comment_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
