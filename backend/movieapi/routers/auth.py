import logging
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from movieapi.db import get_db
from movieapi.schemas.user import (
    UserCreate, UserLogin, RefreshTokenRequest, AuthResponse, MessageResponse
)
from movieapi.services.auth_service import AuthService
from movieapi.core.auth import AuthenticatedUser, get_current_user
from movieapi.core.enums import ServiceErrorType
from movieapi.core.exceptions import InvalidCredentialsException, UserNotFoundException
from movieapi.routers.errors import handle_exception

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])

@router.post("/register", response_model=MessageResponse)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user"""
    try:
        auth_service = AuthService(db)
        result = auth_service.register(user_data.username, user_data.email, user_data.password)

        if not result.succeeded:
            logger.warning(f"Registration attempt failed for user {user_data.username}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=result.errors
            )

        return {"message": "User registered successfully"}
    except Exception as e:
        raise handle_exception(e)

@router.post("/login", response_model=AuthResponse)
def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login with email or username and return tokens"""
    try:
        auth_service = AuthService(db)
        result = auth_service.login(credentials.login_identifier, credentials.password)

        if not result.succeeded:
            if result.error_type == ServiceErrorType.UNAUTHORIZED:
                raise InvalidCredentialsException()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An error occurred during login."
            )

        return result.data
    except Exception as e:
        raise handle_exception(e)

@router.post("/refresh", response_model=AuthResponse)
def refresh(request: RefreshTokenRequest, db: Session = Depends(get_db)):
    """Exchange a refresh token for a new token pair"""
    try:
        auth_service = AuthService(db)
        result = auth_service.refresh_token(request.user_id, request.refresh_token)

        if not result.succeeded:
            logger.warning(
                f"Token refresh attempt failed for UserId {request.user_id}. Errors: {', '.join(result.errors)}"
            )
            if result.error_type == ServiceErrorType.NOT_FOUND:
                raise UserNotFoundException(result.errors[0])
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Token refresh failed."
            )

        return result.data
    except Exception as e:
        raise handle_exception(e)

@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(
    current_user: AuthenticatedUser = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Revoke the caller's refresh token"""
    try:
        AuthService(db).logout(current_user.user_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except Exception as e:
        raise handle_exception(e)
