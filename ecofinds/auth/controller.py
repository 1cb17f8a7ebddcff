# ecofinds/auth/controller.py
from fastapi import APIRouter, Request
from starlette import status

from . import service
from ..core.config import settings
from ..core.rate_limiter import limiter
from ..database.core import DbSession
from ..schemas.user import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterUserRequest,
    UserResponse,
)
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix='/auth', tags=['auth'])


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.REGISTER_RATE_LIMIT)
async def register_user(
    request: Request,
    db: DbSession,
    register_user_request: RegisterUserRequest
):
    """Register a new user account and log it in."""
    user = service.register_user(db, register_user_request)
    service.start_session(request, user)
    return AuthResponse(message="User created successfully", user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse, status_code=status.HTTP_200_OK)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
async def login(
    request: Request,
    db: DbSession,
    login_request: LoginRequest
):
    """Check credentials and start a session."""
    user = service.authenticate_user(db, login_request.email, login_request.password)
    service.start_session(request, user)
    logger.info(f"User {user.id} logged in")
    return AuthResponse(message="Login successful", user=UserResponse.model_validate(user))


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request):
    """End the current session."""
    user_id = service.get_session_user_id(request)
    service.end_session(request)
    if user_id:
        logger.info(f"User {user_id} logged out")
    return MessageResponse(message="Logout successful")


@router.get("/user", response_model=UserResponse)
async def get_current_user_info(current_user: service.CurrentUser):
    """Get current user information."""
    return current_user
