from fastapi import APIRouter

from .service import UserService
from ..auth.service import CurrentUser
from ..database.core import DbSession
from ..schemas.user import ProfileUpdateRequest, UserResponse

router = APIRouter(prefix="/profile", tags=["users"])


@router.patch("", response_model=UserResponse)
async def update_profile(
    profile_data: ProfileUpdateRequest,
    current_user: CurrentUser,
    db: DbSession
):
    """Update the caller's username, bio or profile image"""
    return UserService.update_profile(db, current_user.id, profile_data)
