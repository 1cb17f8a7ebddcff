from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from pydantic import EmailStr, Field, StringConstraints

from .base import RequestModel, ResponseModel
from ..utils.password_utils import MIN_PASSWORD_LENGTH

# Passwords are hashed exactly as typed, surrounding spaces included
Password = Annotated[str, StringConstraints(strip_whitespace=False)]


class UserResponse(ResponseModel):
    id: UUID
    email: EmailStr
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None
    bio: Optional[str] = None
    profile_image_url: Optional[str] = None
    created_at: datetime


class RegisterUserRequest(RequestModel):
    email: EmailStr
    password: Password = Field(..., min_length=MIN_PASSWORD_LENGTH, max_length=72)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")


class LoginRequest(RequestModel):
    email: EmailStr
    password: Password = Field(..., min_length=1, max_length=72)


class AuthResponse(ResponseModel):
    message: str
    user: UserResponse


class MessageResponse(ResponseModel):
    message: str


class ProfileUpdateRequest(RequestModel):
    username: Optional[str] = Field(None, min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")
    bio: Optional[str] = Field(None, max_length=1000)
    profile_image_url: Optional[str] = Field(None, max_length=500)
