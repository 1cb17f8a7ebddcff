# ecofinds/auth/service.py

from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends, Request
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from ..core.exceptions import (
    ErrorCode,
    InvalidCredentialsError,
    UnauthenticatedError,
    ValidationError,
)
from ..database.core import DbSession
from ..database.repository import MarketplaceRepository
from ..schemas.user import RegisterUserRequest
from ..users.models import User
from ..utils.password_utils import bcrypt_context, get_password_hash, verify_password

logger = logging.getLogger(__name__)

# Key under which the authenticated user's id lives in the signed session cookie
SESSION_USER_KEY = "user_id"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def register_user(db: Session, register_user_request: RegisterUserRequest) -> User:
    """Creates a user after checking email and username uniqueness."""
    repo = MarketplaceRepository(db)
    email = normalize_email(register_user_request.email)

    if repo.get_user_by_email(email):
        raise ValidationError("Email already registered.", code=ErrorCode.EMAIL_ALREADY_REGISTERED)
    if repo.get_user_by_username(register_user_request.username):
        raise ValidationError("Username is already taken.", code=ErrorCode.USERNAME_TAKEN)

    try:
        user = repo.create_user(
            email=email,
            first_name=register_user_request.first_name,
            last_name=register_user_request.last_name,
            username=register_user_request.username,
            password_hash=get_password_hash(register_user_request.password),
        )
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email/username
        db.rollback()
        logger.warning(f"Registration conflict for {email}")
        raise ValidationError("Email or username already registered.", code=ErrorCode.EMAIL_ALREADY_REGISTERED)
    except Exception:
        db.rollback()
        raise

    db.refresh(user)
    logger.info(f"Successfully registered user: {email}")
    return user


def authenticate_user(db: Session, email: str, password: str) -> User:
    """
    Verifies credentials. Unknown email and wrong password fail identically,
    including the time spent hashing.
    """
    user = MarketplaceRepository(db).get_user_by_email(normalize_email(email))
    if not user:
        bcrypt_context.dummy_verify()
        logger.warning("Login failed: invalid credentials")
        raise InvalidCredentialsError()

    if not verify_password(password, user.password_hash):
        logger.warning("Login failed: invalid credentials")
        raise InvalidCredentialsError()

    return user


def start_session(request: Request, user: User) -> None:
    """Anonymous -> Authenticated for this session."""
    request.session.clear()
    request.session[SESSION_USER_KEY] = str(user.id)


def end_session(request: Request) -> None:
    """Authenticated -> Anonymous. Safe to call on an anonymous session."""
    request.session.clear()


def get_session_user_id(request: Request) -> Optional[UUID]:
    raw = request.session.get(SESSION_USER_KEY)
    if not raw:
        return None
    try:
        return UUID(str(raw))
    except ValueError:
        return None


def get_current_user(request: Request, db: DbSession) -> User:
    """FastAPI dependency resolving the session to a user, or failing with 401."""
    user_id = get_session_user_id(request)
    if user_id is None:
        raise UnauthenticatedError()

    user = MarketplaceRepository(db).get_user(user_id)
    if user is None:
        # Session outlived its user
        end_session(request)
        raise UnauthenticatedError()
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
