from uuid import UUID
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
import logging

from .models import User
from ..core.exceptions import ErrorCode, NotFoundError, ValidationError
from ..database.repository import MarketplaceRepository
from ..schemas.user import ProfileUpdateRequest

logger = logging.getLogger(__name__)


class UserService:

    @staticmethod
    def get_user_by_id(db: Session, user_id: UUID) -> User:
        user = MarketplaceRepository(db).get_user(user_id)
        if not user:
            logger.warning(f"User not found with ID: {user_id}")
            raise NotFoundError("User", user_id)
        return user

    @staticmethod
    def update_profile(db: Session, user_id: UUID, profile_data: ProfileUpdateRequest) -> User:
        """Partial profile update; only fields present in the request change."""
        repo = MarketplaceRepository(db)
        user = UserService.get_user_by_id(db, user_id)
        fields = profile_data.model_dump(exclude_unset=True)

        username = fields.get("username")
        if username and username != user.username:
            existing = repo.get_user_by_username(username)
            if existing and existing.id != user.id:
                raise ValidationError("Username is already taken.", code=ErrorCode.USERNAME_TAKEN)

        try:
            repo.update_user(user, fields)
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValidationError("Username is already taken.", code=ErrorCode.USERNAME_TAKEN)
        except Exception:
            db.rollback()
            raise

        db.refresh(user)
        logger.info(f"Updated profile for user ID: {user_id}")
        return user
