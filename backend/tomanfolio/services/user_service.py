"""User account operations shared by routers and startup."""

import logging

from sqlalchemy.orm import Session

from tomanfolio.config import settings
from tomanfolio.models import User
from tomanfolio.services.auth_service import AuthService
from tomanfolio.services.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """Account bootstrap and protection rules."""

    @staticmethod
    def is_protected_admin(username: str) -> bool:
        """The configured admin account cannot be deleted."""
        return username.lower() == settings.admin_username.lower()

    @staticmethod
    def ensure_admin(db: Session) -> User:
        """Create the configured admin account, or repair its flag and password."""
        repo = UserRepository(db)
        user = repo.find_by_username(settings.admin_username)
        if user is None:
            user = repo.create(
                settings.admin_username,
                AuthService.hash_password(settings.admin_password),
                display_name="System admin",
                is_admin=True,
            )
            logger.info(f"Admin user created: {settings.admin_username}")
            return user

        if not user.is_admin or not AuthService.verify_password(
            settings.admin_password, user.password_hash
        ):
            user.is_admin = True
            user.password_hash = AuthService.hash_password(settings.admin_password)
            db.commit()
            logger.info(f"Admin user repaired: {settings.admin_username}")
        return user
