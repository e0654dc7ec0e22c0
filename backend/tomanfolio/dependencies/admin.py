"""Admin authentication dependency."""

from fastapi import Depends, HTTPException, status

from tomanfolio.dependencies.auth import get_current_user
from tomanfolio.models.user import User


def get_admin_user(current_user: User = Depends(get_current_user)) -> User:
    """Require admin privileges.

    Raises:
        HTTPException: 403 if the user is not an admin.
    """
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user
