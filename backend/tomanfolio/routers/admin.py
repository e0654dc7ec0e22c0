"""Admin router - user management."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from tomanfolio.database import get_db
from tomanfolio.dependencies.admin import get_admin_user
from tomanfolio.models.user import User
from tomanfolio.schemas.admin import AdminUserResponse
from tomanfolio.schemas.common import MessageResponse
from tomanfolio.services.repositories.user_repository import UserRepository
from tomanfolio.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=list[AdminUserResponse])
def list_users(
    admin: User = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """All accounts with their ledger sizes."""
    return [
        AdminUserResponse(
            id=user.id,
            username=user.username,
            display_name=user.display_name,
            is_admin=user.is_admin,
            created_at=user.created_at,
            transaction_count=count,
        )
        for user, count in UserRepository(db).list_with_transaction_counts()
    ]


@router.delete("/users/{username}", response_model=MessageResponse)
def delete_user(
    username: str,
    admin: User = Depends(get_admin_user),
    db: Session = Depends(get_db),
):
    """Delete an account and everything it owns."""
    if UserService.is_protected_admin(username):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The admin account cannot be deleted",
        )

    repo = UserRepository(db)
    user = repo.find_by_username(username)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User {username} not found",
        )

    repo.delete(user)
    logger.info(f"User {username} deleted by {admin.username}")
    return {"message": f"User {username} deleted"}
