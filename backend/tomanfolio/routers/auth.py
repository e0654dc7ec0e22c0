"""Authentication router."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from tomanfolio.database import get_db
from tomanfolio.dependencies.auth import get_current_user
from tomanfolio.models.user import User
from tomanfolio.rate_limiter import limiter
from tomanfolio.schemas.auth import TokenResponse, UserInfo, UserLogin, UserRegister
from tomanfolio.services.auth_service import AuthService
from tomanfolio.services.repositories.exceptions import DuplicateError
from tomanfolio.services.repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


def _token_response(user: User) -> TokenResponse:
    return TokenResponse(
        access_token=AuthService.create_access_token(user.id),
        user=UserInfo.model_validate(user),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit("5/minute")
def register(request: Request, data: UserRegister, db: Session = Depends(get_db)) -> TokenResponse:
    """Register a new user and log them in."""
    try:
        user = UserRepository(db).create(
            data.username.lower(),
            AuthService.hash_password(data.password),
            display_name=data.display_name,
        )
    except DuplicateError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already taken",
        ) from None

    logger.info(f"User registered: {user.username}")
    return _token_response(user)


@router.post("/login", response_model=TokenResponse)
@limiter.limit("5/minute")
def login(request: Request, data: UserLogin, db: Session = Depends(get_db)) -> TokenResponse:
    """Exchange username and password for an access token."""
    user = UserRepository(db).find_by_username(data.username)

    # Verify against a dummy hash when the user is unknown to keep timing uniform
    password_hash = user.password_hash if user else AuthService.get_dummy_hash()
    if not AuthService.verify_password(data.password, password_hash) or user is None:
        logger.info(f"Failed login attempt for {data.username}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    return _token_response(user)


@router.get("/me", response_model=UserInfo)
def me(current_user: User = Depends(get_current_user)) -> User:
    """Return the authenticated user."""
    return current_user
